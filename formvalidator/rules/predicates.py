"""Primitive predicates shared by the rule catalog."""
from __future__ import annotations

from typing import Any, Collection, Iterable, Sequence


def as_values(raw: Any) -> tuple[str, ...]:
    """Normalize one raw form entry to an ordered tuple of strings.

    Missing entries become an empty tuple and a bare string counts as a single value.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(raw)


def first_value(values: Sequence[str]) -> str:
    """Most rules only look at the first submitted value."""
    return values[0] if values else ""


def is_blank(values: Sequence[str]) -> bool:
    """No values at all, or a single empty one."""
    return not values or (len(values) == 1 and not values[0])


def in_list(options: Collection[str], value: str) -> bool:
    return value in options


def has_duplicates(values: Iterable[str]) -> bool:
    seen: set[str] = set()
    for value in values:
        if value in seen:
            return True
        seen.add(value)
    return False


def difference(left: Iterable[str], right: Collection[str]) -> list[str]:
    """Entries of left missing from right, in order. Extra entries in right are not reported."""
    return [value for value in left if value not in right]
