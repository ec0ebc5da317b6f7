"""Reference Sets

Immutable lookup lists consumed by the list-membership rules: ISO-3166
country codes, ISO-4217 currency codes, common passwords (8+ characters),
disposable e-mail domains and disposable wildcard domains.

Each list is a single-row delimited text resource. Loading happens once, at
process start, through an explicit call; the result is a frozen object handed
to the rules that need it, so tests can build one from synthetic lists.

Usage:
    references = load_reference_sets()          # paths from settings
    rules = {"Country": rule_chain(Required(), CountryCode(references))}

    # tests
    references = ReferenceSets.from_lists(country_codes=["us", "gb"])
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable

from formvalidator.core.config import Settings, get_settings
from formvalidator.core.errors import ReferenceDataError
from formvalidator.core.logging import reference_logger

log = reference_logger()


def _normalize_domain(domain: str) -> str:
    return domain.lower().rstrip(".")


@dataclass(frozen=True, slots=True)
class ReferenceSets:
    country_codes: frozenset[str] = frozenset()
    currency_codes: frozenset[str] = frozenset()
    common_passwords: frozenset[str] = frozenset()
    disposable_domains: frozenset[str] = frozenset()
    disposable_wildcards: frozenset[str] = frozenset()

    def __post_init__(self):
        # Domains compare case-insensitively, without a trailing root dot
        for name in ("disposable_domains", "disposable_wildcards"):
            object.__setattr__(self, name, frozenset(_normalize_domain(d) for d in getattr(self, name)))

    @classmethod
    def from_lists(cls, **lists: Iterable[str]) -> ReferenceSets:
        """Build from in-memory lists. Unknown names are a programming error."""
        known = {f.name for f in fields(cls)}
        if unknown := set(lists) - known:
            raise TypeError(f"Unknown reference sets: {', '.join(sorted(unknown))}")
        return cls(**{name: frozenset(values) for name, values in lists.items()})

    def is_disposable_domain(self, domain: str) -> bool:
        """Exact disposable domain, or the domain/any parent domain listed as a wildcard."""
        domain = _normalize_domain(domain)
        if domain in self.disposable_domains: return True
        labels = domain.split(".")
        return any(".".join(labels[i:]) in self.disposable_wildcards for i in range(len(labels)))


def parse_reference_csv(text: str, name: str = "reference") -> frozenset[str]:
    """Parse a single-row delimited list. Blank entries are dropped, entries are stripped.

    Raises ReferenceDataError on malformed CSV or more than one row.
    """
    try:
        rows = [row for row in csv.reader(io.StringIO(text), strict=True) if row]
    except csv.Error as e:
        raise ReferenceDataError(f"Reference set '{name}' is not valid CSV: {e}", metadata={"name": name}) from e

    if len(rows) > 1:
        raise ReferenceDataError(f"Reference set '{name}' must be a single row, found {len(rows)}",
            metadata={"name": name, "rows": len(rows)})
    if not rows:
        return frozenset()
    return frozenset(entry.strip() for entry in rows[0] if entry.strip())


def load_reference_file(path: str | Path, name: str = "reference") -> frozenset[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceDataError(f"Cannot read reference set '{name}' from {path}: {e}",
            metadata={"name": name, "path": str(path)}) from e
    return parse_reference_csv(text, name)


def load_reference_sets(settings: Settings | None = None) -> ReferenceSets:
    """Load every configured reference set. Unset paths give empty sets."""
    settings = settings or get_settings()
    loaded: dict[str, frozenset[str]] = {}
    for name, path in settings.reference_paths.items():
        if not path:
            log.debug("reference_set_skipped", name=name)
            continue
        loaded[name] = load_reference_file(path, name)
        log.info("reference_set_loaded", name=name, path=str(path), size=len(loaded[name]))
    return ReferenceSets(**loaded)
