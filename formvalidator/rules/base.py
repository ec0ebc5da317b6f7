"""Rule Abstraction and Chain Composition

Every rule implements one capability:

    validate(values, messages) -> RuleResult

values is the ordered sequence of strings submitted under one field name and
messages the engine's catalog (error kind -> raw template). Rules are frozen
dataclasses: parameters are bound at construction and a rule never keeps or
mutates the values it is given, so one instance can be shared by any number of
chains and passes.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from formvalidator.core.errors import ConfigurationError, ErrorKind, FormError

Messages = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class RuleResult:
    """Outcome of one rule on one field."""
    is_valid: bool
    kind: str | None = None
    message: str = ""
    args: tuple[Any, ...] = ()

    @classmethod
    def valid(cls) -> RuleResult: return _VALID

    @classmethod
    def invalid(cls, kind: ErrorKind | str, messages: Messages, *args: Any) -> RuleResult:
        """Failure of kind, carrying the raw template from the catalog ("" when the catalog lacks it)."""
        key = str(kind)
        return cls(is_valid=False, kind=key, message=messages.get(key, ""), args=args)

    def to_error(self) -> FormError | None:
        if self.is_valid: return None
        return FormError(self.message, self.args, self.kind)


_VALID = RuleResult(is_valid=True)


class Rule(ABC):
    """Base class for every form rule."""

    @abstractmethod
    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        """Validate the values submitted for one field."""

    def __call__(self, values: Sequence[str], messages: Messages) -> RuleResult:
        return self.validate(values, messages)


def rule_chain(*rules: Rule) -> tuple[Rule, ...]:
    """Ordered rules for one field. Order is kept, every rule runs.

    Usage:
        rules = {
            "FirstName": rule_chain(Required(), AlphaNumeric(), StrLen(2, 50)),
            "Age": rule_chain(Numeric(), IntRange(18, 100)),
        }
    """
    for position, rule in enumerate(rules):
        if not isinstance(rule, Rule):
            raise ConfigurationError(f"Rule chain entry {position} is not a Rule: {type(rule).__name__}",
                metadata={"position": position, "type": type(rule).__name__})
    return tuple(rules)
