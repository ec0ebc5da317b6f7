"""String and format rules.

Presence (Required, RequiredMultiple), length (MinStrLen, MaxStrLen, StrLen),
equality (StrMatch), character classes (AlphaNumeric, UTF8LetterNum),
tokens (Boolean) and structured strings (CreditCard, WebRequestURI, IsJSON,
Email).

Only the presence rules and StrMatch look at blank input; everything else
passes a blank field and leaves requiredness to Required.
"""
from __future__ import annotations

import json
import re
import unicodedata
from dataclasses import dataclass
from typing import Sequence
from urllib.parse import urlsplit

from formvalidator.core.errors import ConfigurationError, ErrorKind
from formvalidator.reference import ReferenceSets
from .base import Messages, Rule, RuleResult
from .checksums import luhn_valid
from .predicates import first_value


# ============================================================================
# Presence
# ============================================================================

@dataclass(frozen=True, slots=True)
class Required(Rule):
    """Exactly one non-empty value. More than one value is its own failure."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        if len(values) == 1 and values[0]: return RuleResult.valid()
        if len(values) > 1: return RuleResult.invalid(ErrorKind.MULTIPLE_ENTRIES, messages)
        return RuleResult.invalid(ErrorKind.REQUIRED, messages)


@dataclass(frozen=True, slots=True)
class RequiredMultiple(Rule):
    """At least one non-empty value (checkbox groups, multi-selects)."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        if any(values): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.REQUIRED, messages)


# ============================================================================
# Length and equality
# ============================================================================

@dataclass(frozen=True, slots=True)
class MinStrLen(Rule):
    min_length: int

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or len(field) >= self.min_length: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.STRING_MIN, messages, self.min_length)


@dataclass(frozen=True, slots=True)
class MaxStrLen(Rule):
    max_length: int

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or len(field) <= self.max_length: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.STRING_MAX, messages, self.max_length)


@dataclass(frozen=True, slots=True)
class StrLen(Rule):
    """Minimum then maximum length; reports only the first failure."""
    min_length: int
    max_length: int

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        if not (result := MinStrLen(self.min_length).validate(values, messages)).is_valid: return result
        return MaxStrLen(self.max_length).validate(values, messages)


@dataclass(frozen=True, slots=True)
class StrMatch(Rule):
    """First value must equal comparison exactly (password confirmation, ...)."""
    comparison: str

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        if first_value(values) == self.comparison: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.STRING_MATCHES, messages)


# ============================================================================
# Character classes and tokens
# ============================================================================

_ALPHA_NUM = re.compile(r"[a-zA-Z0-9]+")

_BOOLEAN_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True", "0", "f", "F", "FALSE", "false", "False"})


@dataclass(frozen=True, slots=True)
class AlphaNumeric(Rule):
    """ASCII letters and digits only."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or _ALPHA_NUM.fullmatch(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.ALPHA_NUM, messages)


@dataclass(frozen=True, slots=True)
class UTF8LetterNum(Rule):
    """Any Unicode letter or number; signs, punctuation and spaces fail."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if all(unicodedata.category(char)[0] in "LN" for char in field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.UTF8_LETTER_NUM, messages)


@dataclass(frozen=True, slots=True)
class Boolean(Rule):
    """Canonical true/false tokens only, no fuzzy coercion ("yes", "on" fail)."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or field in _BOOLEAN_TOKENS: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.BOOLEAN, messages)


# ============================================================================
# Structured strings
# ============================================================================

# Published test numbers (card networks / payment processor sandboxes).
# Zero strings are listed because they satisfy Luhn trivially.
TESTING_CARD_NUMBERS = frozenset({
    "4242424242424242",
    "4012888888881881",
    "4000056655665556",
    "5555555555554444",
    "5200828282828210",
    "5105105105105100",
    "378282246310005",
    "371449635398431",
    "6011111111111117",
    "6011000990139424",
    "30569309025904",
    "38520000023237",
    "3530111333300000",
    "3566002020360505",
    *("0" * length for length in range(13, 20)),
})

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class CreditCard(Rule):
    """Card number: 13-19 digits passing the Luhn checksum.

    Separators are not stripped; "4716 4615 8332 2103" fails.
    """
    allow_testing_numbers: bool = False

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()

        if not self.allow_testing_numbers and field in TESTING_CARD_NUMBERS:
            return RuleResult.invalid(ErrorKind.CREDIT_CARD, messages)
        if not 13 <= len(field) <= 19 or not _DIGITS.fullmatch(field):
            return RuleResult.invalid(ErrorKind.CREDIT_CARD, messages)
        if luhn_valid(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.CREDIT_CARD, messages)


_WEB_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class WebRequestURI(Rule):
    """Absolute website address: http/https scheme (any case) and a host."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()

        if any(char.isspace() or ord(char) < 0x20 or ord(char) == 0x7F for char in field):
            return RuleResult.invalid(ErrorKind.WEB_REQUEST_URI, messages)
        try:
            parsed = urlsplit(field)
            parsed.port  # raises on a malformed port
        except ValueError:
            return RuleResult.invalid(ErrorKind.WEB_REQUEST_URI, messages)

        if parsed.scheme.lower() not in _WEB_SCHEMES or not parsed.hostname:
            return RuleResult.invalid(ErrorKind.WEB_REQUEST_URI, messages)
        return RuleResult.valid()


def _reject_constant(token: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {token}")


@dataclass(frozen=True, slots=True)
class IsJSON(Rule):
    """Any JSON value: object, array, string, number, true/false or null."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        try:
            json.loads(field, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            return RuleResult.invalid(ErrorKind.JSON, messages)
        return RuleResult.valid()


# RFC 5322 flavoured address grammar: dot-atom or quoted-string local part,
# dot separated domain labels, alphabetic top-level label, optional trailing dot.
# A comment may surround the local part and the domain; comments do not nest.
_UCS = r"\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"
_ATEXT = r"[a-zA-Z0-9!#$%&'*+\-/=?^_`{|}~" + _UCS + r"]"
_DOT_ATOM = rf"{_ATEXT}+(?:\.{_ATEXT}+)*"
_FWS = r"(?:(?:[ \t]*\r\n)?[ \t]+)"
_QTEXT = r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f\x21\x23-\x5b\x5d-\x7e" + _UCS + r"]"
_QUOTED_PAIR = r"\\[\x01-\x09\x0b\x0c\x0d-\x7f" + _UCS + r"]"
_QUOTED_STRING = rf'"(?:{_FWS}?(?:{_QTEXT}|{_QUOTED_PAIR}))*{_FWS}?"'
_CTEXT = r"[\x21-\x27\x2a-\x5b\x5d-\x7e" + _UCS + r"]"
_COMMENT = rf"\((?:{_FWS}?(?:{_CTEXT}|{_QUOTED_PAIR}))*{_FWS}?\)"
_LABEL_EDGE = r"[a-zA-Z0-9" + _UCS + r"]"
_LABEL = rf"{_LABEL_EDGE}(?:[a-zA-Z0-9\-_~{_UCS}]*{_LABEL_EDGE})?"
_TLD_EDGE = r"[a-zA-Z" + _UCS + r"]"
_TLD = rf"{_TLD_EDGE}(?:[a-zA-Z0-9\-_~{_UCS}]*{_TLD_EDGE})?"
EMAIL_PATTERN = re.compile(
    rf"(?:{_COMMENT})?(?:{_DOT_ATOM}|{_QUOTED_STRING})(?:{_COMMENT})?"
    rf"@(?:{_COMMENT})?(?P<domain>(?:{_LABEL}\.)+{_TLD}\.?)(?:{_COMMENT})?"
)


@dataclass(frozen=True, slots=True)
class Email(Rule):
    """E-mail address, optionally refusing throw-away domains.

    With allow_disposable_domains=False the domain (comments excluded) is
    checked against the disposable lists of the given reference sets: an exact
    entry, or a wildcard entry matching the domain or any parent of it.
    """
    allow_disposable_domains: bool = True
    references: ReferenceSets | None = None

    def __post_init__(self):
        if not self.allow_disposable_domains and self.references is None:
            raise ConfigurationError("Email(allow_disposable_domains=False) needs reference sets",
                metadata={"rule": "Email"})

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()

        if (match := EMAIL_PATTERN.fullmatch(field)) is None:
            return RuleResult.invalid(ErrorKind.EMAIL, messages)
        if not self.allow_disposable_domains and self.references.is_disposable_domain(match["domain"]):
            return RuleResult.invalid(ErrorKind.EMAIL, messages)
        return RuleResult.valid()
