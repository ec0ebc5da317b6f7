"""Numeric, geographic, date/time, UUID and ISBN rules.

Parsing is locale-independent and strict: the whole value must match, no
surrounding whitespace, no digit separators. A blank field always passes.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from formvalidator.core.errors import ErrorKind
from .base import Messages, Rule, RuleResult
from .checksums import isbn10_valid, isbn13_valid
from .predicates import first_value

_NUMERIC = re.compile(r"[0-9]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Range checks happen in the pattern, not on a parsed float ("90.1" is rejected lexically)
_LATITUDE = re.compile(r"[-+]?(?:[1-8]?[0-9](?:\.[0-9]+)?|90(?:\.0+)?)")
_LONGITUDE = re.compile(r"[-+]?(?:180(?:\.0+)?|(?:1[0-7][0-9]|[1-9]?[0-9])(?:\.[0-9]+)?)")


def parse_float(text: str) -> float | None:
    """Decimal float literal to float; None when malformed or out of float range."""
    if not _FLOAT.fullmatch(text): return None
    value = float(text)
    return None if math.isinf(value) else value


def parse_int(text: str) -> int | None:
    """Signed decimal integer; leading zeros are ignored ("0018" is 18).

    None when malformed or longer than the interpreter converts (sys.get_int_max_str_digits).
    """
    if not _INTEGER.fullmatch(text): return None
    sign = "-" if text[0] == "-" else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    try:
        return int(sign + digits)
    except ValueError:
        return None


# ============================================================================
# Numbers
# ============================================================================

@dataclass(frozen=True, slots=True)
class Numeric(Rule):
    """Digits 0-9 only: no sign, no decimal point."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or _NUMERIC.fullmatch(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.NUMERIC, messages)


@dataclass(frozen=True, slots=True)
class IsFloat(Rule):
    """Signed decimal number with optional fraction and exponent (e.g. -10.50, 1e3)."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or parse_float(field) is not None: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.FLOAT, messages)


@dataclass(frozen=True, slots=True)
class IntRange(Rule):
    """Integer within [min_value, max_value]."""
    min_value: int
    max_value: int

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        number = parse_int(field)
        if number is not None and self.min_value <= number <= self.max_value: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.INT_RANGE, messages, self.min_value, self.max_value)


@dataclass(frozen=True, slots=True)
class FloatRange(Rule):
    """Float within [min_value, max_value]."""
    min_value: float
    max_value: float

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        number = parse_float(field)
        if number is not None and self.min_value <= number <= self.max_value: return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.FLOAT_RANGE, messages, self.min_value, self.max_value)


@dataclass(frozen=True, slots=True)
class Latitude(Rule):
    """Decimal degrees in [-90, 90]."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or _LATITUDE.fullmatch(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.LATITUDE, messages)


@dataclass(frozen=True, slots=True)
class Longitude(Rule):
    """Decimal degrees in [-180, 180]."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or _LONGITUDE.fullmatch(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.LONGITUDE, messages)


# ============================================================================
# Dates and times
# ============================================================================

# The layout pattern pins field widths and separators; strptime does the calendar work
# (29-02-1999 fails, 29-02-2000 passes, 24:00:00 fails).
_DATE_LAYOUT = (re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}"), "%d-%m-%Y")
_TIME_LAYOUT = (re.compile(r"[0-9]{2}:[0-9]{2}:[0-9]{2}"), "%H:%M:%S")
_DATE_TIME_LAYOUT = (re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2}"), "%d-%m-%Y %H:%M:%S")


def matches_layout(text: str, layout: tuple[re.Pattern, str]) -> bool:
    pattern, fmt = layout
    if not pattern.fullmatch(text): return False
    try:
        datetime.strptime(text, fmt)
    except ValueError:
        return False
    return True


@dataclass(frozen=True, slots=True)
class IsDate(Rule):
    """DD-MM-YYYY (31-12-1990)."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or matches_layout(field, _DATE_LAYOUT): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.DATE, messages)


@dataclass(frozen=True, slots=True)
class IsTime(Rule):
    """HH:MM:SS, 24-hour clock (14:23:56)."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or matches_layout(field, _TIME_LAYOUT): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.TIME, messages)


@dataclass(frozen=True, slots=True)
class IsDateTime(Rule):
    """DD-MM-YYYY HH:MM:SS, used for timestamps."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or matches_layout(field, _DATE_TIME_LAYOUT): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.DATE_TIME, messages)


# ============================================================================
# Identifiers
# ============================================================================

UUID_PATTERNS: dict[int | None, re.Pattern] = {
    3: re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-3[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}"),
    4: re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"),
    5: re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"),
    None: re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"),
}


@dataclass(frozen=True, slots=True)
class IsUUID(Rule):
    """Lower-case hyphenated UUID; version 3, 4 or 5 pins the version nibble, anything else accepts any."""
    version: int | None = None

    @property
    def pattern(self) -> re.Pattern:
        return UUID_PATTERNS.get(self.version, UUID_PATTERNS[None])

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or self.pattern.fullmatch(field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.UUID, messages)


_ISBN10 = re.compile(r"[0-9]{9}[0-9X]")
_ISBN13 = re.compile(r"[0-9]{13}")


def normalize_isbn(text: str) -> str:
    """Drop spaces and hyphens ("3 401 01319 X" -> "340101319X")."""
    return text.replace(" ", "").replace("-", "")


@dataclass(frozen=True, slots=True)
class ISBN10(Rule):

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        isbn = normalize_isbn(field)
        if _ISBN10.fullmatch(isbn) and isbn10_valid(isbn): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.ISBN, messages)


@dataclass(frozen=True, slots=True)
class ISBN13(Rule):

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        isbn = normalize_isbn(field)
        if _ISBN13.fullmatch(isbn) and isbn13_valid(isbn): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.ISBN, messages)


@dataclass(frozen=True, slots=True)
class ISBN(Rule):
    """ISBN-10 or ISBN-13, chosen by length once separators are removed."""

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()
        match len(normalize_isbn(field)):
            case 10: return ISBN10().validate(values, messages)
            case 13: return ISBN13().validate(values, messages)
        return RuleResult.invalid(ErrorKind.ISBN, messages)
