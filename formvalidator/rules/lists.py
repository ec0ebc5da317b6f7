"""List-membership rules.

Allow / deny lists are supplied by the programmer (radio buttons, selects,
checkbox groups) or come from the process-wide ReferenceSets. Matching is
exact and case-sensitive.
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Iterable, Sequence

from formvalidator.core.errors import ErrorKind
from formvalidator.reference import ReferenceSets
from .base import Messages, Rule, RuleResult
from .predicates import difference, first_value, has_duplicates, in_list, is_blank


def _options(options: Iterable[str] | None) -> frozenset[str]:
    return frozenset(options or ())


# ============================================================================
# Programmer-supplied lists
# ============================================================================

@dataclass(frozen=True, slots=True)
class InListSingle(Rule):
    """One value out of options (radio buttons, single selects)."""
    options: frozenset[str]

    def __init__(self, options: Iterable[str] | None = None):
        object.__setattr__(self, "options", _options(options))

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        if is_blank(values): return RuleResult.valid()
        if len(values) > 1: return RuleResult.invalid(ErrorKind.MULTIPLE_ENTRIES, messages)
        if in_list(self.options, values[0]): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.IN_LIST, messages)


@dataclass(frozen=True, slots=True)
class InListMultiple(Rule):
    """Any number of distinct values, each one out of options (checkboxes, multi-selects).

    Blank entries are ignored. Duplicates are reported before membership.
    """
    options: frozenset[str]

    def __init__(self, options: Iterable[str] | None = None):
        object.__setattr__(self, "options", _options(options))

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        submitted = [value for value in values if value]
        if not submitted: return RuleResult.valid()
        if has_duplicates(submitted): return RuleResult.invalid(ErrorKind.DUPLICATE, messages)
        if not difference(submitted, self.options): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.IN_LIST, messages)


@dataclass(frozen=True, slots=True)
class NotInListSingle(Rule):
    """First value must not be one of options."""
    options: frozenset[str]

    def __init__(self, options: Iterable[str] | None = None):
        object.__setattr__(self, "options", _options(options))

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or not in_list(self.options, field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.NOT_IN_LIST, messages)


# ============================================================================
# Reference lists
# ============================================================================

@dataclass(frozen=True, slots=True)
class CountryCode(Rule):
    """ISO-3166 alpha-2 code as stored in the reference list (lower case: "us", "gb")."""
    references: ReferenceSets

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or in_list(self.references.country_codes, field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.COUNTRY_CODE, messages)


@dataclass(frozen=True, slots=True)
class CurrencyCode(Rule):
    """ISO-4217 code as stored in the reference list ("usd", "eur")."""
    references: ReferenceSets

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or in_list(self.references.currency_codes, field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.CURRENCY_CODE, messages)


@dataclass(frozen=True, slots=True)
class NotCommonPassword(Rule):
    references: ReferenceSets

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field or not in_list(self.references.common_passwords, field): return RuleResult.valid()
        return RuleResult.invalid(ErrorKind.WEAK_PASSWORD, messages)


# ============================================================================
# Delimited entries
# ============================================================================

CSV_DELIMITERS = frozenset({",", "|"})


@dataclass(frozen=True, slots=True)
class CSVEntryStrLen(Rule):
    """Every entry of a delimited list ("tag1, tag2") between min_length and max_length characters.

    The first record is read with a quoted-field CSV parser; empty entries are
    skipped. Unsupported delimiters fall back to a comma.
    """
    delimiter: str
    min_length: int
    max_length: int

    def __post_init__(self):
        if self.delimiter not in CSV_DELIMITERS:
            object.__setattr__(self, "delimiter", ",")

    def _first_record(self, field: str) -> list[str] | None:
        # The reader's field size limit is process-wide; it is only ever raised
        if len(field) > csv.field_size_limit():
            csv.field_size_limit(len(field))
        try:
            reader = csv.reader(io.StringIO(field), delimiter=self.delimiter, strict=True)
            return next((row for row in reader if row), None)
        except csv.Error:
            return None

    def validate(self, values: Sequence[str], messages: Messages) -> RuleResult:
        field = first_value(values)
        if not field: return RuleResult.valid()

        if (entries := self._first_record(field)) is None:
            return RuleResult.invalid(ErrorKind.DELIMITER_MIN, messages, self.min_length)
        for entry in entries:
            if not entry: continue
            if len(entry) < self.min_length:
                return RuleResult.invalid(ErrorKind.DELIMITER_MIN, messages, self.min_length)
            if len(entry) > self.max_length:
                return RuleResult.invalid(ErrorKind.DELIMITER_MAX, messages, self.max_length)
        return RuleResult.valid()
