"""Rule catalog.

Every rule is an immutable Rule with a single validate(values, messages)
operation; rule_chain() orders them for one field.
"""
from .base import Messages, Rule, RuleResult, rule_chain
from .predicates import as_values, difference, first_value, has_duplicates, in_list, is_blank
from .checksums import isbn10_valid, isbn13_check_digit, isbn13_valid, luhn_valid
from .strings import (
    Required,
    RequiredMultiple,
    MinStrLen,
    MaxStrLen,
    StrLen,
    StrMatch,
    AlphaNumeric,
    UTF8LetterNum,
    Boolean,
    CreditCard,
    WebRequestURI,
    IsJSON,
    Email,
    EMAIL_PATTERN,
    TESTING_CARD_NUMBERS,
)
from .numeric import (
    Numeric,
    IsFloat,
    IntRange,
    FloatRange,
    Latitude,
    Longitude,
    IsDate,
    IsTime,
    IsDateTime,
    IsUUID,
    ISBN,
    ISBN10,
    ISBN13,
    normalize_isbn,
    parse_float,
    parse_int,
)
from .lists import (
    InListSingle,
    InListMultiple,
    NotInListSingle,
    CountryCode,
    CurrencyCode,
    NotCommonPassword,
    CSVEntryStrLen,
)
