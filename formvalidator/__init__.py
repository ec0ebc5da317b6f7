"""Form Validation Rule Engine

Validates untrusted, multi-valued form input against a per-field chain of
rules, collects every failure per field and keeps error messages
translatable (raw template + arguments).

Key Features:
- Immutable, composable rules with one validate(values, messages) operation
- No chain short-circuit: every failing rule of a field is reported
- Checksum and format rules (Luhn, ISBN-10/13, UUID, dates, e-mail, URIs, JSON)
- Reference sets (country/currency codes, common passwords, disposable domains)
  loaded explicitly and shared read-only
- Optional blanking of failed fields, in place or on a copy
- FastAPI/Starlette form ingress

Usage:
    from formvalidator import (
        FormValidator, rule_chain, load_reference_sets,
        Required, AlphaNumeric, StrLen, Email, CountryCode,
    )

    references = load_reference_sets()
    validator = FormValidator({
        "FirstName": rule_chain(Required(), AlphaNumeric(), StrLen(2, 50)),
        "Email": rule_chain(Required(), Email(allow_disposable_domains=False, references=references)),
        "Country": rule_chain(Required(), CountryCode(references)),
    })

    report = validator.validate(form)
    if not report.is_valid:
        for field, errors in report.errors.items():
            for error in errors:
                print(field, error.render(gettext))
"""

from .core import (
    ErrorKind,
    FormError,
    FormValidatorError,
    ConfigurationError,
    ReferenceDataError,
    Settings,
    get_settings,
    configure_logging,
    get_logger,
)

from .reference import ReferenceSets, load_reference_file, load_reference_sets, parse_reference_csv

from .rules import (
    Rule,
    RuleResult,
    rule_chain,
    # Presence and strings
    Required,
    RequiredMultiple,
    MinStrLen,
    MaxStrLen,
    StrLen,
    StrMatch,
    AlphaNumeric,
    UTF8LetterNum,
    Boolean,
    # Structured strings
    CreditCard,
    WebRequestURI,
    IsJSON,
    Email,
    # Numbers
    Numeric,
    IsFloat,
    IntRange,
    FloatRange,
    Latitude,
    Longitude,
    # Dates and identifiers
    IsDate,
    IsTime,
    IsDateTime,
    IsUUID,
    ISBN,
    ISBN10,
    ISBN13,
    # Lists
    InListSingle,
    InListMultiple,
    NotInListSingle,
    CountryCode,
    CurrencyCode,
    NotCommonPassword,
    CSVEntryStrLen,
)

from .validator import DEFAULT_MESSAGES, FormValidator, ValidationReport

__all__ = [
    "ErrorKind", "FormError", "FormValidatorError", "ConfigurationError", "ReferenceDataError",
    "Settings", "get_settings", "configure_logging", "get_logger",
    "ReferenceSets", "load_reference_file", "load_reference_sets", "parse_reference_csv",
    "Rule", "RuleResult", "rule_chain",
    "Required", "RequiredMultiple", "MinStrLen", "MaxStrLen", "StrLen", "StrMatch",
    "AlphaNumeric", "UTF8LetterNum", "Boolean",
    "CreditCard", "WebRequestURI", "IsJSON", "Email",
    "Numeric", "IsFloat", "IntRange", "FloatRange", "Latitude", "Longitude",
    "IsDate", "IsTime", "IsDateTime", "IsUUID", "ISBN", "ISBN10", "ISBN13",
    "InListSingle", "InListMultiple", "NotInListSingle", "CountryCode", "CurrencyCode",
    "NotCommonPassword", "CSVEntryStrLen",
    "DEFAULT_MESSAGES", "FormValidator", "ValidationReport",
]
