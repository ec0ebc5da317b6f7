"""Validation Engine

A FormValidator maps field names to rule chains and runs one pass per
validate() call:

1. Look up the submitted values (case-sensitive; a missing field is an empty sequence).
2. Run every rule of the chain in order. A chain never stops early, so a field can
   report e.g. both an alpha_num and a string_min failure.
3. Keep each failure as a FormError (raw template + arguments) for translation.
4. With blank_on_error, replace a failed field's value with [""] so the form can be
   re-rendered without echoing bad input.

Every declared field is present in the result, with an empty list when it passed.
Malformed input never raises; only construction-time misconfiguration does.

Usage:
    validator = FormValidator({
        "Email": rule_chain(Required(), Email(), StrLen(6, 50)),
        "Age": rule_chain(Numeric(), IntRange(18, 100)),
    })
    report = validator.validate({"Email": ["joe@example.com"], "Age": ["17"]})
    report.is_valid                     # False
    report.errors["Age"][0].message     # "This field must be between 18 - 100."
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Sequence

from formvalidator.core.config import get_settings
from formvalidator.core.errors import ConfigurationError, FormError
from formvalidator.core.logging import validator_logger
from formvalidator.rules.base import Rule, rule_chain
from formvalidator.rules.predicates import as_values

log = validator_logger()

Form = MutableMapping[str, Any]

# Default templates. Entries not produced by a rule (account, captcha, ...) are kept
# here so an application's whole message catalog is translated in one place.
DEFAULT_MESSAGES: Mapping[str, str] = {
    "account": "The e-mail or password you entered is incorrect.",
    "alpha_num": "This field may only contain letters and numbers.",
    "boolean": "This field must be true or false.",
    "captcha": "The characters you entered did not match the word verification. Please retry.",
    "city": "We could not find that city. Please check your spelling.",
    "country_code": "Please select a valid country.",
    "credit_card": "Please enter a valid credit card number.",
    "csrf": "There was an error submitting the form. Please retry.",
    "currency_code": "Please enter a valid currency code.",
    "date": "This field must be in a date format (DD-MM-YYYY) [Ex: 31-12-1990]",
    "date_time": "This field must be in a date-time format (DD-MM-YYYY HH:MM:SS) [Ex: 31-12-1990 14:23:56]",
    "delimiter_min": "Entries must be at least %d characters long.",
    "delimiter_max": "Entries cannot be more than %d characters long.",
    "duplicate": "This field cannot contain duplicate entries.",
    "email": "Please enter a valid e-mail address.",
    "email_taken": "That e-mail address is already in use.",
    "float": "This field must be a floating point number. (Example: -10.50)",
    "float_range": "This field must be between %f - %f.",
    "in_list": "Please make a selection.",
    "int_range": "This field must be between %d - %d.",
    "isbn": "Please enter a valid ISBN.",
    "json": "This field must contain valid JSON (Javascript object notation).",
    "latitude": "Latitude must be between -90.0 degrees and 90.0 degrees.",
    "longitude": "Longitude must be between -180.0 degrees and 180.0 degrees.",
    "multiple_entries": "This field may only contain one entry.",
    "not_in_list": "This field contains an invalid entry.",
    "numeric": "This field must contain only numbers.",
    "required": "This field is required.",
    "slug": "This field must contain at least one letter or number.",
    "string_matches": "Fields did not match.",
    "string_max": "This field cannot be more than %d characters long.",
    "string_min": "This field must be at least %d characters long.",
    "time": "This field must be in a time format (HH:MM:SS) [Ex: 14:23:56]",
    "unselected_field": "Please select this field.",
    "utf8_letter_num": "This field may only contain letters and numbers (Character set: UTF8).",
    "uuid": "Please enter a valid UUID.",
    "weak_password": "Please use a stronger password.",
    "web_request_uri": "Please enter a valid Web URI.",
}


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of one validation pass."""
    is_valid: bool
    errors: dict[str, list[FormError]]
    form: Form = field(repr=False)

    @property
    def failed_fields(self) -> list[str]:
        return [name for name, errors in self.errors.items() if errors]

    def messages(self) -> dict[str, list[str]]:
        """Formatted messages per field."""
        return {name: [e.message for e in errors] for name, errors in self.errors.items()}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses. Submitted values are not included."""
        return {"valid": self.is_valid, "errors": {name: [e.to_dict() for e in errors] for name, errors in self.errors.items()}}


class FormValidator:
    """Runs declared rule chains against submitted forms.

    The rule map is fixed at construction. The message catalog can be replaced
    wholesale with set_messages() and blank_on_error toggled at any time.
    """

    __slots__ = ("_rules", "_messages", "blank_on_error")

    def __init__(self, rules: Mapping[str, Sequence[Rule]] | None, messages: Mapping[str, str] | None = None,
                 blank_on_error: bool | None = None):
        if rules is None:
            raise ConfigurationError("Rule map must not be None")
        if missing := [name for name, chain in rules.items() if chain is None]:
            raise ConfigurationError(f"Rule chain must not be None: {', '.join(missing)}", metadata={"fields": missing})
        self._rules: dict[str, tuple[Rule, ...]] = {name: rule_chain(*chain) for name, chain in rules.items()}
        self._messages: dict[str, str] = dict(DEFAULT_MESSAGES)
        if messages is not None: self.set_messages(messages)
        self.blank_on_error = get_settings().BLANK_ON_ERROR if blank_on_error is None else blank_on_error

    @property
    def rules(self) -> Mapping[str, tuple[Rule, ...]]:
        return dict(self._rules)

    @property
    def messages(self) -> Mapping[str, str]:
        return dict(self._messages)

    def set_messages(self, messages: Mapping[str, str] | None) -> None:
        """Replace the whole message catalog (e.g. with a translated one)."""
        if messages is None:
            raise ConfigurationError("Message catalog must not be None")
        self._messages = dict(messages)

    def get_error_message(self, kind: str) -> str:
        """Template for kind; empty string when the catalog has none."""
        return self._messages.get(str(kind), "")

    def validate_field(self, name: str, values: Sequence[str]) -> list[FormError]:
        """Run the chain declared for name; undeclared fields have no rules and no errors."""
        errors: list[FormError] = []
        for rule in self._rules.get(name, ()):
            if (error := rule.validate(values, self._messages).to_error()) is not None:
                errors.append(error)
        return errors

    def validate(self, form: Form, *, in_place: bool = True) -> ValidationReport:
        """Validate every declared field of form.

        With blank_on_error, failed fields are blanked in form itself (in_place=True)
        or in a copy returned as report.form, leaving the caller's form untouched.
        """
        target = form if in_place else {name: list(as_values(raw)) for name, raw in form.items()}
        all_errors: dict[str, list[FormError]] = {}

        for name in self._rules:
            errors = self.validate_field(name, as_values(form.get(name)))
            all_errors[name] = errors
            if errors and self.blank_on_error:
                target[name] = [""]

        report = ValidationReport(is_valid=not any(all_errors.values()), errors=all_errors, form=target)
        log.debug("form_validated", fields=len(all_errors), failed_fields=report.failed_fields,
            valid=report.is_valid, blanked=self.blank_on_error and not report.is_valid)
        return report
