"""Error Taxonomy and Structured Form Errors

Two kinds of failure exist and they never mix:

- Field failures are data. Every rule failure becomes a FormError carrying the
  raw message template (printf-style flags intact, so it can be handed to a
  translator) plus its positional arguments.
- Misconfiguration is an exception. A missing rule map, a missing message
  catalog or an unreadable reference list raises a FormValidatorError subclass
  at construction / start-up time.

Usage:
    error = FormError("This field must be between %d - %d.", (18, 100), ErrorKind.INT_RANGE)
    error.message                       # "This field must be between 18 - 100."
    error.render(gettext)               # translate the raw template, then format
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class ErrorKind(str, Enum):
    """Identifiers of every failure a rule can report.

    The value doubles as the key into the engine's message catalog.
    """
    # Presence
    REQUIRED = "required"
    MULTIPLE_ENTRIES = "multiple_entries"

    # Strings
    ALPHA_NUM = "alpha_num"
    UTF8_LETTER_NUM = "utf8_letter_num"
    BOOLEAN = "boolean"
    STRING_MIN = "string_min"
    STRING_MAX = "string_max"
    STRING_MATCHES = "string_matches"

    # Numbers
    NUMERIC = "numeric"
    FLOAT = "float"
    INT_RANGE = "int_range"
    FLOAT_RANGE = "float_range"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"

    # Lists
    DUPLICATE = "duplicate"
    IN_LIST = "in_list"
    NOT_IN_LIST = "not_in_list"
    COUNTRY_CODE = "country_code"
    CURRENCY_CODE = "currency_code"
    WEAK_PASSWORD = "weak_password"
    DELIMITER_MIN = "delimiter_min"
    DELIMITER_MAX = "delimiter_max"

    # Structured formats
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    UUID = "uuid"
    ISBN = "isbn"
    CREDIT_CARD = "credit_card"
    WEB_REQUEST_URI = "web_request_uri"
    JSON = "json"
    EMAIL = "email"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FormError:
    """A single field failure, kept translatable.

    template is the raw catalog text (e.g. "Entries must be at least %d characters long.")
    and args its positional arguments. Nothing is formatted until asked for.
    """
    template: str
    args: tuple[Any, ...] = ()
    kind: str | None = None

    @property
    def message(self) -> str:
        return self.render()

    def render(self, translate: Callable[[str], str] | None = None) -> str:
        """Format the (optionally translated) template with the stored arguments.

        A custom template without matching placeholders degrades to the bare text.
        """
        text = translate(self.template) if translate else self.template
        if not self.args:
            return text
        try:
            return text % self.args
        except (TypeError, ValueError):
            return text

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {"kind": self.kind, "template": self.template, "args": list(self.args), "message": self.message}

    def __str__(self) -> str:
        return self.message


@dataclass
class FormValidatorError(Exception):
    """Base for misconfiguration errors raised outside a validation pass."""
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"type": type(self).__name__, "message": self.message, "metadata": self.metadata}}


@dataclass
class ConfigurationError(FormValidatorError):
    """Engine or rule chain constructed with inconsistent arguments."""


@dataclass
class ReferenceDataError(FormValidatorError):
    """A reference list could not be read or parsed. Fatal at start-up."""
