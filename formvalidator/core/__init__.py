# Core module exports
from formvalidator.core.config import settings, get_settings, Settings
from formvalidator.core.errors import (
    ErrorKind,
    FormError,
    FormValidatorError,
    ConfigurationError,
    ReferenceDataError,
)
from formvalidator.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    unbind_context,
    validator_logger,
    reference_logger,
    http_logger,
)
