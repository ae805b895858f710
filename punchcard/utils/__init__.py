"""
Utility modules for the punchcard back office.
"""
from .logging_config import setup_logging, get_logger
from .request_data import get_json_object
from .errors import (
    ErrorCode,
    error_response,
    exception_response,
    bad_request,
    unauthorized,
    not_found,
    internal_error
)
from .exceptions import (
    PunchcardError,
    ValidationError,
    DuplicateError,
    NotFoundError,
    CustomerNotFoundError,
    PunchcardNotFoundError,
    StaffNotFoundError,
    StateConflictError,
    PunchcardFullError,
    PunchcardNotFullError,
    AlreadyRedeemedError,
    SelfDeletionError,
    AuthenticationError,
    AuthorizationError,
    ShopifyError,
    ConfigurationError
)
