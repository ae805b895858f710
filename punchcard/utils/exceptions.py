"""
Custom exceptions for punchcard business logic.

Each exception carries a machine-readable code and the HTTP status it maps
to, so handlers can turn them into consistent error responses.
"""


class PunchcardError(Exception):
    """Base exception for all punchcard business logic errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "PUNCHCARD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(PunchcardError):
    """Invalid input data."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class DuplicateError(ValidationError):
    """Unique value already in use (e.g. customer email)."""

    def __init__(self, resource: str, field: str):
        super().__init__(f"{resource} with this {field} already exists", field)
        self.code = "DUPLICATE_ENTRY"


class NotFoundError(PunchcardError):
    """Resource not found."""

    status_code = 404

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with ID {identifier} not found"
        super().__init__(message, f"{resource.upper()}_NOT_FOUND")


class CustomerNotFoundError(NotFoundError):
    """Customer not found."""

    def __init__(self, identifier=None):
        super().__init__("Customer", identifier)


class PunchcardNotFoundError(NotFoundError):
    """Punchcard not found."""

    def __init__(self, identifier=None):
        super().__init__("Punchcard", identifier)


class StaffNotFoundError(NotFoundError):
    """Staff member not found."""

    def __init__(self, identifier=None):
        super().__init__("Staff", identifier)


class StateConflictError(PunchcardError):
    """Operation not allowed in the resource's current state."""

    status_code = 409

    def __init__(self, message: str, code: str = "STATE_CONFLICT"):
        super().__init__(message, code)


class PunchcardFullError(StateConflictError):
    """Punch requested on a card that has reached capacity."""

    def __init__(self, punchcard_id: int, max_punches: int):
        self.punchcard_id = punchcard_id
        super().__init__(
            f"Punchcard is full ({max_punches}/{max_punches}). Please redeem it first.",
            "PUNCHCARD_FULL"
        )


class PunchcardNotFullError(StateConflictError):
    """Redemption requested before the card reached capacity."""

    def __init__(self, punches: int, max_punches: int):
        self.punches = punches
        self.max_punches = max_punches
        super().__init__(
            f"Punchcard is not full. Has {punches}/{max_punches} punches.",
            "PUNCHCARD_NOT_FULL"
        )


class AlreadyRedeemedError(StateConflictError):
    """Redemption requested on a card that was already redeemed."""

    def __init__(self, punchcard_id: int):
        self.punchcard_id = punchcard_id
        super().__init__("Punchcard already redeemed", "ALREADY_REDEEMED")


class SelfDeletionError(StateConflictError):
    """Staff member tried to delete their own account."""

    def __init__(self):
        super().__init__("Cannot delete your own account", "SELF_DELETION")


class AuthenticationError(PunchcardError):
    """No valid credential on the request."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTH_REQUIRED")


class AuthorizationError(PunchcardError):
    """Authenticated, but not allowed to perform this operation."""

    status_code = 403

    def __init__(self, message: str = "Not authorized for this operation"):
        super().__init__(message, "PERMISSION_DENIED")


class ShopifyError(PunchcardError):
    """Error communicating with Shopify API."""

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: int = None,
        details=None,
        original_error: Exception = None
    ):
        self.upstream_status = upstream_status
        self.details = details
        self.original_error = original_error
        super().__init__(message, "SHOPIFY_ERROR")
        if upstream_status:
            self.status_code = upstream_status


class ConfigurationError(PunchcardError):
    """Application configuration error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")
