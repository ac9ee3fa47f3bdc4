"""
Custom exceptions for Stampcard business logic.

Each exception carries the HTTP status code it maps to at the request
boundary, so services can raise them without knowing about Flask.
"""


class StampcardError(Exception):
    """Base exception for all Stampcard business logic errors."""

    status_code = 500

    def __init__(self, message: str, code: str = "STAMPCARD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(StampcardError):
    """Missing or malformed input."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"INVALID_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)


class AuthError(StampcardError):
    """Missing or invalid credentials or session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", code: str = "AUTH_REQUIRED"):
        super().__init__(message, code)


class ForbiddenError(StampcardError):
    """Authenticated, but not allowed to act on this establishment."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, "PERMISSION_DENIED")


class NotFoundError(StampcardError):
    """Resource not found."""

    status_code = 404

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with ID {identifier} not found"
        super().__init__(message, f"{resource.upper().replace(' ', '_')}_NOT_FOUND")


class EstablishmentNotFoundError(NotFoundError):
    """Establishment not found."""

    def __init__(self, identifier=None):
        super().__init__("Establishment", identifier)


class ConflictError(StampcardError):
    """Resource already exists or a concurrent write won."""

    status_code = 409

    def __init__(self, message: str, code: str = "DUPLICATE_ENTRY"):
        super().__init__(message, code)


class TransientInfraError(StampcardError):
    """Pool exhaustion, lost connection or blob store failure. Safe to retry."""

    status_code = 500

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(message, "TRANSIENT_ERROR")
