"""
Utility modules for Stampcard.
"""
from .logging_config import setup_logging
from .errors import (
    ErrorCode,
    error_response,
    bad_request,
    internal_error
)
from .exceptions import (
    StampcardError,
    ValidationError,
    AuthError,
    ForbiddenError,
    NotFoundError,
    EstablishmentNotFoundError,
    ConflictError,
    TransientInfraError
)
from .tokens import generate_token, generate_guid, is_guid
from .passwords import hash_password, verify_password, validate_password
