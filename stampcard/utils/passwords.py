"""
Password hashing for admin accounts.

bcrypt with a per-hash random salt. verify_password never raises: empty
input and malformed hashes simply fail verification.
"""
import logging

import bcrypt
from flask import current_app, has_app_context

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
MIN_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6
# bcrypt only uses the first 72 bytes, and bcrypt>=5 rejects longer input
MAX_PASSWORD_BYTES = 72


def _rounds() -> int:
    rounds = DEFAULT_ROUNDS
    if has_app_context():
        rounds = current_app.config.get('BCRYPT_ROUNDS', DEFAULT_ROUNDS)
    return max(int(rounds), MIN_ROUNDS)


def hash_password(plaintext: str) -> str:
    """Hash a password with a fresh salt."""
    if not plaintext:
        raise ValidationError('Password is required', 'password')
    encoded = plaintext.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes', 'password')
    salt = bcrypt.gensalt(rounds=_rounds())
    return bcrypt.hashpw(encoded, salt).decode('utf-8')


def verify_password(plaintext: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    if not plaintext or not password_hash or not isinstance(plaintext, str):
        return False
    encoded = plaintext.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        # Could never have been hashed
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode('utf-8'))
    except ValueError:
        # Not a bcrypt hash
        logger.warning('Password verification against a malformed hash')
        return False


def validate_password(plaintext: str) -> None:
    """Enforce the password policy: minimum length, and bcrypt's 72-byte input limit."""
    min_length = MIN_PASSWORD_LENGTH
    if has_app_context():
        min_length = current_app.config.get('MIN_PASSWORD_LENGTH', MIN_PASSWORD_LENGTH)
    if not plaintext:
        raise ValidationError('Password is required', 'password')
    if not isinstance(plaintext, str):
        raise ValidationError('Password must be a string', 'password')
    if len(plaintext) < min_length:
        raise ValidationError(f'Password must be at least {min_length} characters', 'password')
    if len(plaintext.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes', 'password')
