"""
Redemption token and GUID generation.

Both use the OS CSPRNG. Tokens go into QR code URLs, GUIDs are used as
primary keys and as customer device identifiers.
"""
import secrets
import uuid

TOKEN_BYTES = 32


def generate_token() -> str:
    """Return a 64 character hex token (256 bits of randomness)."""
    return secrets.token_hex(TOKEN_BYTES)


def generate_guid() -> str:
    """Return a random version 4 UUID string."""
    return str(uuid.uuid4())


def is_guid(value) -> bool:
    """Check whether a value parses as a UUID."""
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
