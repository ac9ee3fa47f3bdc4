"""
Database models for the Stampcard service.
Establishments, their admins and sessions, issued tokens and redemptions.
"""
from .establishment import (
    Establishment,
    DEFAULT_GRID_SIZE,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
)
from .admin_user import (
    AdminUser,
    AdminSession,
    ROLE_ESTABLISHMENT_ADMIN,
    ROLE_SUPERUSER,
    ADMIN_ROLES,
)
from .transaction import Transaction, TokenRedemption

__all__ = [
    'Establishment',
    'DEFAULT_GRID_SIZE',
    'MIN_GRID_SIZE',
    'MAX_GRID_SIZE',
    'AdminUser',
    'AdminSession',
    'ROLE_ESTABLISHMENT_ADMIN',
    'ROLE_SUPERUSER',
    'ADMIN_ROLES',
    'Transaction',
    'TokenRedemption',
]
