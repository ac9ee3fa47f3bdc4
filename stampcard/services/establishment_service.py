"""
Establishment Service

Signup, configuration updates and admin-user management for establishments.
"""
import logging
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional, Dict, Any, List

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import (
    Establishment,
    AdminUser,
    ROLE_ESTABLISHMENT_ADMIN,
    ROLE_SUPERUSER,
    DEFAULT_GRID_SIZE,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
)
from ..utils.exceptions import (
    ValidationError,
    NotFoundError,
    EstablishmentNotFoundError,
    ConflictError,
)
from ..utils.passwords import hash_password, validate_password
from ..utils.tokens import generate_guid

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


class _Unset:
    """Marker for a field the caller did not send."""

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()


@dataclass
class EstablishmentUpdate:
    """
    Partial update of an establishment.

    Fields left as UNSET are not touched. Nullable fields accept None to
    clear the stored value.
    """
    name: Any = UNSET
    grid_size: Any = UNSET
    reward_text: Any = UNSET
    reward_image_url: Any = UNSET
    logo_url: Any = UNSET

    # Request body key -> field
    PAYLOAD_KEYS = {
        'name': 'name',
        'gridSize': 'grid_size',
        'rewardText': 'reward_text',
        'rewardImageUrl': 'reward_image_url',
    }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'EstablishmentUpdate':
        """Build an update from a JSON body, ignoring unknown keys."""
        values = {
            field: payload[key]
            for key, field in cls.PAYLOAD_KEYS.items()
            if key in payload
        }
        return cls(**values)

    def changes(self) -> Dict[str, Any]:
        """Validated {column: value} for every provided field."""
        result = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is UNSET:
                continue
            result[field.name] = _VALIDATORS[field.name](value)
        return result


def validate_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Name is required', 'name')
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f'Name must be at most {MAX_NAME_LENGTH} characters', 'name')
    return name


def validate_grid_size(grid_size) -> int:
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        raise ValidationError('Grid size must be an integer', 'grid_size')
    if not MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE:
        raise ValidationError(
            f'Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}',
            'grid_size'
        )
    return grid_size


def _optional_text(field_name):
    def validate(value) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValidationError(f'{field_name} must be a string', field_name)
        return value.strip() or None
    return validate


def validate_email(email) -> str:
    if not isinstance(email, str) or '@' not in email.strip():
        raise ValidationError('A valid email is required', 'email')
    return email.strip().lower()


_VALIDATORS = {
    'name': validate_name,
    'grid_size': validate_grid_size,
    'reward_text': _optional_text('reward_text'),
    'reward_image_url': _optional_text('reward_image_url'),
    'logo_url': _optional_text('logo_url'),
}


class EstablishmentService:
    """Establishments and their admin users."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # ==================== ESTABLISHMENTS ====================

    def create_establishment(
        self,
        name: str,
        email: str,
        password: str,
        grid_size: int = DEFAULT_GRID_SIZE,
    ) -> Dict[str, Any]:
        """
        Sign up a new establishment with its first admin.

        Returns:
            Dict with the establishment and its admin user

        Raises:
            ValidationError: bad name, email, password or grid size
            ConflictError: email already registered
        """
        name = validate_name(name)
        email = validate_email(email)
        validate_password(password)
        grid_size = validate_grid_size(DEFAULT_GRID_SIZE if grid_size is None else grid_size)

        self._ensure_email_available(email)

        establishment = Establishment(
            id=generate_guid(),
            name=name,
            grid_size=grid_size,
            created_at=datetime.utcnow()
        )
        admin = AdminUser(
            id=generate_guid(),
            email=email,
            password_hash=hash_password(password),
            role=ROLE_ESTABLISHMENT_ADMIN,
            establishment_id=establishment.id,
            created_at=datetime.utcnow()
        )
        self.session.add(establishment)
        self.session.add(admin)
        self._commit_unique(email)

        logger.info(f'Establishment created id={establishment.id} admin={admin.id}')
        return {'establishment': establishment, 'admin': admin}

    def get_establishment(self, establishment_id: str) -> Establishment:
        establishment = self.session.get(Establishment, establishment_id) if establishment_id else None
        if establishment is None:
            raise EstablishmentNotFoundError()
        return establishment

    def list_establishments(self) -> List[Establishment]:
        """All establishments, newest first."""
        return self.session.query(Establishment).order_by(
            Establishment.created_at.desc()
        ).all()

    def update_establishment(self, establishment_id: str, update: EstablishmentUpdate) -> Establishment:
        """Apply a partial update. An update with no fields is a no-op."""
        establishment = self.get_establishment(establishment_id)
        changes = update.changes()
        if not changes:
            return establishment

        for column, value in changes.items():
            setattr(establishment, column, value)
        self.session.commit()

        logger.info(f'Establishment updated id={establishment_id} fields={sorted(changes)}')
        return establishment

    def delete_establishment(self, establishment_id: str) -> None:
        """Remove an establishment and everything it owns."""
        establishment = self.get_establishment(establishment_id)
        self.session.delete(establishment)
        self.session.commit()
        logger.info(f'Establishment deleted id={establishment_id}')

    # ==================== ADMIN USERS ====================

    def list_admins(self, establishment_id: str) -> List[AdminUser]:
        """Admins of an establishment, oldest first."""
        return self.session.query(AdminUser).filter_by(
            establishment_id=establishment_id
        ).order_by(AdminUser.created_at.asc()).all()

    def add_admin(self, establishment_id: str, email: str, password: str) -> AdminUser:
        """
        Add an establishment_admin.

        Raises:
            ValidationError: bad email or password
            EstablishmentNotFoundError: establishment does not exist
            ConflictError: email already registered
        """
        if not email or not password:
            raise ValidationError('Email and password required')
        email = validate_email(email)
        validate_password(password)
        self.get_establishment(establishment_id)
        self._ensure_email_available(email)

        admin = AdminUser(
            id=generate_guid(),
            email=email,
            password_hash=hash_password(password),
            role=ROLE_ESTABLISHMENT_ADMIN,
            establishment_id=establishment_id,
            created_at=datetime.utcnow()
        )
        self.session.add(admin)
        self._commit_unique(email)

        logger.info(f'Admin added id={admin.id} establishment={establishment_id}')
        return admin

    def remove_admin(self, establishment_id: str, user_id: str, acting_user: AdminUser) -> None:
        """
        Remove an admin from an establishment.

        Raises:
            ValidationError: acting user tried to remove themself
            NotFoundError: no such admin in this establishment
        """
        if acting_user is not None and user_id == acting_user.id:
            raise ValidationError('Cannot remove yourself')

        target = self.session.get(AdminUser, user_id) if user_id else None
        if target is None or target.establishment_id != establishment_id:
            raise NotFoundError('Admin')

        self.session.delete(target)
        self.session.commit()
        logger.info(f'Admin removed id={user_id} establishment={establishment_id}')

    def create_superuser(self, email: str, password: str) -> AdminUser:
        """Create a superuser not tied to any establishment."""
        email = validate_email(email)
        validate_password(password)
        self._ensure_email_available(email)

        user = AdminUser(
            id=generate_guid(),
            email=email,
            password_hash=hash_password(password),
            role=ROLE_SUPERUSER,
            establishment_id=None,
            created_at=datetime.utcnow()
        )
        self.session.add(user)
        self._commit_unique(email)

        logger.info(f'Superuser created id={user.id}')
        return user

    # ==================== HELPERS ====================

    def _ensure_email_available(self, email: str) -> None:
        if self.session.query(AdminUser.id).filter_by(email=email).first() is not None:
            raise ConflictError('A user with this email already exists')

    def _commit_unique(self, email: str) -> None:
        """Commit, reporting a lost race on the email unique index as a conflict."""
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info(f'Duplicate admin email on insert: {email}')
            raise ConflictError('A user with this email already exists')
