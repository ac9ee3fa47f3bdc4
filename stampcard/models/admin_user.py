"""
AdminUser and AdminSession models.
"""
from datetime import datetime
from ..extensions import db
from ..utils.tokens import generate_guid

ROLE_ESTABLISHMENT_ADMIN = 'establishment_admin'
ROLE_SUPERUSER = 'superuser'
ADMIN_ROLES = (ROLE_ESTABLISHMENT_ADMIN, ROLE_SUPERUSER)


class AdminUser(db.Model):
    """
    Person who can manage establishments.

    An establishment_admin belongs to exactly one establishment; a superuser
    belongs to none and may act on all of them.
    """
    __tablename__ = 'admin_users'

    id = db.Column(db.String(36), primary_key=True, default=generate_guid)
    email = db.Column(db.String(255), unique=True, nullable=False)  # Stored lower-cased
    password_hash = db.Column(db.String(255), nullable=False)  # bcrypt hash
    role = db.Column(db.String(50), nullable=False)
    establishment_id = db.Column(
        db.String(36),
        db.ForeignKey('establishments.id', ondelete='CASCADE'),
        index=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    sessions = db.relationship(
        'AdminSession', backref='user', lazy='dynamic',
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.CheckConstraint(
            "role IN ('establishment_admin', 'superuser')",
            name='ck_admin_user_role'
        ),
        db.CheckConstraint(
            "(role = 'superuser' AND establishment_id IS NULL) OR "
            "(role = 'establishment_admin' AND establishment_id IS NOT NULL)",
            name='ck_admin_user_role_establishment'
        ),
    )

    def __repr__(self):
        return f'<AdminUser {self.email}>'

    @property
    def is_superuser(self) -> bool:
        return self.role == ROLE_SUPERUSER

    def can_access(self, establishment_id: str) -> bool:
        """Superusers reach every establishment, admins only their own."""
        if self.is_superuser:
            return True
        return self.establishment_id is not None and self.establishment_id == establishment_id

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'establishmentId': self.establishment_id
        }

    def to_list_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'role': self.role,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }


class AdminSession(db.Model):
    """
    Cookie-backed login session.
    Expired rows are ignored by lookups and purged by `flask admin purge-sessions`.
    """
    __tablename__ = 'sessions'

    id = db.Column(db.String(36), primary_key=True, default=generate_guid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey('admin_users.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<AdminSession {self.id[:8]}...>'
