"""
Establishment model - the tenant of the stamp card service.
"""
from datetime import datetime
from ..extensions import db
from ..utils.tokens import generate_guid

DEFAULT_GRID_SIZE = 9
MIN_GRID_SIZE = 4
MAX_GRID_SIZE = 20


class Establishment(db.Model):
    """
    A shop, cafe or venue that issues stamps.
    Global table - every other row hangs off an establishment.
    """
    __tablename__ = 'establishments'

    id = db.Column(db.String(36), primary_key=True, default=generate_guid)
    name = db.Column(db.String(255), nullable=False)

    # Stamps required to complete one reward card
    grid_size = db.Column(db.Integer, nullable=False, default=DEFAULT_GRID_SIZE)

    # Reward presentation
    reward_text = db.Column(db.Text)
    reward_image_url = db.Column(db.Text)
    logo_url = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships (removing an establishment removes everything it owns)
    admins = db.relationship(
        'AdminUser', backref='establishment', lazy='dynamic',
        cascade='all, delete-orphan'
    )
    transactions = db.relationship(
        'Transaction', backref='establishment', lazy='dynamic',
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        db.CheckConstraint(
            f'grid_size BETWEEN {MIN_GRID_SIZE} AND {MAX_GRID_SIZE}',
            name='ck_establishment_grid_size'
        ),
    )

    def __repr__(self):
        return f'<Establishment {self.name}>'

    def to_config_dict(self):
        """Public configuration, safe to expose to customers."""
        return {
            'id': self.id,
            'name': self.name,
            'gridSize': self.grid_size,
            'rewardText': self.reward_text,
            'rewardImageUrl': self.reward_image_url,
            'logoUrl': self.logo_url
        }

    def to_dict(self):
        data = self.to_config_dict()
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        return data
