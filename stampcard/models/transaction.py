"""
Transaction (issued QR token) and TokenRedemption models.

A token is reusable across customers; the unique constraint on
(transaction_id, customer_guid) is what stops a single customer from
redeeming the same token twice.
"""
from datetime import datetime
from ..extensions import db
from ..utils.tokens import generate_guid


class Transaction(db.Model):
    """One issued QR code."""
    __tablename__ = 'transactions'

    id = db.Column(db.String(36), primary_key=True, default=generate_guid)
    token = db.Column(db.String(255), unique=True, nullable=False, index=True)
    establishment_id = db.Column(
        db.String(36),
        db.ForeignKey('establishments.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    redemptions = db.relationship(
        'TokenRedemption', backref='transaction', lazy='dynamic',
        cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Transaction {self.id}>'


class TokenRedemption(db.Model):
    """A customer's single redemption of a token."""
    __tablename__ = 'token_redemptions'

    id = db.Column(db.String(36), primary_key=True, default=generate_guid)
    transaction_id = db.Column(
        db.String(36),
        db.ForeignKey('transactions.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    customer_guid = db.Column(db.String(36), nullable=False, index=True)
    redeemed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint(
            'transaction_id', 'customer_guid',
            name='uq_redemption_transaction_customer'
        ),
    )

    def __repr__(self):
        return f'<TokenRedemption {self.transaction_id}:{self.customer_guid}>'
