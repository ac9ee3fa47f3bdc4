"""
Redemption Service

Issues QR tokens and redeems them for customers.

A (token, customer) pair moves from redeemable to already-redeemed exactly
once. The existence check below is only a fast path: two requests for the
same pair can both pass it, so the unique constraint on
token_redemptions(transaction_id, customer_guid) decides the winner and the
loser's IntegrityError is reported as already-redeemed.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Establishment, Transaction, TokenRedemption
from ..utils.exceptions import ValidationError, EstablishmentNotFoundError
from ..utils.tokens import generate_token, generate_guid, is_guid

logger = logging.getLogger(__name__)

STATUS_VALID = 'valid'
STATUS_INVALID = 'invalid'
STATUS_ALREADY_REDEEMED = 'already_redeemed'


@dataclass(frozen=True)
class RedemptionResult:
    """Outcome of a redemption attempt."""
    valid: bool
    establishment_id: Optional[str] = None
    already_redeemed: bool = False

    @property
    def status(self) -> str:
        if self.valid:
            return STATUS_VALID
        if self.already_redeemed:
            return STATUS_ALREADY_REDEEMED
        return STATUS_INVALID

    @classmethod
    def redeemed(cls, establishment_id: str) -> 'RedemptionResult':
        return cls(valid=True, establishment_id=establishment_id)

    @classmethod
    def invalid(cls) -> 'RedemptionResult':
        return cls(valid=False)

    @classmethod
    def duplicate(cls) -> 'RedemptionResult':
        return cls(valid=False, already_redeemed=True)


class RedemptionService:
    """Token issuance and per-customer redemption."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def issue_token(self, establishment_id: str) -> Transaction:
        """
        Create a new QR token for an establishment.

        Raises:
            ValidationError: establishment_id missing
            EstablishmentNotFoundError: establishment does not exist
        """
        if not establishment_id:
            raise ValidationError('Establishment ID required', 'establishment_id')

        if self.session.get(Establishment, establishment_id) is None:
            raise EstablishmentNotFoundError()

        transaction = Transaction(
            id=generate_guid(),
            token=generate_token(),
            establishment_id=establishment_id,
            created_at=datetime.utcnow()
        )
        self.session.add(transaction)
        self.session.commit()

        logger.info(f'Issued token transaction={transaction.id} establishment={establishment_id}')
        return transaction

    def validate_and_redeem(self, token: str, customer_guid: str) -> RedemptionResult:
        """
        Redeem a token for a customer.

        Args:
            token: Token from the scanned QR code
            customer_guid: Customer device identifier

        Returns:
            RedemptionResult - valid with the establishment id on first
            redemption, already_redeemed on every repeat, invalid for an
            unknown token (nothing is written in that case)

        Raises:
            ValidationError: token or customer_guid missing or malformed
        """
        if not token or not customer_guid:
            raise ValidationError('Token and customer GUID required')
        if not isinstance(token, str):
            raise ValidationError('Token must be a string', 'token')
        if not is_guid(customer_guid):
            raise ValidationError('Customer GUID must be a UUID', 'customer_guid')

        transaction = self._find_transaction(token)
        if transaction is None:
            logger.debug('Redemption attempted with unknown token')
            return RedemptionResult.invalid()

        transaction_id = transaction.id
        establishment_id = transaction.establishment_id

        if self._find_redemption(transaction_id, customer_guid) is not None:
            return RedemptionResult.duplicate()

        redemption = TokenRedemption(
            id=generate_guid(),
            transaction_id=transaction_id,
            customer_guid=customer_guid,
            redeemed_at=datetime.utcnow()
        )
        try:
            self.session.add(redemption)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info(
                f'Concurrent redemption lost to an earlier insert '
                f'transaction={transaction_id}'
            )
            return RedemptionResult.duplicate()

        logger.info(
            f'Token redeemed transaction={transaction_id} '
            f'establishment={establishment_id}'
        )
        return RedemptionResult.redeemed(establishment_id)

    def get_customer_stamps(self, establishment_id: str, customer_guid: str) -> Dict[str, Any]:
        """
        Stamp card state of one customer at one establishment.

        Raises:
            ValidationError: customer_guid malformed
            EstablishmentNotFoundError: establishment does not exist
        """
        if not is_guid(customer_guid):
            raise ValidationError('Customer GUID must be a UUID', 'customer_guid')

        establishment = self.session.get(Establishment, establishment_id)
        if establishment is None:
            raise EstablishmentNotFoundError()

        stamps = self.session.query(func.count(TokenRedemption.id)).join(
            Transaction, TokenRedemption.transaction_id == Transaction.id
        ).filter(
            Transaction.establishment_id == establishment_id,
            TokenRedemption.customer_guid == customer_guid
        ).scalar() or 0

        grid_size = establishment.grid_size
        return {
            'establishmentId': establishment_id,
            'customerGuid': customer_guid,
            'gridSize': grid_size,
            'totalStamps': stamps,
            'completedCards': stamps // grid_size,
            'currentStamps': stamps % grid_size,
        }

    def _find_transaction(self, token: str) -> Optional[Transaction]:
        return self.session.query(Transaction).filter_by(token=token).first()

    def _find_redemption(self, transaction_id: str, customer_guid: str):
        return self.session.query(TokenRedemption.id).filter_by(
            transaction_id=transaction_id,
            customer_guid=customer_guid
        ).first()
