"""
Analytics Service

Stamp totals and per-customer breakdowns for one establishment, computed
from token_redemptions joined to the establishment's transactions.
"""
from typing import Dict, Any

from sqlalchemy import func

from ..extensions import db
from ..models import Establishment, Transaction, TokenRedemption
from ..utils.exceptions import EstablishmentNotFoundError


class AnalyticsService:
    """Tenant-scoped redemption analytics."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def get_analytics(self, establishment_id: str) -> Dict[str, Any]:
        """
        Aggregate redemptions for an establishment.

        Returns:
            {
                "totalStamps": 8,
                "customers": [{"guid": "...", "stampCount": 5}, ...],
                "uniqueCustomers": 2,
                "tokensIssued": 6,
                "completedRewards": 0
            }
            customers are ordered by stampCount descending, then guid.
        """
        establishment = self.session.get(Establishment, establishment_id)
        if establishment is None:
            raise EstablishmentNotFoundError()

        stamp_count = func.count(TokenRedemption.id).label('stamp_count')
        rows = self.session.query(
            TokenRedemption.customer_guid,
            stamp_count
        ).join(
            Transaction, TokenRedemption.transaction_id == Transaction.id
        ).filter(
            Transaction.establishment_id == establishment_id
        ).group_by(
            TokenRedemption.customer_guid
        ).order_by(
            stamp_count.desc(),
            TokenRedemption.customer_guid.asc()
        ).all()

        customers = [
            {'guid': guid, 'stampCount': int(count)}
            for guid, count in rows
        ]

        tokens_issued = self.session.query(func.count(Transaction.id)).filter(
            Transaction.establishment_id == establishment_id
        ).scalar() or 0

        grid_size = establishment.grid_size
        return {
            'totalStamps': sum(c['stampCount'] for c in customers),
            'customers': customers,
            'uniqueCustomers': len(customers),
            'tokensIssued': tokens_issued,
            'completedRewards': sum(c['stampCount'] // grid_size for c in customers),
        }
