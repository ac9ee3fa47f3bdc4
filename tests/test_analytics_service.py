"""
Tests for the Analytics Service.
"""
import pytest

from stampcard.services.analytics_service import AnalyticsService
from stampcard.services.redemption_service import RedemptionService
from stampcard.utils.exceptions import EstablishmentNotFoundError
from stampcard.utils.tokens import generate_guid


def give_stamps(establishment_id, customer_guid, count):
    service = RedemptionService()
    for _ in range(count):
        token = service.issue_token(establishment_id).token
        assert service.validate_and_redeem(token, customer_guid).valid


class TestGetAnalytics:

    def test_empty_establishment(self, app, sample_establishment):
        """Test analytics for an establishment with no redemptions."""
        analytics = AnalyticsService().get_analytics(sample_establishment.id)

        assert analytics['totalStamps'] == 0
        assert analytics['customers'] == []
        assert analytics['uniqueCustomers'] == 0

    def test_counts_and_ordering(self, app, sample_establishment):
        """Test per-customer counts ordered by stamps, then guid."""
        customer_a = generate_guid()
        customer_b = generate_guid()
        give_stamps(sample_establishment.id, customer_b, 3)
        give_stamps(sample_establishment.id, customer_a, 5)

        analytics = AnalyticsService().get_analytics(sample_establishment.id)

        assert analytics['totalStamps'] == 8
        assert analytics['customers'] == [
            {'guid': customer_a, 'stampCount': 5},
            {'guid': customer_b, 'stampCount': 3},
        ]
        assert analytics['uniqueCustomers'] == 2
        assert analytics['tokensIssued'] == 8

    def test_shared_token_counts_once_per_customer(self, app, sample_establishment, sample_transaction):
        """Test that one token redeemed by two customers counts once for each."""
        service = RedemptionService()
        for _ in range(3):
            service.validate_and_redeem(sample_transaction.token, generate_guid())

        analytics = AnalyticsService().get_analytics(sample_establishment.id)

        assert analytics['totalStamps'] == 3
        assert analytics['tokensIssued'] == 1
        assert all(c['stampCount'] == 1 for c in analytics['customers'])

    def test_scoped_to_establishment(self, app, sample_establishment, other_establishment):
        """Test that redemptions at other establishments are excluded."""
        customer = generate_guid()
        give_stamps(sample_establishment.id, customer, 2)
        give_stamps(other_establishment.id, customer, 4)

        analytics = AnalyticsService().get_analytics(sample_establishment.id)

        assert analytics['totalStamps'] == 2
        assert analytics['customers'] == [{'guid': customer, 'stampCount': 2}]

    def test_completed_rewards(self, app, other_establishment):
        """Test completed rewards are whole cards per customer."""
        # other_establishment has a grid of 4
        give_stamps(other_establishment.id, generate_guid(), 9)
        give_stamps(other_establishment.id, generate_guid(), 4)

        analytics = AnalyticsService().get_analytics(other_establishment.id)
        assert analytics['completedRewards'] == 3

    def test_unknown_establishment(self, app):
        """Test analytics for a non-existent establishment."""
        with pytest.raises(EstablishmentNotFoundError):
            AnalyticsService().get_analytics(generate_guid())
