"""
Tests for the Token API endpoints.

- POST /api/tokens/generate
- POST /api/tokens/validate
"""
from stampcard.models import TokenRedemption
from stampcard.utils.tokens import generate_guid, generate_token


class TestGenerateToken:

    def test_generate_token(self, client, sample_establishment):
        """Test generating a token for an establishment."""
        response = client.post('/api/tokens/generate', json={
            'establishmentId': sample_establishment.id
        })

        assert response.status_code == 200
        assert len(response.get_json()['token']) == 64

    def test_generate_requires_establishment_id(self, client):
        """Test generating without an establishment id."""
        response = client.post('/api/tokens/generate', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Establishment ID required'

    def test_generate_unknown_establishment(self, client, app):
        """Test generating for a non-existent establishment."""
        response = client.post('/api/tokens/generate', json={
            'establishmentId': generate_guid()
        })
        assert response.status_code == 404


class TestValidateToken:

    def test_first_redemption_succeeds(self, client, sample_establishment, sample_transaction):
        """Test a customer's first redemption of a token."""
        response = client.post('/api/tokens/validate', json={
            'token': sample_transaction.token,
            'customerGuid': generate_guid()
        })

        assert response.status_code == 200
        assert response.get_json() == {
            'success': True,
            'establishmentId': sample_establishment.id
        }

    def test_second_redemption_by_same_customer(self, client, sample_transaction):
        """Test that a repeat redemption is rejected and not recorded."""
        payload = {'token': sample_transaction.token, 'customerGuid': generate_guid()}
        client.post('/api/tokens/validate', json=payload)

        response = client.post('/api/tokens/validate', json=payload)

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == 'You have already used this token'
        assert data['alreadyRedeemed'] is True
        assert data['code'] == 'ALREADY_REDEEMED'
        assert TokenRedemption.query.count() == 1

    def test_other_customer_can_redeem_same_token(self, client, sample_transaction):
        """Test that different customers can redeem the same token."""
        for _ in range(2):
            response = client.post('/api/tokens/validate', json={
                'token': sample_transaction.token,
                'customerGuid': generate_guid()
            })
            assert response.status_code == 200

    def test_unknown_token(self, client, sample_transaction):
        """Test redeeming a token that was never issued."""
        response = client.post('/api/tokens/validate', json={
            'token': generate_token(),
            'customerGuid': generate_guid()
        })

        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid token'
        assert TokenRedemption.query.count() == 0

    def test_missing_fields(self, client, app):
        """Test redeeming without a customer GUID."""
        response = client.post('/api/tokens/validate', json={'token': 'abc'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Token and customer GUID required'

    def test_malformed_customer_guid(self, client, sample_transaction):
        """Test redeeming with a customer GUID that is not a UUID."""
        response = client.post('/api/tokens/validate', json={
            'token': sample_transaction.token,
            'customerGuid': 'definitely-not-a-uuid'
        })
        assert response.status_code == 400
        assert response.get_json()['code'] == 'INVALID_CUSTOMER_GUID'
