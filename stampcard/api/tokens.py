"""
Token API endpoints.

Issue QR tokens for an establishment and redeem them for customers.
"""
import logging
from flask import Blueprint, jsonify

from ..services.redemption_service import RedemptionService
from ..utils.errors import ErrorCode, bad_request
from ..utils.exceptions import ValidationError
from .common import get_json_body

logger = logging.getLogger(__name__)

tokens_bp = Blueprint('tokens', __name__)


@tokens_bp.route('/generate', methods=['POST'])
def generate_token():
    """
    Issue a new token.

    Request body:
        establishmentId: string (required)

    Returns:
        {"token": "<64 hex chars>"}
    """
    data = get_json_body()
    establishment_id = data.get('establishmentId')
    if not establishment_id or not isinstance(establishment_id, str):
        raise ValidationError('Establishment ID required', 'establishment_id')

    transaction = RedemptionService().issue_token(establishment_id)
    return jsonify({'token': transaction.token})


@tokens_bp.route('/validate', methods=['POST'])
def validate_token():
    """
    Redeem a token for a customer.

    Request body:
        token: string (required)
        customerGuid: string (required, must parse as a UUID; any other
            string is a 400 with code INVALID_CUSTOMER_GUID)

    Returns:
        200 {"success": true, "establishmentId": "..."}
        400 {"error": "Invalid token"} for an unknown token
        400 {"error": "You have already used this token", "alreadyRedeemed": true}
    """
    data = get_json_body()
    token = data.get('token')
    customer_guid = data.get('customerGuid')

    if not token or not customer_guid:
        raise ValidationError('Token and customer GUID required')

    result = RedemptionService().validate_and_redeem(token, customer_guid)

    if result.already_redeemed:
        return bad_request(
            'You have already used this token',
            ErrorCode.ALREADY_REDEEMED,
            alreadyRedeemed=True
        )
    if not result.valid:
        return bad_request('Invalid token', ErrorCode.INVALID_TOKEN)

    return jsonify({
        'success': True,
        'establishmentId': result.establishment_id
    })
