"""
Establishment API endpoints.

Signup, public configuration, admin-side configuration, logo upload,
analytics and admin-user management.
"""
import logging
from flask import Blueprint, request, jsonify, g, current_app

from ..middleware.session_auth import (
    require_establishment_access,
    require_superuser,
    set_session_cookie,
)
from ..models import DEFAULT_GRID_SIZE
from ..services.analytics_service import AnalyticsService
from ..services.establishment_service import EstablishmentService, EstablishmentUpdate
from ..services.logo_service import LogoService, MAX_LOGO_BYTES
from ..services.redemption_service import RedemptionService
from ..services.session_service import SessionService
from ..utils.exceptions import ValidationError
from .common import get_json_body, get_blob_store

logger = logging.getLogger(__name__)

establishments_bp = Blueprint('establishments', __name__)


# ==================== SIGNUP & LISTING ====================

@establishments_bp.route('/create', methods=['POST'])
def create_establishment():
    """
    Create an establishment and log its first admin in.

    Request body:
        name: string (required)
        email: string (required)
        password: string (required, min 6 chars)
        gridSize: int (optional, 4-20, default 9)

    Returns:
        {"id": "<establishment id>"} and sets the session_id cookie
    """
    data = get_json_body()
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')

    if not name or not email or not password:
        raise ValidationError('Name, email and password required')

    created = EstablishmentService().create_establishment(
        name=name,
        email=email,
        password=password,
        grid_size=data.get('gridSize', DEFAULT_GRID_SIZE),
    )
    establishment = created['establishment']
    admin_session = SessionService().create_session(created['admin'].id)

    response = jsonify({'id': establishment.id})
    return set_session_cookie(response, admin_session.id)


@establishments_bp.route('', methods=['GET'])
@require_superuser
def list_establishments():
    """All establishments, newest first. Superuser only."""
    establishments = EstablishmentService().list_establishments()
    return jsonify({'establishments': [e.to_dict() for e in establishments]})


# ==================== CONFIGURATION ====================

@establishments_bp.route('/<establishment_id>/config', methods=['GET'])
def get_config(establishment_id):
    """Public stamp card configuration."""
    establishment = EstablishmentService().get_establishment(establishment_id)
    return jsonify(establishment.to_config_dict())


@establishments_bp.route('/<establishment_id>/update', methods=['PUT'])
@require_establishment_access
def update_establishment(establishment_id):
    """
    Update establishment settings.

    Request body (all optional):
        name: string
        gridSize: int (4-20)
        rewardText: string | null
        rewardImageUrl: string | null
    """
    update = EstablishmentUpdate.from_payload(get_json_body())
    EstablishmentService().update_establishment(establishment_id, update)
    return jsonify({'success': True})


@establishments_bp.route('/<establishment_id>', methods=['DELETE'])
@require_superuser
def delete_establishment(establishment_id):
    """Delete an establishment and everything it owns. Superuser only."""
    EstablishmentService().delete_establishment(establishment_id)
    return jsonify({'success': True})


# ==================== LOGO ====================

@establishments_bp.route('/<establishment_id>/logo', methods=['PUT'])
@require_establishment_access
def upload_logo(establishment_id):
    """
    Upload a logo image.

    Accepts multipart/form-data with a 'file' field (image/*, max 250KB).

    Returns:
        {"logoUrl": "/uploads/logos/<id>/<name>"}
    """
    file = request.files.get('file')
    if file is None or not file.filename:
        raise ValidationError('No file provided', 'file')

    max_bytes = current_app.config.get('MAX_LOGO_BYTES', MAX_LOGO_BYTES)
    service = LogoService(get_blob_store(), max_bytes=max_bytes)
    # Read one byte past the limit so oversize files are detected without buffering them whole
    data = file.stream.read(service.max_bytes + 1)

    logo_url = service.upload_logo(establishment_id, file.filename, file.mimetype, data)
    return jsonify({'logoUrl': logo_url})


@establishments_bp.route('/<establishment_id>/logo', methods=['DELETE'])
@require_establishment_access
def delete_logo(establishment_id):
    """Remove the logo."""
    LogoService(get_blob_store()).delete_logo(establishment_id)
    return jsonify({'success': True})


# ==================== ANALYTICS ====================

@establishments_bp.route('/<establishment_id>/analytics', methods=['GET'])
@require_establishment_access
def get_analytics(establishment_id):
    """
    Stamp analytics.

    Returns:
        {"totalStamps": int, "customers": [{"guid": str, "stampCount": int}], ...}
    """
    return jsonify(AnalyticsService().get_analytics(establishment_id))


@establishments_bp.route('/<establishment_id>/customers/<customer_guid>/stamps', methods=['GET'])
def get_customer_stamps(establishment_id, customer_guid):
    """Stamp card state for one customer (public, keyed by device GUID)."""
    return jsonify(RedemptionService().get_customer_stamps(establishment_id, customer_guid))


# ==================== ADMIN USERS ====================

@establishments_bp.route('/<establishment_id>/admins', methods=['GET'])
@require_establishment_access
def list_admins(establishment_id):
    """Admins of the establishment, oldest first."""
    admins = EstablishmentService().list_admins(establishment_id)
    return jsonify([a.to_list_dict() for a in admins])


@establishments_bp.route('/<establishment_id>/admins', methods=['POST'])
@require_establishment_access
def add_admin(establishment_id):
    """
    Add an admin to the establishment.

    Request body:
        email: string (required)
        password: string (required, min 6 chars)
    """
    data = get_json_body()
    admin = EstablishmentService().add_admin(
        establishment_id,
        data.get('email'),
        data.get('password'),
    )
    return jsonify({'id': admin.id, 'email': admin.email}), 201


@establishments_bp.route('/<establishment_id>/admins/<user_id>', methods=['DELETE'])
@require_establishment_access
def remove_admin(establishment_id, user_id):
    """Remove an admin. Admins cannot remove themselves."""
    EstablishmentService().remove_admin(establishment_id, user_id, g.current_user)
    return jsonify({'success': True})
