"""
Request helpers shared by the API blueprints.
"""
from flask import request, current_app

from ..utils.exceptions import ValidationError


def get_json_body() -> dict:
    """Parsed JSON object body, or ValidationError for anything else."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def get_blob_store():
    return current_app.extensions['blob_store']
