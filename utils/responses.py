"""
Response utilities for the JSON API.
"""
from flask import request, jsonify

from utils.errors import ValidationError


def json_body():
    """
    Return the request body as a dict.

    Raises:
        ValidationError: If the body is missing, malformed, or not a JSON object
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def success_response(message, data=None, status_code=200):
    """
    Unified success envelope.

    Returns {'success': True, 'message': '...', ...data}
    """
    response_data = {
        'success': True,
        'message': message
    }

    if data:
        response_data.update(data)

    return jsonify(response_data), status_code


def no_content():
    """Empty 204 response."""
    return '', 204
