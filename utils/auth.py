"""
Authentication decorator for protected routes.
Verifies the bearer token and passes the caller's Identity to the route.
"""
from functools import wraps
from flask import current_app, request

from services.auth_service import AuthService
from utils.errors import AuthenticationError


def bearer_token():
    """
    Extract the raw token from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing or not a bearer credential
    """
    header = request.headers.get(current_app.config['JWT_HEADER_NAME'])
    if not header:
        raise AuthenticationError('Missing authorization token')

    parts = header.split()
    if len(parts) != 2 or parts[0] != current_app.config['JWT_HEADER_TYPE']:
        raise AuthenticationError('Invalid authorization header')

    return parts[1]


def login_required(fn):
    """
    Decorator for routes requiring authentication.

    The wrapped route receives the caller as an `identity` keyword argument;
    nothing is attached to the request or to globals.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        AuthService.require_signing_secret()
        identity = AuthService.verify_token(bearer_token())
        return fn(*args, identity=identity, **kwargs)

    return wrapper
