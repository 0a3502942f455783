"""
Authentication routes (register, login, token check).
"""
from flask import Blueprint

from services.auth_service import AuthService
from utils.auth import login_required
from utils.responses import json_body, success_response

bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@bp.route('/register', methods=['POST'])
def register():
    """Create an account. The response never includes the password."""
    data = json_body()

    user = AuthService.register_user(
        name=data.get('name'),
        email=data.get('email'),
        password=data.get('password')
    )

    return success_response(
        f"Account created successfully! Welcome, {user['name']}!",
        {'user': user},
        status_code=201
    )


@bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for a bearer token."""
    data = json_body()

    token = AuthService.login_user(
        email=data.get('email'),
        password=data.get('password')
    )

    return success_response('Login successful', {'token': token})


@bp.route('/me', methods=['GET'])
@login_required
def me(identity):
    """Return the identity carried by the bearer token."""
    return success_response('Authorized', {
        'user': {'id': identity.id, 'name': identity.name}
    })
