"""
Authentication service - handles user registration, login, and token verification.
"""
from collections import namedtuple

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import ExpiredSignatureError, PyJWTError
from sqlalchemy.exc import IntegrityError

from models import db, User
from utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)
from utils.validators import Validator


# Authenticated caller, as carried by the bearer token
Identity = namedtuple('Identity', ['id', 'name'])

INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'


class AuthService:
    """Authentication business logic."""

    @staticmethod
    def register_user(name, email, password):
        """
        Register a new user.

        Returns:
            dict: The created user, without any password field

        Raises:
            ValidationError: If a field is missing or malformed
            ConflictError: If the email is already registered
        """
        name = Validator.validate_name(name)
        email = Validator.validate_email(email)
        password = Validator.validate_password(password)

        # Check if user already exists
        if User.query.filter_by(email=email).first():
            raise ConflictError('Email already registered')

        user = User(name=name, email=email)
        user.set_password(password)

        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.session.rollback()
            raise ConflictError('Email already registered')

        current_app.logger.info("User registered", extra={
            'extra_fields': {'user_id': user.id}
        })

        return AuthService.user_to_dict(user)

    @staticmethod
    def login_user(email, password):
        """
        Authenticate user and return a signed access token.

        Unknown email and wrong password fail identically.

        Returns:
            str: Encoded JWT

        Raises:
            ValidationError: If email or password is missing
            InvalidCredentialsError: If the credentials do not match
            ConfigurationError: If no signing secret is configured
        """
        if not email or not isinstance(email, str) or not password or not isinstance(password, str):
            raise ValidationError('Email and password are required')

        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()

        if not user or not user.check_password(password):
            current_app.logger.warning("Login failed", extra={
                'extra_fields': {'reason': 'invalid_credentials'}
            })
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        AuthService.require_signing_secret()

        # Identity must be a string
        access_token = create_access_token(
            identity=str(user.id),
            additional_claims={'name': user.name}
        )

        current_app.logger.info("User logged in", extra={
            'extra_fields': {'user_id': user.id}
        })

        return access_token

    @staticmethod
    def verify_token(token):
        """
        Verify an encoded access token.

        Returns:
            Identity: The caller the token was issued to

        Raises:
            AuthenticationError: If the token is malformed, forged or expired
            ConfigurationError: If no signing secret is configured
        """
        AuthService.require_signing_secret()

        if not token or not isinstance(token, str):
            raise AuthenticationError('Missing authorization token')

        try:
            claims = decode_token(token)
        except ExpiredSignatureError:
            raise AuthenticationError('Token has expired')
        except (PyJWTError, JWTExtendedException) as e:
            current_app.logger.info(f'Token rejected: {type(e).__name__}')
            raise AuthenticationError('Invalid token')

        # Only access tokens are issued, but refuse anything else
        if claims.get('type', 'access') != 'access':
            raise AuthenticationError('Invalid token')

        return AuthService.identity_from_claims(claims)

    @staticmethod
    def identity_from_claims(claims):
        """Build an Identity from decoded JWT claims."""
        identity_claim = current_app.config.get('JWT_IDENTITY_CLAIM', 'sub')
        user_id = claims.get(identity_claim)
        if not user_id:
            raise AuthenticationError('Invalid token')
        return Identity(id=str(user_id), name=claims.get('name'))

    @staticmethod
    def require_signing_secret():
        """Fail the current request when the JWT secret is absent."""
        if not current_app.config.get('JWT_SECRET_KEY'):
            raise ConfigurationError('JWT secret key is not configured')

    @staticmethod
    def user_to_dict(user):
        """Convert user to dictionary for API responses."""
        return {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'created_at': user.created_at.isoformat() if user.created_at else None,
            'updated_at': user.updated_at.isoformat() if user.updated_at else None,
        }
