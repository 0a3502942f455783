"""
Utility functions for the Flask application.
"""
from utils.errors import (
    ErrorKind,
    AppError,
    ValidationError,
    InvalidIdentifierError,
    AuthenticationError,
    InvalidCredentialsError,
    NotFoundError,
    ConflictError,
    ConfigurationError,
    ServerError
)

__all__ = [
    'ErrorKind',
    'AppError',
    'ValidationError',
    'InvalidIdentifierError',
    'AuthenticationError',
    'InvalidCredentialsError',
    'NotFoundError',
    'ConflictError',
    'ConfigurationError',
    'ServerError'
]
