"""
Standardized error handling for the JSON API.
"""
from enum import Enum

from flask import jsonify
from werkzeug.exceptions import HTTPException


class ErrorKind(Enum):
    """Every failure a service can report to the HTTP boundary."""
    VALIDATION = 'validation'
    INVALID_IDENTIFIER = 'invalid_identifier'
    INVALID_CREDENTIALS = 'invalid_credentials'
    UNAUTHENTICATED = 'unauthenticated'
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    CONFIGURATION = 'configuration'
    INTERNAL = 'internal'


# Must cover every ErrorKind
STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    """Base application error."""
    kind = ErrorKind.INTERNAL

    def __init__(self, message, payload=None):
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    @property
    def status_code(self):
        return STATUS_CODES[self.kind]

    def to_dict(self):
        """Convert error to dictionary for JSON responses."""
        rv = dict(self.payload)
        rv['message'] = self.message
        rv['success'] = False
        rv['error_type'] = self.kind.value
        return rv


class ValidationError(AppError):
    """Malformed or out-of-range input (400)."""
    kind = ErrorKind.VALIDATION


class InvalidIdentifierError(AppError):
    """Identifier is not well-formed for the store (400)."""
    kind = ErrorKind.INVALID_IDENTIFIER


class AuthenticationError(AppError):
    """Identity could not be established from the token (401)."""
    kind = ErrorKind.UNAUTHENTICATED


class InvalidCredentialsError(AuthenticationError):
    """Wrong email or password (401)."""
    kind = ErrorKind.INVALID_CREDENTIALS


class NotFoundError(AppError):
    """Resource not found, or not owned by the caller (404)."""
    kind = ErrorKind.NOT_FOUND


class ConflictError(AppError):
    """Resource conflict, e.g., duplicate email (409)."""
    kind = ErrorKind.CONFLICT


class ConfigurationError(AppError):
    """Server is missing required configuration (500)."""
    kind = ErrorKind.CONFIGURATION


class ServerError(AppError):
    """Internal server error (500)."""
    kind = ErrorKind.INTERNAL


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(AppError)
    def handle_app_error(error):
        """Handle custom application errors."""
        # Log errors appropriately based on status code
        if error.status_code >= 500:
            app.logger.error(f"Application error: {error.message}", extra={
                'extra_fields': {
                    'status_code': error.status_code,
                    'error_type': error.kind.value,
                    'payload': error.payload
                }
            })
        else:
            app.logger.warning(f"Client error: {error.message}", extra={
                'extra_fields': {
                    'status_code': error.status_code,
                    'error_type': error.kind.value,
                    'payload': error.payload
                }
            })

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found."""
        return jsonify({
            'success': False,
            'message': 'Resource not found',
            'error_type': ErrorKind.NOT_FOUND.value
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 Method Not Allowed."""
        return jsonify({
            'success': False,
            'message': 'Method not allowed',
            'error_type': 'method_not_allowed'
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error, including unhandled exceptions."""
        original = getattr(error, 'original_exception', None) or error
        app.logger.error("Internal server error", exc_info=original, extra={
            'extra_fields': {
                'error': str(original),
                'status_code': 500
            }
        })
        return jsonify({
            'success': False,
            'message': 'Internal server error',
            'error_type': ErrorKind.INTERNAL.value
        }), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        """Handle standard HTTP exceptions."""
        return jsonify({
            'success': False,
            'message': error.description or str(error),
            'error_type': error.name.lower().replace(' ', '_')
        }), error.code
