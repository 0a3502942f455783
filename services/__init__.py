"""
Service layer for business logic.
Separates business logic from route handlers.
"""
from .auth_service import AuthService, Identity
from .movie_service import MovieService

__all__ = ['AuthService', 'Identity', 'MovieService']
