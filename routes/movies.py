"""
Movie routes (create, list, detail, update, delete).
All routes are scoped to the authenticated user.
"""
from flask import Blueprint, jsonify, request

from services.movie_service import MovieService
from utils.auth import login_required
from utils.errors import NotFoundError
from utils.responses import json_body, no_content

bp = Blueprint('movies', __name__, url_prefix='/api/movies')

MOVIE_NOT_FOUND = 'Movie not found'


@bp.route('', methods=['POST'])
@login_required
def create(identity):
    """Add a movie to the caller's list."""
    movie = MovieService.create_movie(json_body(), identity.id)
    return jsonify(MovieService.movie_to_dict(movie)), 201


@bp.route('', methods=['GET'])
@login_required
def browse(identity):
    """List the caller's movies, filtered by ?genre=, ?watched= and ?rating=."""
    movies = MovieService.get_movies(identity.id, request.args)
    return jsonify([MovieService.movie_to_dict(m) for m in movies])


@bp.route('/<movie_id>', methods=['GET'])
@login_required
def detail(identity, movie_id):
    """Fetch one of the caller's movies."""
    movie = MovieService.get_movie(movie_id, identity.id)
    if not movie:
        raise NotFoundError(MOVIE_NOT_FOUND)
    return jsonify(MovieService.movie_to_dict(movie))


# PUT and PATCH share merge-patch semantics: omitted fields are left as they are
@bp.route('/<movie_id>', methods=['PUT', 'PATCH'])
@login_required
def update(identity, movie_id):
    """Update fields of one of the caller's movies."""
    movie = MovieService.update_movie(movie_id, json_body(), identity.id)
    if not movie:
        raise NotFoundError(MOVIE_NOT_FOUND)
    return jsonify(MovieService.movie_to_dict(movie))


@bp.route('/<movie_id>', methods=['DELETE'])
@login_required
def delete(identity, movie_id):
    """Remove one of the caller's movies."""
    if not MovieService.delete_movie(movie_id, identity.id):
        raise NotFoundError(MOVIE_NOT_FOUND)
    return no_content()
