"""
Movie service - handles the owner-scoped movie list.

Every query filters on the owner id together with the movie id, so a movie
belonging to someone else behaves exactly like a missing one.
"""
from flask import current_app

from models import db, Movie
from utils.validators import Validator


class MovieService:
    """Movie business logic."""

    @staticmethod
    def create_movie(data, user_id):
        """
        Create a movie on the user's list.

        Any owner field in `data` is ignored; the owner is always `user_id`.

        Raises:
            ValidationError: If the payload breaks a field rule
        """
        values = Validator.validate_movie(data)

        movie = Movie(user_id=user_id, **values)
        db.session.add(movie)
        db.session.commit()

        current_app.logger.info("Movie created", extra={
            'extra_fields': {'movie_id': movie.id, 'user_id': user_id}
        })
        return movie

    @staticmethod
    def get_movies(user_id, filters=None):
        """
        List the user's movies matching all supplied filters.

        Args:
            filters: Mapping of raw query parameters ('genre', 'watched', 'rating')

        Returns:
            list: Matching movies, empty if none match
        """
        parsed = Validator.parse_movie_filters(filters or {})

        query = Movie.query.filter(Movie.user_id == user_id)

        # Apply genre filter (case-insensitive substring)
        if 'genre' in parsed:
            query = query.filter(Movie.genre.icontains(parsed['genre'], autoescape=True))

        # Apply watched filter
        if 'watched' in parsed:
            query = query.filter(Movie.watched == parsed['watched'])

        # Apply rating filter; unrated movies never match
        if 'rating' in parsed:
            query = query.filter(Movie.rating >= parsed['rating'])

        current_app.logger.info("Listing movies", extra={
            'extra_fields': {'user_id': user_id, 'filters': parsed}
        })
        return query.all()

    @staticmethod
    def get_movie(movie_id, user_id):
        """
        Get one of the user's movies.

        Returns:
            Movie or None: None when the id is unknown or owned by another user

        Raises:
            InvalidIdentifierError: If movie_id is malformed
        """
        movie_id = Validator.validate_object_id(movie_id)

        movie = Movie.query.filter_by(id=movie_id, user_id=user_id).first()
        if not movie:
            current_app.logger.warning("Movie not found for user", extra={
                'extra_fields': {'movie_id': movie_id, 'user_id': user_id}
            })
        return movie

    @staticmethod
    def update_movie(movie_id, data, user_id):
        """
        Merge-patch one of the user's movies.

        Only fields present in `data` change. The update is a single
        statement scoped by (id, owner), then the row is read back.

        Returns:
            Movie or None: None when no owned movie matches

        Raises:
            InvalidIdentifierError: If movie_id is malformed
            ValidationError: If a supplied field breaks a field rule
        """
        movie_id = Validator.validate_object_id(movie_id)
        values = Validator.validate_movie(data, partial=True)

        query = Movie.query.filter_by(id=movie_id, user_id=user_id)

        # An empty patch only needs the scoped read
        if values and not query.update(values, synchronize_session=False):
            db.session.rollback()
            movie = None
        else:
            db.session.commit()
            movie = query.first()

        if not movie:
            current_app.logger.warning("Update failed: movie not found for user", extra={
                'extra_fields': {'movie_id': movie_id, 'user_id': user_id}
            })
            return None

        current_app.logger.info("Movie updated", extra={
            'extra_fields': {'movie_id': movie_id, 'user_id': user_id,
                             'fields': sorted(values)}
        })
        return movie

    @staticmethod
    def delete_movie(movie_id, user_id):
        """
        Delete one of the user's movies.

        Returns:
            bool: True if a movie was removed

        Raises:
            InvalidIdentifierError: If movie_id is malformed
        """
        movie_id = Validator.validate_object_id(movie_id)

        deleted = (
            Movie.query
            .filter_by(id=movie_id, user_id=user_id)
            .delete(synchronize_session=False)
        )
        db.session.commit()

        if not deleted:
            current_app.logger.warning("Delete failed: movie not found for user", extra={
                'extra_fields': {'movie_id': movie_id, 'user_id': user_id}
            })
            return False

        current_app.logger.info("Movie deleted", extra={
            'extra_fields': {'movie_id': movie_id, 'user_id': user_id}
        })
        return True

    @staticmethod
    def movie_to_dict(movie):
        """Convert Movie object to dictionary for API responses (no owner reference)."""
        return {
            'id': movie.id,
            'title': movie.title,
            'director': movie.director,
            'genre': movie.genre,
            'year': movie.year,
            'rating': float(movie.rating) if movie.rating is not None else None,
            'watched': bool(movie.watched),
            'created_at': movie.created_at.isoformat() if movie.created_at else None,
            'updated_at': movie.updated_at.isoformat() if movie.updated_at else None,
        }
