"""
Input validation utilities.

Validation runs before every write and does not touch the database, so the
rules can be checked on their own.
"""
import math
import re
import uuid

from models import Movie, User
from utils.errors import ValidationError, InvalidIdentifierError


EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

# Range of the Integer column type on every supported database
MAX_INTEGER = 2 ** 31 - 1


def _max_length(column):
    """Declared length of a String column."""
    return column.type.length


def _clean_string(field, value, required=False, max_length=None):
    if value is None:
        if required:
            raise ValidationError(f'{field.capitalize()} is required')
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field.capitalize()} must be a string')
    value = value.strip()
    if required and not value:
        raise ValidationError(f'{field.capitalize()} is required')
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f'{field.capitalize()} cannot exceed {max_length} characters')
    return value


def _clean_number(field, value):
    if value is None:
        return None
    # bool is a subclass of int, but true/false is not a number here
    if isinstance(value, bool):
        raise ValidationError(f'{field.capitalize()} must be a number')
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f'{field.capitalize()} must be a number')
    if not isinstance(value, (int, float)):
        raise ValidationError(f'{field.capitalize()} must be a number')
    try:
        finite = math.isfinite(float(value))
    except OverflowError:
        finite = False
    if not finite:
        raise ValidationError(f'{field.capitalize()} must be a number')
    return value


def _title(value):
    return _clean_string('title', value, required=True,
                         max_length=_max_length(Movie.__table__.c.title))


def _director(value):
    return _clean_string('director', value,
                         max_length=_max_length(Movie.__table__.c.director))


def _genre(value):
    return _clean_string('genre', value,
                         max_length=_max_length(Movie.__table__.c.genre))


def _year(value):
    year = _clean_number('year', value)
    if year is None:
        return None
    if year != int(year):
        raise ValidationError('Year must be a whole number')
    if abs(year) > MAX_INTEGER:
        raise ValidationError('Year is out of range')
    return int(year)


def _rating(value):
    rating = _clean_number('rating', value)
    if rating is None:
        return None
    if not 0 <= rating <= 10:
        raise ValidationError('Rating must be between 0 and 10')
    return float(rating)


def _watched(value):
    if not isinstance(value, bool):
        raise ValidationError('Watched must be true or false')
    return value


# Rule table for movie writes: field name -> cleaner.
# Fields not listed here (including any owner reference) are never written.
MOVIE_FIELDS = {
    'title': _title,
    'director': _director,
    'genre': _genre,
    'year': _year,
    'rating': _rating,
    'watched': _watched,
}

MOVIE_DEFAULTS = {
    'watched': False,
}


class Validator:
    """Request validation helper."""

    @staticmethod
    def validate_movie(data, partial=False):
        """
        Validate a movie payload against the MOVIE_FIELDS rule table.

        Args:
            data: Mapping from the request body
            partial: If True, only the supplied fields are checked (merge-patch);
                otherwise required fields must be present and defaults apply

        Returns:
            dict: Cleaned values for known fields only

        Raises:
            ValidationError: If the payload or any field is invalid
        """
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')

        cleaned = {}
        for field, clean in MOVIE_FIELDS.items():
            if field in data:
                cleaned[field] = clean(data[field])
            elif not partial:
                if field in MOVIE_DEFAULTS:
                    cleaned[field] = MOVIE_DEFAULTS[field]
                else:
                    cleaned[field] = clean(None)

        return cleaned

    @staticmethod
    def parse_movie_filters(args):
        """
        Parse list filters from query parameters.

        Malformed values are ignored rather than rejected.

        Returns:
            dict: Any of 'genre' (str), 'watched' (bool), 'rating' (float)
        """
        filters = {}

        genre = (args.get('genre') or '').strip()
        if genre:
            filters['genre'] = genre

        watched = (args.get('watched') or '').strip()
        if watched:
            filters['watched'] = watched.lower() == 'true'

        rating = args.get('rating')
        if rating is not None and not isinstance(rating, bool):
            try:
                rating = float(rating)
            except (ValueError, TypeError):
                rating = None
            if rating is not None and math.isfinite(rating):
                filters['rating'] = rating

        return filters

    @staticmethod
    def validate_object_id(value):
        """
        Validate a record identifier.

        Returns:
            str: Canonical 32-char hex form of the id

        Raises:
            InvalidIdentifierError: If the value is not a well-formed id
        """
        if not isinstance(value, str):
            raise InvalidIdentifierError('Invalid movie id')
        try:
            return uuid.UUID(value.strip()).hex
        except ValueError:
            raise InvalidIdentifierError('Invalid movie id')

    @staticmethod
    def validate_email(email):
        """
        Validate email format.

        Args:
            email: Email address to validate

        Returns:
            str: Lowercase email address

        Raises:
            ValidationError: If email format is invalid
        """
        if not email or not isinstance(email, str) or not email.strip():
            raise ValidationError('Email is required')

        email = email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError('Invalid email format')
        if len(email) > _max_length(User.__table__.c.email):
            raise ValidationError('Email is too long')

        return email

    @staticmethod
    def validate_name(name):
        """Validate display name (non-empty, within the column length)."""
        return _clean_string('name', name, required=True,
                             max_length=_max_length(User.__table__.c.name))

    @staticmethod
    def validate_password(password):
        """
        Validate password presence.

        Returns:
            str: The password, unchanged

        Raises:
            ValidationError: If the password is missing or not a string
        """
        if not password or not isinstance(password, str):
            raise ValidationError('Password is required')

        return password
