"""
SQLAlchemy database models.
"""
import uuid
from datetime import datetime
from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()


def generate_id():
    """Opaque record id: 32-char hex UUID."""
    return uuid.uuid4().hex


class User(db.Model):
    """User model for authentication."""
    __tablename__ = 'users'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    movies = db.relationship('Movie', backref='owner', lazy='dynamic',
                             cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set password."""
        self.password_hash = generate_password_hash(
            password, method=current_app.config['PASSWORD_HASH_METHOD']
        )

    def check_password(self, password):
        """Check password against hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<User {self.email}>'


class Movie(db.Model):
    """A movie on one user's personal list."""
    __tablename__ = 'movies'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    title = db.Column(db.String(255), nullable=False)
    director = db.Column(db.String(255))
    genre = db.Column(db.String(100), index=True)  # For genre filtering
    year = db.Column(db.Integer)
    rating = db.Column(db.Float, index=True)  # 0-10 scale, for rating filtering
    watched = db.Column(db.Boolean, nullable=False, default=False)
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Every lookup filters on both columns
    __table_args__ = (
        db.Index('idx_movie_id_user', 'id', 'user_id'),
        db.CheckConstraint('rating IS NULL OR (rating >= 0 AND rating <= 10)',
                           name='ck_movie_rating_range'),
    )

    def __repr__(self):
        return f'<Movie {self.title}>'
