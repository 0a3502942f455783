"""
Main routes (status, health).
"""
from flask import Blueprint, current_app

from models import db

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Service status."""
    return {'message': 'Movie list API is running'}, 200


@bp.route('/health')
def health():
    """Health check endpoint for Docker and cloud monitoring."""
    try:
        # Test database connection
        db.session.execute(db.text('SELECT 1'))
        return {
            'status': 'healthy',
            'database': 'connected'
        }, 200
    except Exception as e:
        current_app.logger.error("Health check failed", exc_info=True)
        return {
            'status': 'unhealthy',
            'database': 'disconnected',
            'error': str(e)
        }, 503
