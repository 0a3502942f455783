"""
Flask application factory and initialization.
"""
import os
import logging
import json
from datetime import datetime
from flask import Flask, request, g
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_talisman import Talisman

from models import db
from config import config

# Initialize extensions
jwt = JWTManager()
talisman = Talisman()


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.utcnow().isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Add request context if available
        try:
            if hasattr(g, 'request_id'):
                log_entry['request_id'] = g.request_id
        except RuntimeError:
            # Outside of application context
            pass

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add extra fields
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


def setup_logging(app):
    """Setup structured JSON logging."""
    # Remove default handlers
    for handler in app.logger.handlers[:]:
        app.logger.removeHandler(handler)

    json_formatter = JSONFormatter()
    level = app.config.get('LOG_LEVEL', 'INFO')

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(json_formatter)
    console_handler.setLevel(level)
    app.logger.addHandler(console_handler)

    # File handler for production
    if not app.debug and not app.testing:
        log_dir = app.config['LOG_DIR']
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, 'app.log'))
        file_handler.setFormatter(json_formatter)
        file_handler.setLevel(logging.WARNING)
        app.logger.addHandler(file_handler)

    app.logger.setLevel(level)

    # Log application startup
    app.logger.info("Application started", extra={
        'extra_fields': {
            'debug': app.debug,
            'testing': app.testing
        }
    })


def log_request_response(app):
    """Log requests and responses."""
    @app.before_request
    def log_request():
        g.request_start_time = datetime.utcnow()
        g.request_id = request.headers.get('X-Request-ID') or \
            f"{datetime.utcnow().timestamp()}-{os.getpid()}"

        app.logger.info("Request started", extra={
            'extra_fields': {
                'method': request.method,
                'url': request.url,
                'remote_addr': request.remote_addr,
                'user_agent': request.headers.get('User-Agent'),
                'content_length': request.content_length,
            }
        })

    @app.after_request
    def log_response(response):
        duration = (datetime.utcnow() - g.request_start_time).total_seconds() * 1000

        app.logger.info("Request completed", extra={
            'extra_fields': {
                'status_code': response.status_code,
                'duration_ms': round(duration, 2),
                'content_length': response.content_length or 0,
            }
        })

        response.headers['X-Request-ID'] = g.request_id
        return response


def create_app(config_name='development'):
    """Application factory pattern."""
    app = Flask(__name__)
    config_class = config[config_name]
    app.config.from_object(config_class)
    config_class.init_app(app)

    # Setup structured logging
    setup_logging(app)
    log_request_response(app)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)

    # Security headers in production only
    if not app.debug and not app.testing:
        talisman.init_app(
            app,
            force_https=app.config.get('FORCE_HTTPS', True),
            content_security_policy={'default-src': "'none'"},
        )

    # Enable CORS for API access
    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
        }
    })

    # Register blueprints
    from routes import auth, movies, main
    app.register_blueprint(auth.bp)
    app.register_blueprint(movies.bp)
    app.register_blueprint(main.bp)

    # Register error handlers
    from utils.errors import register_error_handlers
    register_error_handlers(app)

    # Create tables if they don't exist
    with app.app_context():
        db.create_all()

    return app
