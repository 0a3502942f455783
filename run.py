"""
Run the Flask application.
"""
import os
from dotenv import load_dotenv
from app import create_app

# Load environment variables from .env file
load_dotenv()

app = create_app(os.getenv('FLASK_CONFIG') or 'development')

if not app.config.get('JWT_SECRET_KEY'):
    app.logger.warning("JWT_SECRET_KEY is not set; login and protected routes will fail")

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)), debug=app.debug, use_reloader=False)
