import pytest

from app import create_app
from models import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns (user dict, auth headers)."""
    def _make_user(name='Ana', email='ana@x.com', password='secret1'):
        r = client.post('/api/auth/register', json={
            'name': name, 'email': email, 'password': password
        })
        assert r.status_code == 201
        user = r.get_json()['user']

        r = client.post('/api/auth/login', json={'email': email, 'password': password})
        assert r.status_code == 200
        headers = {'Authorization': f"Bearer {r.get_json()['token']}"}
        return user, headers
    return _make_user
