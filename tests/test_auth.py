from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token

from models import User
from services.auth_service import AuthService, Identity
from utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)


def test_register_strips_password(app):
    user = AuthService.register_user('Ana', 'Ana@X.com', 'secret1')
    assert user['email'] == 'ana@x.com'
    assert user['name'] == 'Ana'
    assert 'password' not in user
    assert 'password_hash' not in user

    stored = User.query.get(user['id'])
    assert stored.password_hash != 'secret1'
    assert stored.check_password('secret1')


def test_register_duplicate_email_conflicts(app):
    first = AuthService.register_user('Ana', 'ana@x.com', 'secret1')
    with pytest.raises(ConflictError):
        AuthService.register_user('Other', 'ANA@x.com', 'different')

    assert User.query.count() == 1
    stored = User.query.get(first['id'])
    assert stored.name == 'Ana'
    assert stored.check_password('secret1')


@pytest.mark.parametrize('name, email, password', [
    ('', 'ana@x.com', 'secret1'),
    ('Ana', '', 'secret1'),
    ('Ana', 'not-an-email', 'secret1'),
    ('Ana', 'ana@x.com', ''),
    (None, None, None),
])
def test_register_validation(app, name, email, password):
    with pytest.raises(ValidationError):
        AuthService.register_user(name, email, password)


def test_login_token_carries_user_id_and_name(app):
    user = AuthService.register_user('Ana', 'ana@x.com', 'secret1')
    token = AuthService.login_user('ana@x.com', 'secret1')

    claims = decode_token(token)
    assert claims['sub'] == user['id']
    assert claims['name'] == 'Ana'
    assert 'exp' in claims


def test_login_failures_are_indistinguishable(app):
    AuthService.register_user('Ana', 'ana@x.com', 'secret1')

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        AuthService.login_user('ana@x.com', 'wrong')
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        AuthService.login_user('nobody@x.com', 'secret1')

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.message == unknown_email.value.message


def test_login_requires_both_fields(app):
    with pytest.raises(ValidationError):
        AuthService.login_user('', 'secret1')
    with pytest.raises(ValidationError):
        AuthService.login_user('ana@x.com', None)


def test_login_without_secret_is_configuration_error(app):
    AuthService.register_user('Ana', 'ana@x.com', 'secret1')
    app.config['JWT_SECRET_KEY'] = None
    with pytest.raises(ConfigurationError):
        AuthService.login_user('ana@x.com', 'secret1')


def test_verify_token_round_trip(app):
    user = AuthService.register_user('Ana', 'ana@x.com', 'secret1')
    token = AuthService.login_user('ana@x.com', 'secret1')
    assert AuthService.verify_token(token) == Identity(id=user['id'], name='Ana')


@pytest.mark.parametrize('token', ['', 'garbage', 'a.b.c'])
def test_verify_rejects_malformed_tokens(app, token):
    with pytest.raises(AuthenticationError):
        AuthService.verify_token(token)


def test_verify_rejects_expired_token(app):
    token = create_access_token(identity='abc', expires_delta=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError, match='expired'):
        AuthService.verify_token(token)


def test_verify_rejects_foreign_signature(app):
    token = create_access_token(identity='abc')
    app.config['JWT_SECRET_KEY'] = 'another-secret-key-of-sufficient-length'
    with pytest.raises(AuthenticationError):
        AuthService.verify_token(token)


# HTTP

def test_register_endpoint(client):
    r = client.post('/api/auth/register', json={
        'name': 'Ana', 'email': 'ana@x.com', 'password': 'secret1'
    })
    assert r.status_code == 201
    body = r.get_json()
    assert body['success'] is True
    assert body['user']['email'] == 'ana@x.com'
    assert 'password' not in body['user']


def test_register_endpoint_conflict(client):
    payload = {'name': 'Ana', 'email': 'ana@x.com', 'password': 'secret1'}
    assert client.post('/api/auth/register', json=payload).status_code == 201
    r = client.post('/api/auth/register', json=payload)
    assert r.status_code == 409
    assert r.get_json()['error_type'] == 'conflict'


def test_register_endpoint_validation(client):
    r = client.post('/api/auth/register', json={'name': 'Ana', 'email': 'bad'})
    assert r.status_code == 400
    r = client.post('/api/auth/register', data='{not json', content_type='application/json')
    assert r.status_code == 400


def test_login_endpoint(client, make_user):
    make_user()
    r = client.post('/api/auth/login', json={'email': 'ana@x.com', 'password': 'nope'})
    assert r.status_code == 401
    wrong_password = r.get_json()

    r = client.post('/api/auth/login', json={'email': 'ghost@x.com', 'password': 'secret1'})
    assert r.status_code == 401
    assert r.get_json() == wrong_password

    r = client.post('/api/auth/login', json={'email': 'ana@x.com'})
    assert r.status_code == 400


def test_login_endpoint_without_secret(app, client, make_user):
    make_user()
    app.config['JWT_SECRET_KEY'] = None
    r = client.post('/api/auth/login', json={'email': 'ana@x.com', 'password': 'secret1'})
    assert r.status_code == 500
    assert r.get_json()['error_type'] == 'configuration'


def test_me_endpoint(client, make_user):
    user, headers = make_user()
    r = client.get('/api/auth/me', headers=headers)
    assert r.status_code == 200
    assert r.get_json()['user'] == {'id': user['id'], 'name': 'Ana'}


@pytest.mark.parametrize('headers', [
    {},
    {'Authorization': 'Bearer garbage'},
    {'Authorization': 'Token abc'},
    {'Authorization': 'Bearer'},
])
def test_me_rejects_missing_or_bad_token(client, headers):
    r = client.get('/api/auth/me', headers=headers)
    assert r.status_code == 401
    assert r.get_json()['error_type'] == 'unauthenticated'


def test_protected_route_rejects_expired_token(app, client):
    token = create_access_token(identity='abc', expires_delta=timedelta(seconds=-1))
    r = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Token has expired'


def test_protected_route_rejects_refresh_token(app, client):
    token = create_refresh_token(identity='abc')
    r = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 401
    with pytest.raises(AuthenticationError):
        AuthService.verify_token(token)


def test_protected_route_goes_through_verify_token(client, make_user, monkeypatch):
    _, headers = make_user()
    seen = []
    verify = AuthService.verify_token

    def recording_verify(token):
        seen.append(token)
        return verify(token)

    monkeypatch.setattr(AuthService, 'verify_token', staticmethod(recording_verify))
    r = client.get('/api/auth/me', headers=headers)
    assert r.status_code == 200
    assert seen == [headers['Authorization'].split()[1]]
