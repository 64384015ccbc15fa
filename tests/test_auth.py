from app import seed_admin
from extensions import db
from models import AdminUser
from utils.security import verify_password
from utils.sessions import SessionService

from conftest import ADMIN_CREDENTIALS


COOKIE = 'portfolio_sid'


def test_check_without_session(client):
    r = client.get('/api/admin/check')
    assert r.status_code == 200
    assert r.get_json() == {'isAuthenticated': False}


def test_login_check_logout(client):
    r = client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    assert r.status_code == 200
    assert r.get_json() == {'success': True, 'message': 'Login successful'}
    assert client.get_cookie(COOKIE) is not None

    assert client.get('/api/admin/check').get_json()['isAuthenticated'] is True

    r = client.post('/api/admin/logout')
    assert r.status_code == 200
    assert r.get_json()['success'] is True
    assert client.get('/api/admin/check').get_json()['isAuthenticated'] is False


def test_logout_without_session_succeeds(client):
    r = client.post('/api/admin/logout')
    assert r.status_code == 200
    assert r.get_json()['success'] is True


def test_bad_credentials_rejected(client):
    r = client.post('/api/admin/login', json={'username': 'admin', 'password': 'wrong'})
    assert r.status_code == 401
    assert r.get_json() == {'success': False, 'message': 'Invalid credentials'}
    assert client.get_cookie(COOKIE) is None

    r = client.post('/api/admin/login', json={'username': 'nobody', 'password': 'admin123'})
    assert r.status_code == 401


def test_login_payload_validated(client):
    r = client.post('/api/admin/login', json={'username': 'admin'})
    assert r.status_code == 400
    body = r.get_json()
    assert body['message'] == 'Invalid login data'
    assert any(e['field'] == 'password' for e in body['errors'])

    r = client.post('/api/admin/login', data='not json', content_type='text/plain')
    assert r.status_code == 400


def test_tampered_cookie_is_unauthenticated(client):
    client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    value = client.get_cookie(COOKIE).value
    client.set_cookie(COOKIE, 'x' + value)

    assert client.get('/api/admin/check').get_json()['isAuthenticated'] is False
    assert client.get('/api/messages').status_code == 401


def test_previous_cookie_rejected_after_logout(client):
    client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    old_value = client.get_cookie(COOKIE).value
    client.post('/api/admin/logout')

    client.set_cookie(COOKIE, old_value)
    assert client.get('/api/admin/check').get_json()['isAuthenticated'] is False


def test_relogin_replaces_session(app, client):
    client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    first = client.get_cookie(COOKIE).value
    client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    second = client.get_cookie(COOKIE).value

    assert first != second
    assert len(app.extensions['session_service']) == 1


def test_admin_seeded_with_hashed_password(app):
    admin = AdminUser.query.filter_by(username='admin').one()
    assert admin.password_hash != 'admin123'
    assert verify_password('admin123', admin.password_hash)


def test_seeding_is_idempotent(app):
    seed_admin(app)
    seed_admin(app)
    assert AdminUser.query.count() == 1


def test_create_admin_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', 'editor', '--password', 's3cret'])
    assert result.exit_code == 0
    assert 'Admin editor created.' in result.output

    result = runner.invoke(args=['create-admin', 'editor', '--password', 'changed'])
    assert result.exit_code == 0
    assert 'Password updated for admin editor.' in result.output

    db.session.expire_all()
    editor = AdminUser.query.filter_by(username='editor').one()
    assert verify_password('changed', editor.password_hash)
    assert AdminUser.query.count() == 2


def test_expired_session_rejected_on_protected_routes(app, client):
    now = [1_000_000.0]
    app.extensions['session_service'] = SessionService(clock=lambda: now[0])

    client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    assert client.get('/api/admin/stats').status_code == 200

    now[0] += 24 * 3600
    r = client.get('/api/admin/stats')
    assert r.status_code == 401
    assert r.get_json() == {'message': 'Unauthorized'}
    assert client.get('/api/admin/check').get_json()['isAuthenticated'] is False
    assert client.get('/admin/').status_code == 302
