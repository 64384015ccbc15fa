import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from models import Blog, Message, Project
from utils import data


class RateLimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True
    RATE_LIMIT_MAX_REQUESTS = 2


def _login_page(client):
    return client.post('/admin/login', data={'username': 'admin', 'password': 'admin123'})


@pytest.mark.parametrize('path', ['/', '/about', '/skills', '/resume', '/projects', '/blog', '/contact', '/health'])
def test_public_pages_render(client, path):
    r = client.get(path)
    assert r.status_code == 200


def test_security_headers(client):
    r = client.get('/')
    assert r.headers['X-Content-Type-Options'] == 'nosniff'
    assert r.headers['X-Frame-Options'] == 'DENY'


def test_home_shows_featured_and_published(client):
    data.create_project({'title': 'Shown project', 'description': 'd', 'featured': True})
    data.create_project({'title': 'Hidden project', 'description': 'd', 'featured': False})
    data.create_blog({'title': 'Public post', 'excerpt': 'e', 'content': 'c', 'published': True})
    data.create_blog({'title': 'Secret draft', 'excerpt': 'e', 'content': 'c', 'published': False})

    body = client.get('/').get_data(as_text=True)
    assert 'Shown project' in body
    assert 'Hidden project' not in body
    assert 'Public post' in body
    assert 'Secret draft' not in body


def test_blog_detail_hides_drafts(client):
    draft = data.create_blog({'title': 'Secret draft', 'excerpt': 'e', 'content': 'c', 'published': False})
    live = data.create_blog({'title': 'Live', 'excerpt': 'e', 'content': 'c', 'published': True})

    assert client.get(f'/blog/{draft.id}').status_code == 404
    assert client.get(f'/blog/{live.id}').status_code == 200


def test_project_detail(client):
    project = data.create_project({'title': 'Detail me', 'description': 'd'})
    r = client.get(f'/projects/{project.id}')
    assert r.status_code == 200
    assert 'Detail me' in r.get_data(as_text=True)
    assert client.get('/projects/missing').status_code == 404


def test_contact_form_success(client):
    r = client.post('/contact', data={
        'name': 'Sam', 'email': 'sam@example.com', 'subject': '', 'message': 'Hi there',
    })
    assert r.status_code == 302
    message = Message.query.one()
    assert message.subject is None
    assert message.read is False

    body = client.get('/contact').get_data(as_text=True)
    assert 'Message sent!' in body


def test_contact_form_keeps_input_on_error(client):
    r = client.post('/contact', data={
        'name': 'Sam', 'email': 'not-an-email', 'subject': 'Project idea', 'message': 'Keep this text',
    })
    assert r.status_code == 400
    body = r.get_data(as_text=True)
    assert 'value="Sam"' in body
    assert 'value="Project idea"' in body
    assert 'Keep this text' in body
    assert 'data-field="email"' in body
    assert Message.query.count() == 0


def test_admin_pages_redirect_to_login(client):
    for path in ['/admin/', '/admin/projects', '/admin/blogs', '/admin/messages']:
        r = client.get(path)
        assert r.status_code == 302
        assert '/admin/login' in r.headers['Location']


def test_admin_login_page_flow(client):
    r = _login_page(client)
    assert r.status_code == 302

    body = client.get('/admin/').get_data(as_text=True)
    assert 'card-projects' in body
    assert 'card-unreadMessages' in body

    r = client.post('/admin/logout')
    assert r.status_code == 302
    assert client.get('/admin/').status_code == 302


def test_admin_login_page_rejects_bad_password(client):
    r = client.post('/admin/login', data={'username': 'admin', 'password': 'nope'})
    assert r.status_code == 401
    assert 'value="admin"' in r.get_data(as_text=True)


def test_admin_login_redirects_to_next(client):
    r = client.post('/admin/login?next=/admin/messages', data={'username': 'admin', 'password': 'admin123'})
    assert r.headers['Location'].endswith('/admin/messages')

    client.post('/admin/logout')
    r = client.post('/admin/login?next=https://evil.example', data={'username': 'admin', 'password': 'admin123'})
    assert r.headers['Location'].endswith('/admin/')


def test_admin_creates_and_edits_project(client):
    _login_page(client)
    r = client.post('/admin/projects', data={
        'title': 'Panel project', 'description': 'From the form', 'technologies': 'Flask, HTMX',
        'imageUrl': '', 'githubUrl': '', 'liveUrl': '', 'featured': 'on',
    })
    assert r.status_code == 302
    project = Project.query.one()
    assert project.technologies == ['Flask', 'HTMX']
    assert project.featured is True

    r = client.post(f'/admin/projects/{project.id}/edit', data={
        'title': 'Renamed', 'description': 'From the form', 'technologies': 'Flask',
        'imageUrl': '', 'githubUrl': '', 'liveUrl': '',
    })
    assert r.status_code == 302
    db.session.expire_all()
    project = Project.query.one()
    assert project.title == 'Renamed'
    assert project.featured is False

    client.post(f'/admin/projects/{project.id}/delete')
    assert Project.query.count() == 0


def test_admin_project_form_keeps_input_on_error(client):
    _login_page(client)
    r = client.post('/admin/projects', data={
        'title': '', 'description': 'Keep me', 'technologies': 'Flask', 'featured': 'on',
    })
    assert r.status_code == 400
    body = r.get_data(as_text=True)
    assert 'Keep me' in body
    assert 'data-field="title"' in body
    assert Project.query.count() == 0


def test_admin_blog_and_message_pages(client):
    _login_page(client)
    r = client.post('/admin/blogs', data={
        'title': 'Panel post', 'excerpt': 'e', 'content': 'c', 'tags': 'a, b', 'readTime': '4',
    })
    assert r.status_code == 302
    blog = Blog.query.one()
    assert blog.published is False
    assert blog.read_time == 4

    message = data.create_message({'name': 'Sam', 'email': 'sam@example.com', 'message': 'Hello'})
    assert '(1 unread)' in client.get('/admin/messages').get_data(as_text=True)

    client.post(f'/admin/messages/{message.id}/read')
    assert '(0 unread)' in client.get('/admin/messages').get_data(as_text=True)

    client.post(f'/admin/messages/{message.id}/delete')
    assert Message.query.count() == 0


def test_contact_rate_limit():
    app = create_app(RateLimitedConfig)
    with app.app_context():
        client = app.test_client()
        payload = {'name': 'Sam', 'email': 'sam@example.com', 'message': 'Hi'}
        assert client.post('/api/messages', json=payload).status_code == 201
        assert client.post('/api/messages', json=payload).status_code == 201
        assert client.post('/api/messages', json=payload).status_code == 429

        # Login attempts are limited separately
        r = client.post('/api/admin/login', json={'username': 'admin', 'password': 'bad'})
        assert r.status_code == 401
        db.session.remove()
        db.drop_all()


class ProxiedConfig(RateLimitedConfig):
    PROXY_FIX_X_FOR = 1


def test_forwarded_header_does_not_bypass_rate_limit():
    app = create_app(RateLimitedConfig)
    with app.app_context():
        client = app.test_client()
        payload = {'name': 'Sam', 'email': 'sam@example.com', 'message': 'Hi'}
        for n, expected in enumerate([201, 201, 429]):
            r = client.post('/api/messages', json=payload, headers={'X-Forwarded-For': f'203.0.113.{n}'})
            assert r.status_code == expected
        db.session.remove()
        db.drop_all()


def test_forwarded_header_trusted_behind_proxy():
    app = create_app(ProxiedConfig)
    with app.app_context():
        client = app.test_client()
        payload = {'name': 'Sam', 'email': 'sam@example.com', 'message': 'Hi'}
        for n in range(3):
            r = client.post('/api/messages', json=payload, headers={'X-Forwarded-For': f'203.0.113.{n}'})
            assert r.status_code == 201
        assert len(app.extensions['rate_limiter']) == 3
        db.session.remove()
        db.drop_all()


def test_resume_download_link(app, client, monkeypatch):
    assert 'Download PDF Resume' not in client.get('/resume').get_data(as_text=True)

    monkeypatch.setitem(app.config['SITE_PROFILE'], 'resume_pdf', 'resume.pdf')
    body = client.get('/resume').get_data(as_text=True)
    assert 'href="/static/resume.pdf"' in body
    assert 'Download PDF Resume' in body


def test_oversized_contact_form_renders_html(app, client):
    app.config['MAX_CONTENT_LENGTH'] = 256
    r = client.post('/contact', data={
        'name': 'Sam', 'email': 'sam@example.com', 'message': 'x' * 1024,
    })
    assert r.status_code == 413
    assert r.mimetype == 'text/html'
    assert 'Request is too large' in r.get_data(as_text=True)
    assert Message.query.count() == 0


def test_oversized_api_body_returns_json(app, client, message_payload):
    app.config['MAX_CONTENT_LENGTH'] = 256
    r = client.post('/api/messages', json=dict(message_payload, message='x' * 1024))
    assert r.status_code == 413
    assert r.get_json() == {'message': 'Request body is too large'}
