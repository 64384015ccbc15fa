import pytest

from app import create_app
from config import TestingConfig
from extensions import db


ADMIN_CREDENTIALS = {'username': 'admin', 'password': 'admin123'}


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(app):
    client = app.test_client()
    r = client.post('/api/admin/login', json=ADMIN_CREDENTIALS)
    assert r.status_code == 200
    return client


@pytest.fixture()
def project_payload():
    return {
        'title': 'Weather Dashboard',
        'description': 'Realtime weather charts',
        'imageUrl': 'https://example.com/weather.png',
        'technologies': ['Python', 'Flask'],
        'githubUrl': 'https://github.com/example/weather',
        'liveUrl': '',
        'featured': True,
    }


@pytest.fixture()
def blog_payload():
    return {
        'title': 'Shipping a Flask app',
        'excerpt': 'Notes from deploying',
        'content': 'Long form content',
        'tags': 'flask, deploy',
        'published': True,
        'readTime': 7,
    }


@pytest.fixture()
def message_payload():
    return {
        'name': 'Jordan',
        'email': 'jordan@example.com',
        'subject': 'Hello',
        'message': 'I liked your weather dashboard.',
    }
