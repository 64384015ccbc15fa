"""
Client Module - requests-based client for the portfolio API

Reads go through a QueryCache keyed by endpoint path. A mutation that
succeeds drops the cached paths it affects; a failed one leaves the cache
alone so views keep showing the last good data.
"""

import logging
import requests
from .cache import QueryCache
from .invalidation import invalidated_paths, CLEAR_ALL


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status, message, errors=None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.errors = errors or []

    @property
    def is_unauthorized(self):
        return self.status == 401


class PortfolioClient:
    def __init__(self, base_url, session=None, cache=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.cache = cache if cache is not None else QueryCache()
        self.timeout = timeout

    def _request(self, method, path, json=None):
        response = self.session.request(method, f"{self.base_url}{path}", json=json, timeout=self.timeout)
        try:
            body = response.json()
        except ValueError:
            body = None
        if not 200 <= response.status_code < 300:
            body = body if isinstance(body, dict) else {}
            raise ApiError(response.status_code, body.get('message', response.reason or 'Request failed'),
                           body.get('errors'))
        return body

    def query(self, path):
        """GET ``path``, served from the cache when present"""
        if path in self.cache:
            return self.cache.get(path)
        body = self._request('GET', path)
        self.cache.set(path, body)
        return body

    def mutate(self, method, path, json=None):
        """Run a mutation and invalidate the affected cache entries on success"""
        body = self._request(method, path, json=json)
        affected = invalidated_paths(method, path)
        if affected == CLEAR_ALL:
            self.cache.clear()
        else:
            self.cache.invalidate(affected)
        logger.debug(f"{method} {path} invalidated {list(affected)}")
        return body

    # Session

    def login(self, username, password):
        return self.mutate('POST', '/api/admin/login', {'username': username, 'password': password})

    def logout(self):
        return self.mutate('POST', '/api/admin/logout')

    def check(self):
        """Never cached: always asks the server"""
        return self._request('GET', '/api/admin/check').get('isAuthenticated', False)

    def stats(self):
        return self.query('/api/admin/stats')

    # Projects

    def projects(self):
        return self.query('/api/projects')

    def featured_projects(self):
        return self.query('/api/projects/featured')

    def project(self, project_id):
        return self.query(f'/api/projects/{project_id}')

    def create_project(self, fields):
        return self.mutate('POST', '/api/projects', fields)

    def update_project(self, project_id, fields):
        return self.mutate('PUT', f'/api/projects/{project_id}', fields)

    def delete_project(self, project_id):
        return self.mutate('DELETE', f'/api/projects/{project_id}')

    # Blogs

    def published_blogs(self):
        return self.query('/api/blogs')

    def all_blogs(self):
        return self.query('/api/blogs/all')

    def blog(self, blog_id):
        return self.query(f'/api/blogs/{blog_id}')

    def create_blog(self, fields):
        return self.mutate('POST', '/api/blogs', fields)

    def update_blog(self, blog_id, fields):
        return self.mutate('PUT', f'/api/blogs/{blog_id}', fields)

    def delete_blog(self, blog_id):
        return self.mutate('DELETE', f'/api/blogs/{blog_id}')

    # Messages

    def messages(self):
        return self.query('/api/messages')

    def send_message(self, fields):
        return self.mutate('POST', '/api/messages', fields)

    def mark_message_read(self, message_id):
        return self.mutate('PUT', f'/api/messages/{message_id}/read')

    def delete_message(self, message_id):
        return self.mutate('DELETE', f'/api/messages/{message_id}')
