"""
Security Module - Security utilities including IP tracking, rate limiting,
password hashing and the signed admin session cookie
"""

import time
from flask import request, current_app, g
from itsdangerous import BadSignature, Signer
from werkzeug.security import generate_password_hash, check_password_hash


SESSION_COOKIE_SALT = 'admin-session'


class RateLimiter:
    """Sliding-window request counter keyed by client IP and endpoint"""

    def __init__(self, max_requests=10, window=60, clock=time.time):
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._requests = {}  # {ip: [(timestamp, endpoint), ...]}
        self._last_sweep = clock()

    def _recent(self, client_ip, current_time):
        return [
            (ts, ep) for ts, ep in self._requests.get(client_ip, [])
            if current_time - ts < self.window
        ]

    def sweep(self):
        """Forget clients with no requests inside the window; returns how many"""
        current_time = self._clock()
        stale = []
        for client_ip in list(self._requests):
            recent = self._recent(client_ip, current_time)
            if recent:
                self._requests[client_ip] = recent
            else:
                stale.append(client_ip)
        for client_ip in stale:
            del self._requests[client_ip]
        self._last_sweep = current_time
        return len(stale)

    def hit(self, client_ip, endpoint):
        """Record a request; returns False when the limit is already reached"""
        current_time = self._clock()
        if current_time - self._last_sweep >= self.window:
            self.sweep()

        # Clean old requests outside the window
        recent = self._recent(client_ip, current_time)
        endpoint_requests = [ep for ts, ep in recent if ep == endpoint]
        if len(endpoint_requests) >= self.max_requests:
            self._requests[client_ip] = recent
            return False

        recent.append((current_time, endpoint))
        self._requests[client_ip] = recent
        return True

    def __len__(self):
        return len(self._requests)

    def reset(self):
        self._requests.clear()


def get_client_ip():
    """Get real client IP address.

    Forwarded headers are only trusted through ProxyFix, which the app
    installs when ``PROXY_FIX_X_FOR`` is set.
    """
    return request.remote_addr or 'unknown'


def check_rate_limit(endpoint):
    """Check if the current client is within the rate limit for ``endpoint``"""
    if not current_app.config.get('RATELIMIT_ENABLED', True):
        return True
    limiter = current_app.extensions['rate_limiter']
    allowed = limiter.hit(get_client_ip(), endpoint)
    if not allowed:
        current_app.logger.warning(f"Rate limit exceeded for {get_client_ip()} on {endpoint}")
    return allowed


def hash_password(password):
    """Salted password hash for storage in admin_users"""
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


def get_session_service():
    return current_app.extensions['session_service']


def _signer():
    return Signer(current_app.config['SECRET_KEY'], salt=SESSION_COOKIE_SALT)


def read_session_cookie():
    """Return the session id carried by the request cookie, or None if absent or tampered"""
    value = request.cookies.get(current_app.config['ADMIN_SESSION_COOKIE_NAME'])
    if not value:
        return None
    try:
        return _signer().unsign(value).decode('utf-8')
    except BadSignature:
        current_app.logger.warning(f"Rejected tampered session cookie from {get_client_ip()}")
        return None


def set_session_cookie(response, record):
    config = current_app.config
    response.set_cookie(
        config['ADMIN_SESSION_COOKIE_NAME'],
        _signer().sign(record.sid).decode('utf-8'),
        max_age=int(config['ADMIN_SESSION_LIFETIME'].total_seconds()),
        httponly=True,
        secure=config.get('SESSION_COOKIE_SECURE', False),
        samesite=config.get('SESSION_COOKIE_SAMESITE', 'Lax'),
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(
        current_app.config['ADMIN_SESSION_COOKIE_NAME'],
        httponly=True,
        samesite=current_app.config.get('SESSION_COOKIE_SAMESITE', 'Lax'),
    )
    return response


def load_admin_session():
    """Resolve the request cookie into ``g.admin_session`` (None when not authenticated)"""
    service = get_session_service()
    service.maybe_prune()
    sid = read_session_cookie()
    g.admin_session = service.get(sid) if sid else None
    return g.admin_session


def is_admin_request():
    record = g.get('admin_session')
    return bool(record and record.is_admin)


__all__ = [
    'RateLimiter',
    'get_client_ip',
    'check_rate_limit',
    'hash_password',
    'verify_password',
    'get_session_service',
    'read_session_cookie',
    'set_session_cookie',
    'clear_session_cookie',
    'load_admin_session',
    'is_admin_request',
]
