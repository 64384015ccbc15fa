"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import redirect, url_for, flash, jsonify, request
from .security import is_admin_request


def admin_required(f):
    """Decorator to require an admin session on API routes.

    Missing, expired and invalid sessions all get the same 401 response and
    the wrapped view never runs.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_request():
            return jsonify({'message': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function


def admin_page_required(f):
    """Decorator to require an admin session on HTML admin pages"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_request():
            flash('Please login to access this page.', 'error')
            return redirect(url_for('dashboard.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function
