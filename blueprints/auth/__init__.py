"""
Auth Blueprint - Admin authentication API
Handles: Login, Logout, Session check
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/admin')

from . import routes
