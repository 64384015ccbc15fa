"""
Dashboard Blueprint - Admin panel
Handles: Admin login page, dashboard stats, project/blog/message management
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)

from . import routes
