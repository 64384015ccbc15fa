"""
Messages Blueprint - Contact messages API
Handles: Public contact submissions, admin inbox management
"""

from flask import Blueprint

messages_bp = Blueprint('messages', __name__, url_prefix='/api/messages')

from . import routes
