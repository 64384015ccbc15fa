"""
Portfolio Blueprint - Projects API
Handles: Project listing, featured projects, project CRUD
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='/api/projects')

from . import routes
