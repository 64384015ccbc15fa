"""
Pages Blueprint - Public portfolio pages
Handles: Home, about, skills, projects, blog, resume, contact
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
