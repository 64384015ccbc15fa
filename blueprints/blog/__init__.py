"""
Blog Blueprint - Blog posts API
Handles: Published listing, drafts listing for admin, blog CRUD
"""

from flask import Blueprint

blog_bp = Blueprint('blog', __name__, url_prefix='/api/blogs')

from . import routes
