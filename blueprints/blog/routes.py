"""
Blog Routes - Public reads of published posts and admin blog management
"""

from flask import jsonify, current_app
from schemas import BlogCreate, BlogUpdate, validate_payload
from utils import data
from utils.data import StorageError, RecordNotFound
from utils.decorators import admin_required
from . import blog_bp


@blog_bp.route('', methods=['GET'])
def list_published_blogs():
    """List published blogs only; drafts never appear here"""
    try:
        blogs = data.get_published_blogs()
    except StorageError:
        return jsonify({'message': 'Failed to fetch blogs'}), 500
    return jsonify([b.to_dict() for b in blogs])


@blog_bp.route('/all', methods=['GET'])
@admin_required
def list_all_blogs():
    """List every blog regardless of published state"""
    try:
        blogs = data.get_blogs()
    except StorageError:
        return jsonify({'message': 'Failed to fetch all blogs'}), 500
    return jsonify([b.to_dict() for b in blogs])


@blog_bp.route('/<blog_id>', methods=['GET'])
def get_blog(blog_id):
    try:
        blog = data.get_blog(blog_id)
    except StorageError:
        return jsonify({'message': 'Failed to fetch blog'}), 500
    if not blog:
        return jsonify({'message': 'Blog not found'}), 404
    return jsonify(blog.to_dict())


@blog_bp.route('', methods=['POST'])
@admin_required
def create_blog():
    payload = validate_payload(BlogCreate, 'Invalid blog data')
    try:
        blog = data.create_blog(payload.model_dump())
    except StorageError:
        return jsonify({'message': 'Failed to create blog'}), 500
    current_app.logger.info(f"Blog created: {blog.id} ({blog.title}, published={blog.published})")
    return jsonify(blog.to_dict()), 201


@blog_bp.route('/<blog_id>', methods=['PUT'])
@admin_required
def update_blog(blog_id):
    payload = validate_payload(BlogUpdate, 'Invalid blog data')
    try:
        blog = data.update_blog(blog_id, payload.model_dump(exclude_unset=True))
    except RecordNotFound:
        return jsonify({'message': 'Blog not found'}), 404
    except StorageError:
        return jsonify({'message': 'Failed to update blog'}), 500
    current_app.logger.info(f"Blog updated: {blog_id}")
    return jsonify(blog.to_dict())


@blog_bp.route('/<blog_id>', methods=['DELETE'])
@admin_required
def delete_blog(blog_id):
    try:
        deleted = data.delete_blog(blog_id)
    except StorageError:
        return jsonify({'message': 'Failed to delete blog'}), 500
    if deleted:
        current_app.logger.info(f"Blog deleted: {blog_id}")
    return jsonify({'success': True, 'message': 'Blog deleted successfully'})
