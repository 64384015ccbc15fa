"""
Portfolio Routes - Public project reads and admin project management
"""

from flask import jsonify, current_app
from schemas import ProjectCreate, ProjectUpdate, validate_payload
from utils import data
from utils.data import StorageError, RecordNotFound
from utils.decorators import admin_required
from . import portfolio_bp


@portfolio_bp.route('', methods=['GET'])
def list_projects():
    """List all projects, newest first"""
    try:
        projects = data.get_projects()
    except StorageError:
        return jsonify({'message': 'Failed to fetch projects'}), 500
    return jsonify([p.to_dict() for p in projects])


@portfolio_bp.route('/featured', methods=['GET'])
def featured_projects():
    """List featured projects, newest first"""
    try:
        projects = data.get_featured_projects()
    except StorageError:
        return jsonify({'message': 'Failed to fetch featured projects'}), 500
    return jsonify([p.to_dict() for p in projects])


@portfolio_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    try:
        project = data.get_project(project_id)
    except StorageError:
        return jsonify({'message': 'Failed to fetch project'}), 500
    if not project:
        return jsonify({'message': 'Project not found'}), 404
    return jsonify(project.to_dict())


@portfolio_bp.route('', methods=['POST'])
@admin_required
def create_project():
    payload = validate_payload(ProjectCreate, 'Invalid project data')
    try:
        project = data.create_project(payload.model_dump())
    except StorageError:
        return jsonify({'message': 'Failed to create project'}), 500
    current_app.logger.info(f"Project created: {project.id} ({project.title})")
    return jsonify(project.to_dict()), 201


@portfolio_bp.route('/<project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    """Partially update a project; only fields present in the body change"""
    payload = validate_payload(ProjectUpdate, 'Invalid project data')
    try:
        project = data.update_project(project_id, payload.model_dump(exclude_unset=True))
    except RecordNotFound:
        return jsonify({'message': 'Project not found'}), 404
    except StorageError:
        return jsonify({'message': 'Failed to update project'}), 500
    current_app.logger.info(f"Project updated: {project_id}")
    return jsonify(project.to_dict())


@portfolio_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    try:
        deleted = data.delete_project(project_id)
    except StorageError:
        return jsonify({'message': 'Failed to delete project'}), 500
    if deleted:
        current_app.logger.info(f"Project deleted: {project_id}")
    return jsonify({'success': True, 'message': 'Project deleted successfully'})
