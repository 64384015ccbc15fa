"""
Dashboard Routes - Admin panel pages and the aggregate stats API
Handles: Login page, dashboard cards, managing projects, blogs and messages
"""

from flask import render_template, redirect, url_for, request, flash, current_app, jsonify
from schemas import (
    PayloadError, LoginRequest, ProjectCreate, ProjectUpdate, BlogCreate, BlogUpdate,
    validate_payload
)
from utils import data
from utils.data import StorageError, RecordNotFound
from utils.decorators import admin_required, admin_page_required
from utils.helpers import get_dashboard_stats, build_dashboard_cards, cards_to_dicts, is_safe_redirect
from utils.security import check_rate_limit, get_client_ip, is_admin_request
from blueprints.auth.routes import authenticate, start_admin_session, end_admin_session
from . import dashboard_bp


GENERIC_FAILURE = 'Something went wrong. Please try again.'


def _form_data(*checkboxes):
    """Request form as a dict; unchecked checkboxes become False"""
    form = request.form.to_dict()
    for name in checkboxes:
        form[name] = name in request.form
    return form


def _project_form(project=None):
    if project is None:
        return {'title': '', 'description': '', 'imageUrl': '', 'technologies': '',
                'githubUrl': '', 'liveUrl': '', 'featured': False}
    form = project.to_dict()
    form['technologies'] = ', '.join(form['technologies'])
    return form


def _blog_form(blog=None):
    if blog is None:
        return {'title': '', 'excerpt': '', 'content': '', 'imageUrl': '', 'tags': '',
                'published': False, 'readTime': 5}
    form = blog.to_dict()
    form['tags'] = ', '.join(form['tags'])
    return form


# Stats API

@dashboard_bp.route('/api/admin/stats', methods=['GET'])
@admin_required
def stats():
    """Aggregate counts for the dashboard"""
    try:
        counts = get_dashboard_stats()
    except StorageError:
        return jsonify({'message': 'Failed to fetch stats'}), 500
    counts['cards'] = cards_to_dicts(build_dashboard_cards(counts))
    return jsonify(counts)


# Authentication pages

@dashboard_bp.route('/admin/login', methods=['GET', 'POST'])
def login():
    """Admin login page"""
    if is_admin_request():
        return redirect(url_for('dashboard.index'))

    next_page = request.args.get('next')
    if request.method == 'POST':
        username = request.form.get('username', '')
        if not check_rate_limit('admin_login'):
            flash('Too many login attempts. Please wait a minute.', 'error')
            return render_template('admin/login.html', username=username), 429
        try:
            credentials = validate_payload(LoginRequest, 'Invalid login data', data=request.form.to_dict(),
                                           strict=False)
            valid = authenticate(credentials.username, credentials.password)
        except PayloadError:
            flash('Please enter both username and password.', 'error')
            return render_template('admin/login.html', username=username), 400
        except StorageError:
            flash(GENERIC_FAILURE, 'error')
            return render_template('admin/login.html', username=username), 500

        if not valid:
            current_app.logger.warning(f"Failed admin login for {username} from {get_client_ip()}")
            flash('Invalid credentials. Please try again.', 'error')
            return render_template('admin/login.html', username=username), 401

        current_app.logger.info(f"Admin login: {username} from {get_client_ip()}")
        flash('Admin Login Successful!', 'success')
        target = next_page if is_safe_redirect(next_page) else url_for('dashboard.index')
        return start_admin_session(redirect(target))

    return render_template('admin/login.html', username='')


@dashboard_bp.route('/admin/logout', methods=['POST'])
def logout():
    flash('Logged out successfully', 'success')
    return end_admin_session(redirect(url_for('dashboard.login')))


@dashboard_bp.route('/admin/')
@admin_page_required
def index():
    """Dashboard with the four count cards"""
    try:
        counts = get_dashboard_stats()
    except StorageError:
        flash(GENERIC_FAILURE, 'error')
        counts = {}
    return render_template('admin/dashboard.html', cards=build_dashboard_cards(counts))


# Projects

@dashboard_bp.route('/admin/projects', methods=['GET', 'POST'])
@admin_page_required
def projects():
    """List projects and handle the create form"""
    form = _project_form()
    errors = []
    status = 200

    if request.method == 'POST':
        form = _form_data('featured')
        try:
            payload = validate_payload(ProjectCreate, 'Invalid project data', data=form, strict=False)
            project = data.create_project(payload.model_dump())
            current_app.logger.info(f"Project created from admin panel: {project.id}")
            flash('Project created successfully!', 'success')
            return redirect(url_for('dashboard.projects'))
        except PayloadError as e:
            errors, status = e.errors, 400
        except StorageError:
            status = 500
        flash('Failed to create project. Please try again.', 'error')

    try:
        project_list = data.get_projects()
    except StorageError:
        project_list = []
        flash(GENERIC_FAILURE, 'error')
    return render_template('admin/projects.html', projects=project_list, form=form, errors=errors), status


@dashboard_bp.route('/admin/projects/<project_id>/edit', methods=['GET', 'POST'])
@admin_page_required
def edit_project(project_id):
    try:
        project = data.get_project(project_id)
    except StorageError:
        flash(GENERIC_FAILURE, 'error')
        return redirect(url_for('dashboard.projects'))
    if not project:
        flash('Project not found', 'error')
        return redirect(url_for('dashboard.projects'))

    form = _project_form(project)
    errors = []
    status = 200

    if request.method == 'POST':
        form = _form_data('featured')
        try:
            payload = validate_payload(ProjectUpdate, 'Invalid project data', data=form, strict=False)
            data.update_project(project_id, payload.model_dump(exclude_unset=True))
            flash('Project updated successfully!', 'success')
            return redirect(url_for('dashboard.projects'))
        except PayloadError as e:
            errors, status = e.errors, 400
        except RecordNotFound:
            flash('Project not found', 'error')
            return redirect(url_for('dashboard.projects'))
        except StorageError:
            status = 500
        flash('Failed to update project. Please try again.', 'error')

    return render_template('admin/project_form.html', project=project, form=form, errors=errors), status


@dashboard_bp.route('/admin/projects/<project_id>/delete', methods=['POST'])
@admin_page_required
def delete_project(project_id):
    try:
        data.delete_project(project_id)
        flash('Project deleted successfully!', 'success')
    except StorageError:
        flash('Failed to delete project. Please try again.', 'error')
    return redirect(url_for('dashboard.projects'))


# Blogs

@dashboard_bp.route('/admin/blogs', methods=['GET', 'POST'])
@admin_page_required
def blogs():
    """List all blogs including drafts and handle the create form"""
    form = _blog_form()
    errors = []
    status = 200

    if request.method == 'POST':
        form = _form_data('published')
        try:
            payload = validate_payload(BlogCreate, 'Invalid blog data', data=form, strict=False)
            blog = data.create_blog(payload.model_dump())
            current_app.logger.info(f"Blog created from admin panel: {blog.id}")
            flash('Blog post created successfully!', 'success')
            return redirect(url_for('dashboard.blogs'))
        except PayloadError as e:
            errors, status = e.errors, 400
        except StorageError:
            status = 500
        flash('Failed to create blog post. Please try again.', 'error')

    try:
        blog_list = data.get_blogs()
    except StorageError:
        blog_list = []
        flash(GENERIC_FAILURE, 'error')
    return render_template('admin/blogs.html', blogs=blog_list, form=form, errors=errors), status


@dashboard_bp.route('/admin/blogs/<blog_id>/edit', methods=['GET', 'POST'])
@admin_page_required
def edit_blog(blog_id):
    try:
        blog = data.get_blog(blog_id)
    except StorageError:
        flash(GENERIC_FAILURE, 'error')
        return redirect(url_for('dashboard.blogs'))
    if not blog:
        flash('Blog not found', 'error')
        return redirect(url_for('dashboard.blogs'))

    form = _blog_form(blog)
    errors = []
    status = 200

    if request.method == 'POST':
        form = _form_data('published')
        try:
            payload = validate_payload(BlogUpdate, 'Invalid blog data', data=form, strict=False)
            data.update_blog(blog_id, payload.model_dump(exclude_unset=True))
            flash('Blog post updated successfully!', 'success')
            return redirect(url_for('dashboard.blogs'))
        except PayloadError as e:
            errors, status = e.errors, 400
        except RecordNotFound:
            flash('Blog not found', 'error')
            return redirect(url_for('dashboard.blogs'))
        except StorageError:
            status = 500
        flash('Failed to update blog post. Please try again.', 'error')

    return render_template('admin/blog_form.html', blog=blog, form=form, errors=errors), status


@dashboard_bp.route('/admin/blogs/<blog_id>/delete', methods=['POST'])
@admin_page_required
def delete_blog(blog_id):
    try:
        data.delete_blog(blog_id)
        flash('Blog post deleted successfully!', 'success')
    except StorageError:
        flash('Failed to delete blog post. Please try again.', 'error')
    return redirect(url_for('dashboard.blogs'))


# Messages

@dashboard_bp.route('/admin/messages')
@admin_page_required
def messages():
    try:
        message_list = data.get_messages()
    except StorageError:
        message_list = []
        flash(GENERIC_FAILURE, 'error')
    unread = sum(1 for m in message_list if not m.read)
    return render_template('admin/messages.html', messages=message_list, unread=unread)


@dashboard_bp.route('/admin/messages/<message_id>/read', methods=['POST'])
@admin_page_required
def mark_message_read(message_id):
    try:
        data.mark_message_read(message_id)
        flash('Message marked as read', 'success')
    except RecordNotFound:
        flash('Message not found', 'error')
    except StorageError:
        flash('Failed to mark message as read. Please try again.', 'error')
    return redirect(url_for('dashboard.messages'))


@dashboard_bp.route('/admin/messages/<message_id>/delete', methods=['POST'])
@admin_page_required
def delete_message(message_id):
    try:
        data.delete_message(message_id)
        flash('Message deleted successfully', 'success')
    except StorageError:
        flash('Failed to delete message. Please try again.', 'error')
    return redirect(url_for('dashboard.messages'))
