"""
Pages Routes - Public pages rendered from the record store
"""

from flask import render_template, redirect, url_for, request, flash, current_app, abort
from schemas import PayloadError, MessageCreate, validate_payload
from utils import data
from utils.data import StorageError
from utils.notifications import notify_new_message
from utils.security import check_rate_limit
from . import pages_bp


HOME_BLOG_LIMIT = 3
EMPTY_CONTACT_FORM = {'name': '', 'email': '', 'subject': '', 'message': ''}


@pages_bp.route('/')
def index():
    """Landing page - featured projects and latest posts"""
    try:
        featured = data.get_featured_projects()
        blogs = data.get_published_blogs(limit=HOME_BLOG_LIMIT)
    except StorageError:
        abort(500)
    return render_template('index.html', projects=featured, blogs=blogs)


@pages_bp.route('/about')
def about():
    return render_template('about.html', profile=current_app.config['SITE_PROFILE'])


@pages_bp.route('/skills')
def skills():
    return render_template('skills.html', profile=current_app.config['SITE_PROFILE'])


@pages_bp.route('/resume')
def resume():
    return render_template('resume.html', profile=current_app.config['SITE_PROFILE'])


@pages_bp.route('/projects')
def projects():
    try:
        project_list = data.get_projects()
    except StorageError:
        abort(500)
    return render_template('projects.html', projects=project_list)


@pages_bp.route('/projects/<project_id>')
def project_detail(project_id):
    try:
        project = data.get_project(project_id)
    except StorageError:
        abort(500)
    if not project:
        abort(404)
    return render_template('project_detail.html', project=project)


@pages_bp.route('/blog')
def blog():
    """Published posts only"""
    try:
        blogs = data.get_published_blogs()
    except StorageError:
        abort(500)
    return render_template('blog.html', blogs=blogs)


@pages_bp.route('/blog/<blog_id>')
def blog_detail(blog_id):
    try:
        post = data.get_blog(blog_id)
    except StorageError:
        abort(500)
    # Drafts are invisible to the public
    if not post or not post.published:
        abort(404)
    return render_template('blog_detail.html', blog=post)


@pages_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact form; on failure the visitor's input is kept in the form"""
    if request.method == 'GET':
        return render_template('contact.html', form=dict(EMPTY_CONTACT_FORM), errors=[])

    form = {key: request.form.get(key, '') for key in EMPTY_CONTACT_FORM}

    if not check_rate_limit('contact'):
        flash('Too many requests. Please try again later.', 'error')
        return render_template('contact.html', form=form, errors=[]), 429

    try:
        payload = validate_payload(MessageCreate, 'Invalid message data', data=form, strict=False)
        message = data.create_message(payload.model_dump())
    except PayloadError as e:
        flash('Failed to send message. Please try again.', 'error')
        return render_template('contact.html', form=form, errors=e.errors), 400
    except StorageError:
        flash('Failed to send message. Please try again.', 'error')
        return render_template('contact.html', form=form, errors=[]), 500

    current_app.logger.info(f"Contact message saved from contact page, message_id: {message.id}")
    notify_new_message(message)
    flash("Message sent! Thank you for your message. I'll get back to you soon.", 'success')
    return redirect(url_for('pages.contact'))
