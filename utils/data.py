"""
Data Management Module - Record store for projects, blogs, messages and admins
All persistence goes through SQLAlchemy; callers receive model instances.
"""

from datetime import datetime
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Project, Blog, Message, AdminUser


class StorageError(Exception):
    """Raised when the database rejects or cannot serve an operation"""


class RecordNotFound(Exception):
    """Raised when an update targets an id that does not exist"""

    def __init__(self, kind, record_id):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


def _run(action, func):
    """Run ``func`` and turn database failures into StorageError"""
    try:
        return func()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Storage error while trying to {action}: {str(e)}")
        raise StorageError(action) from e


def _create(model, fields, action):
    def _insert():
        record = model(**fields)
        db.session.add(record)
        db.session.commit()
        return record
    return _run(action, _insert)


def _update(model, kind, record_id, fields, action):
    def _apply():
        record = db.session.get(model, record_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        # Refreshed even when no column changed
        record.updated_at = datetime.utcnow()
        db.session.commit()
        return record

    record = _run(action, _apply)
    if record is None:
        raise RecordNotFound(kind, record_id)
    return record


def _delete(model, record_id, action):
    def _remove():
        deleted = model.query.filter_by(id=record_id).delete()
        db.session.commit()
        return deleted > 0
    return _run(action, _remove)


# Projects

def get_projects():
    """All projects, newest first"""
    return _run('fetch projects',
                lambda: Project.query.order_by(Project.created_at.desc()).all())


def get_featured_projects():
    """Projects flagged as featured, newest first"""
    return _run('fetch featured projects',
                lambda: Project.query.filter_by(featured=True)
                .order_by(Project.created_at.desc()).all())


def get_project(project_id):
    return _run('fetch project', lambda: db.session.get(Project, project_id))


def create_project(fields):
    return _create(Project, fields, 'create project')


def update_project(project_id, fields):
    return _update(Project, 'Project', project_id, fields, 'update project')


def delete_project(project_id):
    """Delete a project; returns False when it did not exist"""
    return _delete(Project, project_id, 'delete project')


def count_projects():
    return _run('count projects', lambda: Project.query.count())


# Blogs

def get_blogs():
    """All blogs including drafts, newest first"""
    return _run('fetch blogs',
                lambda: Blog.query.order_by(Blog.created_at.desc()).all())


def get_published_blogs(limit=None):
    """Published blogs only, newest first"""
    def _query():
        query = Blog.query.filter_by(published=True).order_by(Blog.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()
    return _run('fetch published blogs', _query)


def get_blog(blog_id):
    return _run('fetch blog', lambda: db.session.get(Blog, blog_id))


def create_blog(fields):
    return _create(Blog, fields, 'create blog')


def update_blog(blog_id, fields):
    return _update(Blog, 'Blog', blog_id, fields, 'update blog')


def delete_blog(blog_id):
    return _delete(Blog, blog_id, 'delete blog')


def count_blogs():
    return _run('count blogs', lambda: Blog.query.count())


# Messages

def get_messages():
    """All contact messages, newest first"""
    return _run('fetch messages',
                lambda: Message.query.order_by(Message.created_at.desc()).all())


def get_message(message_id):
    return _run('fetch message', lambda: db.session.get(Message, message_id))


def create_message(fields):
    return _create(Message, fields, 'send message')


def mark_message_read(message_id):
    """Set the read flag; calling it again on a read message is a no-op"""
    def _mark():
        message = db.session.get(Message, message_id)
        if message is None:
            return None
        if not message.read:
            message.read = True
            db.session.commit()
        return message

    message = _run('mark message as read', _mark)
    if message is None:
        raise RecordNotFound('Message', message_id)
    return message


def delete_message(message_id):
    return _delete(Message, message_id, 'delete message')


def count_messages(unread=False):
    def _count():
        query = Message.query
        if unread:
            query = query.filter_by(read=False)
        return query.count()
    return _run('count messages', _count)


# Admin credentials

def get_admin_by_username(username):
    return _run('fetch admin', lambda: AdminUser.query.filter_by(username=username).first())


def create_admin(username, password_hash):
    return _create(AdminUser, {'username': username, 'password_hash': password_hash}, 'create admin')


def set_admin_password(admin, password_hash):
    def _save():
        admin.password_hash = password_hash
        db.session.commit()
        return admin
    return _run('update admin password', _save)


def ensure_admin(username, password_hash):
    """Create the admin identity if it does not exist yet.

    An existing admin keeps its stored password so that a password changed
    through ``flask create-admin`` survives restarts.
    """
    admin = get_admin_by_username(username)
    if admin:
        return admin, False
    return create_admin(username, password_hash), True


__all__ = [
    'StorageError',
    'RecordNotFound',
    'get_projects',
    'get_featured_projects',
    'get_project',
    'create_project',
    'update_project',
    'delete_project',
    'count_projects',
    'get_blogs',
    'get_published_blogs',
    'get_blog',
    'create_blog',
    'update_blog',
    'delete_blog',
    'count_blogs',
    'get_messages',
    'get_message',
    'create_message',
    'mark_message_read',
    'delete_message',
    'count_messages',
    'get_admin_by_username',
    'create_admin',
    'set_admin_password',
    'ensure_admin',
]
