"""
Auth Routes - Admin login, logout and session check
"""

from flask import current_app, g, jsonify
from schemas import LoginRequest, validate_payload
from utils.data import StorageError, get_admin_by_username
from utils.security import (
    check_rate_limit, get_client_ip, get_session_service, verify_password,
    set_session_cookie, clear_session_cookie, is_admin_request
)
from . import auth_bp


def authenticate(username, password):
    """Check a username/password pair against the stored admin credentials"""
    admin = get_admin_by_username(username)
    if admin is None:
        return False
    return verify_password(password, admin.password_hash)


def start_admin_session(response):
    """Replace any current session with a fresh admin session on ``response``"""
    service = get_session_service()
    if g.get('admin_session'):
        service.destroy(g.admin_session.sid)
    record = service.create(is_admin=True)
    g.admin_session = record
    return set_session_cookie(response, record)


def end_admin_session(response):
    if g.get('admin_session'):
        get_session_service().destroy(g.admin_session.sid)
        g.admin_session = None
    return clear_session_cookie(response)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Establish an admin session if the credentials match"""
    if not check_rate_limit('admin_login'):
        return jsonify({'success': False, 'message': 'Too many requests'}), 429

    credentials = validate_payload(LoginRequest, 'Invalid login data')
    client_ip = get_client_ip()

    try:
        valid = authenticate(credentials.username, credentials.password)
    except StorageError:
        return jsonify({'message': 'Login failed'}), 500

    if not valid:
        current_app.logger.warning(f"Failed admin login for {credentials.username} from {client_ip}")
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    current_app.logger.info(f"Admin login: {credentials.username} from {client_ip}")
    response = jsonify({'success': True, 'message': 'Login successful'})
    return start_admin_session(response)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the current session; succeeds even without one"""
    response = jsonify({'success': True, 'message': 'Logged out successfully'})
    if g.get('admin_session'):
        current_app.logger.info(f"Admin logout from {get_client_ip()}")
    return end_admin_session(response)


@auth_bp.route('/check', methods=['GET'])
def check():
    """Report whether the current session is authenticated"""
    return jsonify({'isAuthenticated': is_admin_request()})
