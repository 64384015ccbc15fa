"""
Portfolio - Main Application Entry Point
Application Factory Pattern for a modular architecture

This module initializes the Flask application with its extensions,
configuration and middleware. Route handling is delegated to blueprints.
"""

import os
from datetime import datetime

import click
from flask import Flask, render_template, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.middleware.proxy_fix import ProxyFix

from config import get_config, INSECURE_SECRET_KEY
from extensions import db
from schemas import PayloadError
from utils.data import StorageError, ensure_admin, get_admin_by_username, create_admin, set_admin_password
from utils.security import RateLimiter, hash_password, load_admin_session, is_admin_request
from utils.sessions import SessionService

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.dashboard import dashboard_bp
from blueprints.portfolio import portfolio_bp
from blueprints.blog import blog_bp
from blueprints.messages import messages_bp


def create_app(config_class=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_class: Configuration class to use (defaults to the FLASK_ENV one)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class or get_config())
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Trust X-Forwarded-For only from the configured number of proxies
    trusted_proxies = app.config.get('PROXY_FIX_X_FOR', 0)
    if trusted_proxies:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=trusted_proxies, x_proto=trusted_proxies)

    if app.config['SECRET_KEY'] == INSECURE_SECRET_KEY and not app.testing:
        app.logger.warning('SESSION_SECRET is not set; using an insecure default secret key')

    # Process-wide admin session store and rate limiter
    app.extensions['session_service'] = SessionService(
        lifetime=app.config['ADMIN_SESSION_LIFETIME'],
        prune_interval=app.config['SESSION_PRUNE_INTERVAL'],
    )
    app.extensions['rate_limiter'] = RateLimiter(
        max_requests=app.config['RATE_LIMIT_MAX_REQUESTS'],
        window=app.config['RATE_LIMIT_WINDOW'],
    )

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Register CLI commands
    register_commands(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio application is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)

    # Create tables if they don't exist and seed the admin identity
    with app.app_context():
        try:
            db.create_all()
            seed_admin(app)
            app.logger.info("✓ Database initialized successfully")
        except (SQLAlchemyError, StorageError) as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def seed_admin(app):
    """Make sure the configured admin exists in the admin_users table"""
    username = app.config.get('ADMIN_USERNAME')
    password = app.config.get('ADMIN_PASSWORD')
    if not username or not password:
        app.logger.warning('ADMIN_USERNAME/ADMIN_PASSWORD not configured; no admin seeded')
        return None
    admin, created = ensure_admin(username, hash_password(password))
    if created:
        app.logger.info(f"Seeded admin user {username}")
    return admin


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(portfolio_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(messages_bp)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(PayloadError)
    def invalid_payload(e):
        return jsonify(e.to_dict()), 400

    @app.errorhandler(400)
    def bad_request(e):
        if _wants_json():
            return jsonify({'message': 'Bad request'}), 400
        return render_template('error.html', code=400, title='Bad request'), 400

    @app.errorhandler(404)
    def page_not_found(e):
        if _wants_json():
            return jsonify({'message': 'Not found'}), 404
        return render_template('error.html', code=404, title='Page not found'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if _wants_json():
            return jsonify({'message': 'Method not allowed'}), 405
        return render_template('error.html', code=405, title='Method not allowed'), 405

    @app.errorhandler(413)
    def payload_too_large(e):
        if _wants_json():
            return jsonify({'message': 'Request body is too large'}), 413
        return render_template('error.html', code=413, title='Request is too large'), 413

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        if _wants_json():
            return jsonify({'message': 'Internal server error'}), 500
        return render_template('error.html', code=500, title='Something went wrong'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.before_request
    def before_request():
        """Resolve the admin session cookie for this request"""
        load_admin_session()

    @app.context_processor
    def inject_global_vars():
        return {
            'is_admin': is_admin_request(),
            'current_year': datetime.now().year,
            'profile': app.config['SITE_PROFILE'],
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if app.config.get('SESSION_COOKIE_SECURE'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


def register_commands(app):
    """Register flask CLI commands"""

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables and seed the configured admin."""
        db.create_all()
        seed_admin(app)
        click.echo('Database initialized.')

    @app.cli.command('create-admin')
    @click.argument('username')
    @click.password_option('--password', help='Password for the admin account.')
    def create_admin_command(username, password):
        """Create an admin account or reset its password."""
        admin = get_admin_by_username(username)
        if admin:
            set_admin_password(admin, hash_password(password))
            click.echo(f'Password updated for admin {username}.')
        else:
            create_admin(username, hash_password(password))
            click.echo(f'Admin {username} created.')


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(get_config(env))

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
