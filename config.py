import os
from datetime import timedelta


INSECURE_SECRET_KEY = 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION'


def _database_url():
    """Resolve the database URL from the environment"""
    database_url = os.environ.get('DATABASE_URL')
    if not database_url:
        # Individual PG* variables are accepted when DATABASE_URL is missing
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if database_url and database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    return database_url or 'sqlite:///portfolio.db'


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', INSECURE_SECRET_KEY)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Admin session settings
    ADMIN_SESSION_COOKIE_NAME = 'portfolio_sid'
    ADMIN_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_PRUNE_INTERVAL = timedelta(hours=24)

    # Database Settings
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON Settings
    JSON_AS_ASCII = False
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB

    # Admin identity seeded into the admin_users table at start-up
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'admin123')

    # Rate limiting for login and contact form
    RATELIMIT_ENABLED = True
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '10'))
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', '60'))  # seconds

    # Number of trusted proxies in front of the app; 0 ignores X-Forwarded-* headers
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))

    # Admin Notification Settings
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Static content for the about, skills and resume pages
    SITE_PROFILE = {
        'name': os.environ.get('SITE_OWNER_NAME', 'Portfolio Owner'),
        'headline': 'Full-stack developer',
        'about': 'Developer building web applications end to end.',
        'email': os.environ.get('SITE_OWNER_EMAIL', 'hello@example.com'),
        'skills': [
            {'category': 'Backend', 'items': ['Python', 'Flask', 'SQLAlchemy', 'PostgreSQL']},
            {'category': 'Frontend', 'items': ['TypeScript', 'React', 'HTML', 'CSS']},
            {'category': 'Tooling', 'items': ['Git', 'Docker', 'pytest']},
        ],
        'experience': [],
        'education': [],
        # File under static/ offered as the downloadable resume; no link when unset
        'resume_pdf': os.environ.get('SITE_RESUME_PDF'),
    }


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite runs on a StaticPool, which rejects pool sizing options
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin123'
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_TELEGRAM_CHAT_ID = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on FLASK_ENV"""
    env = env or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
