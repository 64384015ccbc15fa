"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import admin_required, admin_page_required
from .data import StorageError, RecordNotFound
from .sessions import SessionService, SessionRecord
from .security import (
    RateLimiter,
    get_client_ip,
    check_rate_limit,
    hash_password,
    verify_password,
    load_admin_session,
    is_admin_request
)
from .notifications import send_admin_notification, notify_new_message
from .helpers import (
    DashboardCard,
    get_dashboard_stats,
    build_dashboard_cards,
    cards_to_dicts,
    is_safe_redirect
)

__all__ = [
    # Decorators
    'admin_required',
    'admin_page_required',

    # Data
    'StorageError',
    'RecordNotFound',

    # Sessions
    'SessionService',
    'SessionRecord',

    # Security
    'RateLimiter',
    'get_client_ip',
    'check_rate_limit',
    'hash_password',
    'verify_password',
    'load_admin_session',
    'is_admin_request',

    # Notifications
    'send_admin_notification',
    'notify_new_message',

    # Helpers
    'DashboardCard',
    'get_dashboard_stats',
    'build_dashboard_cards',
    'cards_to_dicts',
    'is_safe_redirect'
]
