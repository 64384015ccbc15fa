"""
Helpers Module - Dashboard statistics and small view helpers
"""

from collections import namedtuple
from urllib.parse import urlparse
from . import data


DashboardCard = namedtuple('DashboardCard', ['kind', 'label', 'count'])

# Fixed set of dashboard cards, in display order
CARD_KINDS = (
    ('projects', 'Total Projects'),
    ('blogs', 'Blog Posts'),
    ('messages', 'Messages'),
    ('unreadMessages', 'Unread Messages'),
)


def get_dashboard_stats():
    """Aggregate counts for the admin dashboard.

    The four counts are independent reads; a write landing between them can
    make them disagree slightly, which is acceptable here.
    """
    return {
        'projects': data.count_projects(),
        'blogs': data.count_blogs(),
        'messages': data.count_messages(),
        'unreadMessages': data.count_messages(unread=True),
    }


def build_dashboard_cards(stats):
    return [DashboardCard(kind, label, stats.get(kind, 0)) for kind, label in CARD_KINDS]


def cards_to_dicts(cards):
    return [card._asdict() for card in cards]


def is_safe_redirect(target):
    """Only allow redirects to local paths"""
    if not target:
        return False
    parsed = urlparse(target)
    return not parsed.scheme and not parsed.netloc and target.startswith('/')


__all__ = [
    'DashboardCard',
    'CARD_KINDS',
    'get_dashboard_stats',
    'build_dashboard_cards',
    'cards_to_dicts',
    'is_safe_redirect',
]
