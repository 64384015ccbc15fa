"""
Portfolio Client - Cached HTTP access to the portfolio API
"""

from .cache import QueryCache
from .client import PortfolioClient, ApiError
from .invalidation import invalidated_paths, CLEAR_ALL

__all__ = ['QueryCache', 'PortfolioClient', 'ApiError', 'invalidated_paths', 'CLEAR_ALL']
