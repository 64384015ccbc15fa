"""
Query Cache - Results of GET requests keyed by endpoint path
"""


class QueryCache:
    """Keeps the last successful response body for each endpoint path"""

    def __init__(self):
        self._entries = {}

    def get(self, path, default=None):
        return self._entries.get(path, default)

    def set(self, path, value):
        self._entries[path] = value

    def invalidate(self, paths):
        """Forget the given paths so the next query re-fetches them"""
        removed = []
        for path in paths:
            if path in self._entries:
                del self._entries[path]
                removed.append(path)
        return removed

    def clear(self):
        self._entries.clear()

    def paths(self):
        return sorted(self._entries)

    def __contains__(self, path):
        return path in self._entries

    def __len__(self):
        return len(self._entries)
