"""
Invalidation Map - Which cached paths a successful mutation makes stale
"""

STATS_PATH = '/api/admin/stats'

# Sentinel returned for mutations that change what the session may see
CLEAR_ALL = ('*',)

_COLLECTIONS = {
    'projects': ('/api/projects', '/api/projects/featured'),
    'blogs': ('/api/blogs', '/api/blogs/all'),
    'messages': ('/api/messages',),
}


def invalidated_paths(method, path):
    """
    Paths to drop from the cache after ``method path`` succeeded

    Args:
        method (str): HTTP method of the mutation
        path (str): Endpoint path, e.g. ``/api/projects/<id>``

    Returns:
        tuple: Affected cache paths, or CLEAR_ALL for login/logout
    """
    method = method.upper()
    path = '/' + path.strip('/')
    if method in ('GET', 'HEAD', 'OPTIONS'):
        return ()

    if path in ('/api/admin/login', '/api/admin/logout'):
        return CLEAR_ALL

    parts = path.split('/')  # ['', 'api', '<collection>', '<id>', ...]
    if len(parts) < 3 or parts[1] != 'api' or parts[2] not in _COLLECTIONS:
        return ()

    collection = parts[2]
    affected = list(_COLLECTIONS[collection])
    if len(parts) > 3 and collection != 'messages':
        affected.append(f'/api/{collection}/{parts[3]}')
    affected.append(STATS_PATH)
    return tuple(affected)
