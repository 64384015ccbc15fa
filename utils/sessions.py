"""
Sessions Module - In-process store for admin sessions

The store lives for the lifetime of the process: restarting the server logs
every admin out. Records expire a fixed time after issuance.
"""

import secrets
import time
from dataclasses import dataclass
from datetime import timedelta


@dataclass
class SessionRecord:
    sid: str
    is_admin: bool
    created_at: float
    expires_at: float

    def is_expired(self, now):
        return now >= self.expires_at


class SessionService:
    """Maps opaque session ids to SessionRecord entries with expiry metadata"""

    def __init__(self, lifetime=timedelta(hours=24), prune_interval=timedelta(hours=24), clock=time.time):
        self.lifetime = lifetime.total_seconds()
        self.prune_interval = prune_interval.total_seconds()
        self._clock = clock
        self._sessions = {}
        self._last_prune = clock()

    def create(self, is_admin=True):
        now = self._clock()
        sid = secrets.token_urlsafe(32)
        record = SessionRecord(sid=sid, is_admin=is_admin, created_at=now,
                               expires_at=now + self.lifetime)
        self._sessions[sid] = record
        return record

    def get(self, sid):
        """Return the live record for ``sid`` or None when unknown or expired"""
        if not sid:
            return None
        record = self._sessions.get(sid)
        if record is None:
            return None
        if record.is_expired(self._clock()):
            self._sessions.pop(sid, None)
            return None
        return record

    def destroy(self, sid):
        """Remove a session; returns False if it was already gone"""
        return self._sessions.pop(sid, None) is not None

    def prune(self):
        """Drop every expired record and return how many were removed"""
        now = self._clock()
        expired = [sid for sid, record in list(self._sessions.items()) if record.is_expired(now)]
        for sid in expired:
            self._sessions.pop(sid, None)
        self._last_prune = now
        return len(expired)

    def maybe_prune(self):
        if self._clock() - self._last_prune >= self.prune_interval:
            return self.prune()
        return 0

    def __len__(self):
        return len(self._sessions)
