"""
Per-user in-flight request guard.
"""
import threading
import uuid
from typing import Dict, Optional


class SingleFlight:
    """
    Allows at most one in-flight operation per key.

    ``acquire`` hands out a token, or None when the key is busy; only the
    holder of the current token can release it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._tokens: Dict[str, str] = {}

    def acquire(self, key: str) -> Optional[str]:
        with self._lock:
            if key in self._tokens:
                return None
            token = uuid.uuid4().hex
            self._tokens[key] = token
            return token

    def release(self, key: str, token: str) -> bool:
        with self._lock:
            if self._tokens.get(key) != token:
                return False
            del self._tokens[key]
            return True

    def is_busy(self, key: str) -> bool:
        with self._lock:
            return key in self._tokens


# Shared by the enrichment endpoint and the dashboard pages
mood_saves = SingleFlight()
