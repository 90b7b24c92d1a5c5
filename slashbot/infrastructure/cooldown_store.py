import logging
import math
import threading
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class InMemoryCooldownStore:
    """Process-local cooldown map guarded by a lock.

    ``clock`` must be monotonic; it defaults to :func:`time.monotonic`.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._expiries: Dict[str, float] = {}
        self._lock = threading.Lock()

    def remaining(self, key: str) -> int:
        with self._lock:
            expiry = self._expiries.get(key)
            if expiry is None:
                return 0
            left = expiry - self._clock()
            if left <= 0:
                del self._expiries[key]
                return 0
            return math.ceil(left)

    def apply(self, key: str, seconds: int) -> None:
        if seconds <= 0:
            return
        with self._lock:
            self._expiries[key] = self._clock() + seconds

    def clear(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._expiries.clear()
            else:
                self._expiries.pop(key, None)

    def cleanup(self) -> int:
        """Drop expired entries and return how many were removed."""

        with self._lock:
            now = self._clock()
            expired = [key for key, expiry in self._expiries.items() if expiry <= now]
            for key in expired:
                del self._expiries[key]
        if expired:
            logger.info("Purged %s expired cooldowns", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._expiries)
