"""Per-session goal trackers for the web app.

Each browser session gets its own ``GoalTracker``, keyed by the user token
the app keeps in the session cookie. Trackers live in process memory only
and disappear on restart. The registry holds at most ``max_trackers``; when
that is exceeded the least recently used one is dropped.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from datetime import date
from typing import Callable, Optional

from fintrack.goals import GoalTracker

logger = logging.getLogger(__name__)


class GoalRegistry:
    """In-memory map of user tokens to goal trackers."""

    def __init__(self, *, max_trackers: int = 1000, clock: Callable[[], date] = date.today) -> None:
        self._trackers: "OrderedDict[str, GoalTracker]" = OrderedDict()
        self._lock = threading.Lock()
        self._max_trackers = max_trackers
        self._clock = clock

    def __len__(self) -> int:
        return len(self._trackers)

    def tracker_for(self, user_token: str) -> GoalTracker:
        with self._lock:
            tracker = self._trackers.get(user_token)
            if tracker is None:
                tracker = GoalTracker(clock=self._clock)
                self._trackers[user_token] = tracker
                self._trim()
            else:
                self._trackers.move_to_end(user_token)
            return tracker

    def _trim(self) -> None:
        if not self._max_trackers or self._max_trackers < 0:
            return
        while len(self._trackers) > self._max_trackers:
            token, _ = self._trackers.popitem(last=False)
            logger.info("Dropped goal tracker for idle session %s", token)


def create_registry_from_env(max_trackers: Optional[str]) -> GoalRegistry:
    return GoalRegistry(max_trackers=int(max_trackers) if max_trackers else 1000)
