"""Shared connectivity state for the remote response store.

A single ConnectionState is owned by the application and handed to the
request handlers and the reconnect supervisor through dependencies. Request
handlers run in FastAPI's thread pool and the reconnect job runs in the
scheduler's executor, so every mutation goes through a lock.
"""
import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

# Transitions kept for the health endpoint
MAX_TRANSITIONS = 20


@dataclass(frozen=True)
class StateTransition:
    """One change of the remote store's reachability."""
    reachable: bool
    at: datetime
    reason: str | None = None


class ConnectionState:
    """Whether the remote store is currently reachable.

    Starts unreachable. ``try_begin_connect``/``end_connect`` form a
    compare-and-set guard so that at most one connection attempt is in
    flight at any time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reachable = False
        self._connecting = False
        self._attempts = 0
        self._last_error: str | None = None
        self._last_changed: datetime | None = None
        self._transitions: deque[StateTransition] = deque(maxlen=MAX_TRANSITIONS)

    @property
    def reachable(self) -> bool:
        with self._lock:
            return self._reachable

    @property
    def attempts(self) -> int:
        with self._lock:
            return self._attempts

    @property
    def last_error(self) -> str | None:
        with self._lock:
            return self._last_error

    @property
    def transitions(self) -> list[StateTransition]:
        with self._lock:
            return list(self._transitions)

    def try_begin_connect(self) -> bool:
        """Claim the right to run a connection attempt.

        Returns False when another attempt is already running.
        """
        with self._lock:
            if self._connecting:
                return False
            self._connecting = True
            self._attempts += 1
            return True

    def end_connect(self) -> None:
        with self._lock:
            self._connecting = False

    def mark_reachable(self) -> None:
        self._set(True, None)

    def mark_unreachable(self, reason: str) -> None:
        self._set(False, reason)

    def _set(self, reachable: bool, reason: str | None) -> None:
        with self._lock:
            if reason is not None:
                self._last_error = reason
            if self._reachable == reachable:
                return
            self._reachable = reachable
            now = datetime.now(UTC)
            self._last_changed = now
            self._transitions.append(StateTransition(reachable, now, reason))

        if reachable:
            logger.info("Remote store is now reachable")
        else:
            logger.warning(f"Remote store is now unreachable: {reason}")

    def snapshot(self) -> dict:
        """Serializable view of the state for monitoring."""
        with self._lock:
            return {
                "reachable": self._reachable,
                "attempts": self._attempts,
                "lastError": self._last_error,
                "lastChanged": (
                    self._last_changed.isoformat() if self._last_changed else None
                ),
                "transitions": [
                    {"reachable": t.reachable, "at": t.at.isoformat(), "reason": t.reason}
                    for t in self._transitions
                ],
            }
