# alerts/store.py
"""
In-memory stores for per-user alert state.

- PreferenceStore: user_id -> AlertPreferences (defaults when unset)
- ReadStateStore: user_id -> ids of alerts the user has read

Alert ids are deterministic per (game, type, subject), so read state
survives regeneration of the same alert. Thread-safe.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Iterable, Optional

from alerts.preferences import AlertPreferences


class PreferenceStore:
    """Thread-safe in-memory preference storage."""

    def __init__(self):
        self._lock = threading.RLock()
        self._preferences: dict[str, AlertPreferences] = {}

    def get(self, user_id: str) -> AlertPreferences:
        """Stored preferences, or defaults for users who never saved any."""
        with self._lock:
            stored = self._preferences.get(user_id)
            if stored is not None:
                return stored
            return AlertPreferences.with_defaults(user_id)

    def has(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._preferences

    def save(self, preferences: AlertPreferences) -> AlertPreferences:
        with self._lock:
            self._preferences[preferences.user_id] = preferences
            return preferences

    def count(self) -> int:
        with self._lock:
            return len(self._preferences)

    def clear(self) -> None:
        with self._lock:
            self._preferences.clear()


class ReadStateStore:
    """
    Tracks which alert ids each user has read.

    max_per_user bounds memory; oldest read marks are evicted first.
    """

    def __init__(self, max_per_user: int = 5000):
        self._max_per_user = max_per_user
        self._lock = threading.RLock()

        # dict preserves insertion order for FIFO eviction
        self._read: dict[str, dict[str, None]] = defaultdict(dict)

    def mark_read(self, user_id: str, alert_id: str) -> None:
        with self._lock:
            self._add(user_id, alert_id)

    def mark_all_read(self, user_id: str, alert_ids: Iterable[str]) -> int:
        """Mark several alerts read. Returns how many ids were given."""
        count = 0
        with self._lock:
            for alert_id in alert_ids:
                self._add(user_id, alert_id)
                count += 1
        return count

    def is_read(self, user_id: str, alert_id: str) -> bool:
        with self._lock:
            return alert_id in self._read.get(user_id, {})

    def read_ids(self, user_id: str) -> frozenset[str]:
        with self._lock:
            return frozenset(self._read.get(user_id, {}))

    def clear(self, user_id: Optional[str] = None) -> None:
        """Clear one user's read marks, or everyone's."""
        with self._lock:
            if user_id is None:
                self._read.clear()
            else:
                self._read.pop(user_id, None)

    def _add(self, user_id: str, alert_id: str) -> None:
        marks = self._read[user_id]
        marks.pop(alert_id, None)
        marks[alert_id] = None
        while len(marks) > self._max_per_user:
            oldest = next(iter(marks))
            del marks[oldest]


# Module-level singletons
_preference_store: Optional[PreferenceStore] = None
_read_state_store: Optional[ReadStateStore] = None
_store_lock = threading.Lock()


def get_preference_store() -> PreferenceStore:
    """Get the singleton preference store."""
    global _preference_store
    if _preference_store is None:
        with _store_lock:
            if _preference_store is None:
                _preference_store = PreferenceStore()
    return _preference_store


def get_read_state_store() -> ReadStateStore:
    """Get the singleton read-state store."""
    global _read_state_store
    if _read_state_store is None:
        with _store_lock:
            if _read_state_store is None:
                _read_state_store = ReadStateStore()
    return _read_state_store


def reset_preference_store() -> None:
    """Reset the singleton store (for testing)."""
    global _preference_store
    with _store_lock:
        _preference_store = None


def reset_read_state_store() -> None:
    """Reset the singleton store (for testing)."""
    global _read_state_store
    with _store_lock:
        _read_state_store = None
