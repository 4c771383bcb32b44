# alerts/service.py
"""
Alert service - main entry point for alert operations.

Coordinates:
- Preference lookup (stored or defaults)
- Alert generation (alerts.engine)
- Read-state overlay (alerts.store)
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from alerts.engine import generate_alerts
from alerts.models import Alert
from alerts.preferences import AlertPreferences
from alerts.store import (
    PreferenceStore,
    ReadStateStore,
    get_preference_store,
    get_read_state_store,
)
from context.game import GameWithPrediction


_logger = logging.getLogger(__name__)


class AlertService:
    """
    Main service for alert operations.

    The engine itself is stateless; this class owns the per-user state
    (preferences and read marks) around it.
    """

    def __init__(
        self,
        preference_store: Optional[PreferenceStore] = None,
        read_state_store: Optional[ReadStateStore] = None,
        max_games_per_sport: Optional[int] = None,
    ):
        """
        Initialize alert service.

        Args:
            preference_store: Preference store (uses singleton if not provided)
            read_state_store: Read-state store (uses singleton if not provided)
            max_games_per_sport: Cap on games considered per sport, None for no cap
        """
        self._preferences = preference_store or get_preference_store()
        self._read_state = read_state_store or get_read_state_store()
        self._max_games_per_sport = max_games_per_sport

    def get_preferences(self, user_id: str) -> AlertPreferences:
        return self._preferences.get(user_id)

    def save_preferences(self, user_id: str, **fields) -> AlertPreferences:
        """Merge fields over defaults and store. user_id is always the caller's."""
        preferences = AlertPreferences.with_defaults(user_id, **fields)
        self._preferences.save(preferences)
        _logger.info(f"Saved alert preferences for {user_id}")
        return preferences

    def alerts_for_user(
        self,
        user_id: str,
        games: Iterable[GameWithPrediction],
        preferences: Optional[AlertPreferences] = None,
        now: Optional[datetime] = None,
    ) -> list[Alert]:
        """
        Generate alerts for a user and overlay their read state.

        Args:
            user_id: User to generate for
            games: Games with predictions
            preferences: Explicit preferences (stored preferences if None)
            now: Creation timestamp for this batch

        Returns:
            Ranked alerts, read=True for ids the user already marked
        """
        if preferences is None:
            preferences = self._preferences.get(user_id)
        elif preferences.user_id != user_id:
            preferences = replace(preferences, user_id=user_id)

        games = self._cap_games(games)
        alerts = generate_alerts(games, preferences, now=now)

        read_ids = self._read_state.read_ids(user_id)
        if read_ids:
            alerts = [replace(a, read=True) if a.alert_id in read_ids else a for a in alerts]

        if alerts:
            _logger.info(
                f"Generated {len(alerts)} alert(s) for {user_id}",
                extra={"user_id": user_id},
            )

        return alerts

    def mark_read(self, user_id: str, alert_id: str) -> None:
        self._read_state.mark_read(user_id, alert_id)

    def mark_all_read(self, user_id: str, alert_ids: Iterable[str]) -> int:
        return self._read_state.mark_all_read(user_id, alert_ids)

    def _cap_games(self, games: Iterable[GameWithPrediction]) -> list[GameWithPrediction]:
        """Keep at most max_games_per_sport games of each sport, in input order."""
        if self._max_games_per_sport is None:
            return list(games)

        kept: list[GameWithPrediction] = []
        per_sport: Counter = Counter()
        for game in games:
            if per_sport[game.sport] >= self._max_games_per_sport:
                continue
            per_sport[game.sport] += 1
            kept.append(game)
        return kept


# Module-level singleton
_service: Optional[AlertService] = None
_service_lock = threading.Lock()


def get_alert_service(max_games_per_sport: Optional[int] = None) -> AlertService:
    """Get the singleton alert service. The cap only applies on first creation."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = AlertService(max_games_per_sport=max_games_per_sport)
    return _service


def reset_alert_service() -> None:
    """Reset the singleton service (for testing)."""
    global _service
    with _service_lock:
        _service = None
