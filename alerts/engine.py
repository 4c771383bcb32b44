# alerts/engine.py
"""
Alert aggregator.

Single pass over a batch of games:
- Keep games in the user's sports
- Run every enabled trigger rule per game
- Rank: priority (high, medium, low), then newest first

Pure function, no state between calls. Persistence and read state
belong to alerts.store.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from alerts.models import Alert, to_datetime, utc_now
from alerts.preferences import AlertPreferences
from alerts.triggers import DEFAULT_RULES, TriggerRule
from context.game import GameWithPrediction


_logger = logging.getLogger(__name__)


def generate_alerts(
    games: Iterable[GameWithPrediction],
    preferences: AlertPreferences,
    now: Optional[datetime] = None,
    rules: Sequence[TriggerRule] = DEFAULT_RULES,
) -> list[Alert]:
    """
    Generate ranked alerts for one user from a batch of games.

    Args:
        games: Games with predictions, value bets and optional injuries
        preferences: User toggles and thresholds
        now: Timestamp stamped on every alert (defaults to current UTC time)
        rules: Trigger rules to apply (DEFAULT_RULES unless overridden)

    Returns:
        Alerts sorted by priority then creation time, newest first
    """
    if now is None:
        now = utc_now()

    if preferences.enable_line_movement_alerts:
        _logger.debug("Line movement alerts requested but no line history source is configured")

    active_rules = [rule for rule in rules if rule.is_enabled(preferences)]

    alerts: list[Alert] = []
    seen: set = set()
    game_count = 0

    for game in games:
        if not preferences.wants_sport(game.sport):
            continue
        game_count += 1

        for rule in active_rules:
            for alert in rule.generate(game, preferences, now):
                # Duplicate games in one batch must not double-alert
                if alert.key in seen:
                    continue
                seen.add(alert.key)
                alerts.append(alert)

    _logger.debug(
        f"Generated {len(alerts)} alert(s) from {game_count} game(s) for user {preferences.user_id}"
    )

    return sort_alerts(alerts)


def sort_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    """
    Rank alerts: high priority first, then newest first.

    created_at may be a datetime or ISO text (alerts rebuilt from JSON).
    """
    # Stable sorts: secondary key first, then primary
    by_time = sorted(alerts, key=lambda a: to_datetime(a.created_at), reverse=True)
    return sorted(by_time, key=lambda a: a.priority.rank)
