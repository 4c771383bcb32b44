# alerts/triggers.py
"""
Trigger rules for converting game predictions to alerts.

Each rule looks at one game and the user's preferences:
1. Value bet clears edge + confidence thresholds → value_bet alert
2. High-confidence prediction at 65%+ → high_confidence alert
3. Two or more key players Out/Doubtful on a side → injury alert

Rules share the (game, preferences, now) -> list[Alert] contract so new
alert types plug into DEFAULT_RULES without touching the aggregator.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

from alerts.models import (
    Alert,
    AlertType,
    build_alert_id,
    injury_priority,
    pick_priority,
    value_bet_priority,
)
from alerts.preferences import AlertPreferences
from context.game import (
    BetSide,
    Confidence,
    GameWithPrediction,
    InjuryReport,
    ValueBet,
    meets_confidence,
)


# Minimum predicted win probability for a high-confidence pick
HIGH_CONFIDENCE_MIN_PROBABILITY = 65

# Significant injuries on one side needed before alerting
INJURY_ALERT_MIN_PLAYERS = 2

# Player names listed in an injury message
INJURY_MESSAGE_MAX_NAMES = 3

SIDE_ICONS = {
    BetSide.UNDERDOG: "🐕",
    BetSide.FAVORITE: "👑",
    BetSide.OVER: "📈",
    BetSide.UNDER: "📉",
}

PICK_SUBJECT = "pick"


TriggerFn = Callable[[GameWithPrediction, AlertPreferences, datetime], list[Alert]]


@dataclass(frozen=True)
class TriggerRule:
    """An alert type, the preference toggle that enables it, and its generator."""

    alert_type: AlertType
    is_enabled: Callable[[AlertPreferences], bool]
    generate: TriggerFn


def qualifies_value_bet(bet: ValueBet, preferences: AlertPreferences) -> bool:
    """
    Determine if a value bet warrants an alert.

    Rules:
    - Edge at or above the user's minimum edge
    - Bet confidence at or above the user's minimum confidence
    """
    return (
        bet.edge >= preferences.min_edge_threshold
        and meets_confidence(bet.confidence, preferences.min_confidence)
    )


def value_bet_subjects(bets: Iterable[ValueBet]) -> list[str]:
    """
    Alert subject for each bet, in order.

    First occurrence of a (bet_type, bet_side) pair: 'spread:underdog'.
    Later occurrences: 'spread:underdog:2', 'spread:underdog:3', ...
    """
    seen: Counter = Counter()
    subjects: list[str] = []
    for bet in bets:
        base = f"{bet.bet_type}:{bet.bet_side.value}"
        seen[base] += 1
        subjects.append(base if seen[base] == 1 else f"{base}:{seen[base]}")
    return subjects


def value_bet_alerts(
    game: GameWithPrediction,
    preferences: AlertPreferences,
    now: datetime,
) -> list[Alert]:
    """
    One alert per value bet that clears both thresholds.

    Repeated (bet_type, bet_side) pairs on one game get a position suffix
    so every retained bet keeps its own id. Positions count over all of the
    game's bets, so an id does not depend on the user's thresholds.
    """
    alerts: list[Alert] = []

    for bet, subject in zip(game.value_bets, value_bet_subjects(game.value_bets)):
        if not qualifies_value_bet(bet, preferences):
            continue

        alerts.append(Alert(
            alert_id=build_alert_id(AlertType.VALUE_BET, game.game_id, subject),
            user_id=preferences.user_id,
            alert_type=AlertType.VALUE_BET,
            title=f"{SIDE_ICONS[bet.bet_side]} {bet.bet_side.value.upper()} Value: {bet.team_to_bet}",
            message=bet.bet_description,
            game_id=game.game_id,
            priority=value_bet_priority(bet.edge),
            created_at=now,
            subject=subject,
            bet_side=bet.bet_side,
            edge=bet.edge,
            confidence=bet.confidence,
            sport=game.sport,
        ))

    return alerts


def high_confidence_alerts(
    game: GameWithPrediction,
    preferences: AlertPreferences,
    now: datetime,
) -> list[Alert]:
    """
    Alert on a high-confidence prediction with 65%+ win probability.

    Gated only by its toggle; min_confidence and min_edge_threshold
    apply to value bets, not to picks.
    """
    prediction = game.prediction
    if prediction.confidence != Confidence.HIGH:
        return []
    if prediction.win_probability < HIGH_CONFIDENCE_MIN_PROBABILITY:
        return []

    return [Alert(
        alert_id=build_alert_id(AlertType.HIGH_CONFIDENCE, game.game_id, PICK_SUBJECT),
        user_id=preferences.user_id,
        alert_type=AlertType.HIGH_CONFIDENCE,
        title=f"High Confidence Pick: {prediction.predicted_winner}",
        message=f"{_format_probability(prediction.win_probability)}% win probability | {game.matchup}",
        game_id=game.game_id,
        priority=pick_priority(prediction.win_probability),
        created_at=now,
        subject=PICK_SUBJECT,
        confidence=Confidence.HIGH,
        sport=game.sport,
    )]


def injury_alerts(
    game: GameWithPrediction,
    preferences: AlertPreferences,
    now: datetime,
) -> list[Alert]:
    """Home and away are checked independently: 0, 1 or 2 alerts."""
    if game.injuries is None:
        return []

    alerts: list[Alert] = []
    sides = (
        ("home", game.home_team, game.injuries.home),
        ("away", game.away_team, game.injuries.away),
    )
    for side, team, reports in sides:
        alert = _side_injury_alert(game, preferences, now, side, team, reports)
        if alert is not None:
            alerts.append(alert)

    return alerts


def _side_injury_alert(
    game: GameWithPrediction,
    preferences: AlertPreferences,
    now: datetime,
    side: str,
    team: str,
    reports: tuple[InjuryReport, ...],
) -> Optional[Alert]:
    significant = [r for r in reports if r.is_significant]
    if len(significant) < INJURY_ALERT_MIN_PLAYERS:
        return None

    names = ", ".join(r.player_name for r in significant[:INJURY_MESSAGE_MAX_NAMES])
    return Alert(
        alert_id=build_alert_id(AlertType.INJURY, game.game_id, side),
        user_id=preferences.user_id,
        alert_type=AlertType.INJURY,
        title=f"Injury Alert: {team}",
        message=f"{len(significant)} players OUT: {names}",
        game_id=game.game_id,
        priority=injury_priority(len(significant)),
        created_at=now,
        subject=side,
        sport=game.sport,
    )


def _format_probability(value: float) -> str:
    # 68.0 -> "68", 68.5 -> "68.5"
    return f"{value:g}"


DEFAULT_RULES: tuple[TriggerRule, ...] = (
    TriggerRule(
        alert_type=AlertType.VALUE_BET,
        is_enabled=lambda p: p.enable_value_bet_alerts,
        generate=value_bet_alerts,
    ),
    TriggerRule(
        alert_type=AlertType.HIGH_CONFIDENCE,
        is_enabled=lambda p: p.enable_high_confidence_alerts,
        generate=high_confidence_alerts,
    ),
    TriggerRule(
        alert_type=AlertType.INJURY,
        is_enabled=lambda p: p.enable_injury_alerts,
        generate=injury_alerts,
    ),
)
