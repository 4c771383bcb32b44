# alerts/tests/test_formatting.py
"""Tests for alert display helpers."""

from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from alerts.engine import generate_alerts
from alerts.formatting import (
    PRIORITY_COLORS,
    TYPE_ICONS,
    filter_by_sport,
    filter_by_type,
    format_alert_message,
    group_by_type,
    priority_color,
    priority_icon,
    time_ago,
    type_icon,
    unread_count,
)
from alerts.models import Alert, AlertPriority, AlertType
from alerts.preferences import AlertPreferences
from context.game import (
    BetSide,
    Confidence,
    GameInjuries,
    GamePrediction,
    GameWithPrediction,
    InjuryReport,
    Sport,
    ValueBet,
)


NOW = datetime(2026, 1, 15, 18, 0, tzinfo=timezone.utc)


def make_alert(alert_id="a1", alert_type=AlertType.VALUE_BET, sport=Sport.NBA,
               read=False, priority=AlertPriority.HIGH) -> Alert:
    return Alert(
        alert_id=alert_id,
        user_id="u",
        alert_type=alert_type,
        title="Title",
        message="Message",
        game_id="g1",
        priority=priority,
        created_at=NOW,
        subject=alert_id,
        read=read,
        sport=sport,
    )


def sample_batch() -> list[Alert]:
    """A realistic engine output with every produced type, both sports."""
    games = []
    for i, sport in enumerate([Sport.NBA, Sport.NFL, Sport.NBA]):
        games.append(GameWithPrediction(
            game_id=f"g{i}",
            home_team=f"Home {i}",
            away_team=f"Away {i}",
            sport=sport,
            prediction=GamePrediction(
                predicted_winner=f"Home {i}",
                win_probability=70 + i * 5,
                confidence=Confidence.HIGH,
            ),
            value_bets=(
                ValueBet("spread", BetSide.UNDERDOG, f"Away {i}", 4 + i, Confidence.HIGH),
                ValueBet("total_over", BetSide.OVER, "Over", 3.5, Confidence.MEDIUM),
            ),
            injuries=GameInjuries(
                home=(InjuryReport("A", "Out"), InjuryReport("B", "Doubtful")),
            ),
        ))
    return generate_alerts(games, AlertPreferences.with_defaults("u"), now=NOW)


class TestTimeAgo:
    """Test relative time labels."""

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=0), "Just now"),
        (timedelta(seconds=59), "Just now"),
        (timedelta(minutes=1), "1m ago"),
        (timedelta(minutes=59, seconds=59), "59m ago"),
        (timedelta(minutes=60), "1h ago"),
        (timedelta(hours=23, minutes=59), "23h ago"),
        (timedelta(hours=24), "1d ago"),
        (timedelta(days=3, hours=23), "3d ago"),
    ])
    def test_boundaries(self, delta, expected):
        assert time_ago(NOW - delta, now=NOW) == expected

    def test_iso_text(self):
        assert time_ago("2026-01-15T17:30:00Z", now=NOW) == "30m ago"

    def test_future_timestamp_is_just_now(self):
        assert time_ago(NOW + timedelta(minutes=5), now=NOW) == "Just now"


class TestIconsAndColors:
    """Test the display lookups."""

    def test_priority_color(self):
        assert priority_color(AlertPriority.HIGH).startswith("text-red-400")
        assert priority_color("medium").startswith("text-yellow-400")
        assert priority_color("low").startswith("text-gray-400")
        assert set(PRIORITY_COLORS) == set(AlertPriority)

    def test_priority_icon(self):
        assert priority_icon("high") == "🔴"
        assert priority_icon(AlertPriority.MEDIUM) == "🟡"
        assert priority_icon("low") == "⚪"

    def test_type_icon_covers_all_types(self):
        assert set(TYPE_ICONS) == set(AlertType)
        assert type_icon("value_bet") == "💰"
        assert type_icon(AlertType.HIGH_CONFIDENCE) == "✅"
        assert type_icon("line_movement") == "📊"
        assert type_icon("injury") == "🏥"

    def test_unknown_priority_raises(self):
        with pytest.raises(ValueError):
            priority_color("urgent")

    def test_format_alert_message(self):
        alert = replace(make_alert(), created_at=NOW - timedelta(hours=2))
        assert format_alert_message(alert, now=NOW) == "🔴 Title\nMessage\n2h ago"


class TestGroupByType:
    """Test grouping."""

    def test_groups_preserve_order(self):
        alerts = [
            make_alert("v1", AlertType.VALUE_BET),
            make_alert("i1", AlertType.INJURY),
            make_alert("v2", AlertType.VALUE_BET),
        ]
        groups = group_by_type(alerts)

        assert [a.alert_id for a in groups[AlertType.VALUE_BET]] == ["v1", "v2"]
        assert [a.alert_id for a in groups[AlertType.INJURY]] == ["i1"]
        assert AlertType.HIGH_CONFIDENCE not in groups

    def test_grouping_completeness(self):
        alerts = sample_batch()
        groups = group_by_type(alerts)
        flattened = [a for group in groups.values() for a in group]

        assert Counter(a.alert_id for a in flattened) == Counter(a.alert_id for a in alerts)
        assert len(flattened) == len(alerts)

    def test_empty(self):
        assert group_by_type([]) == {}


class TestFilters:
    """Test sport/type filters."""

    def test_all_is_passthrough(self):
        alerts = sample_batch()
        assert filter_by_sport(alerts, "all") is alerts
        assert filter_by_type(alerts, "all") is alerts

    def test_sport_exact_match(self):
        alerts = sample_batch()
        nfl = filter_by_sport(alerts, "nfl")
        assert nfl
        assert all(a.sport == Sport.NFL for a in nfl)

    def test_sport_filter_idempotent(self):
        alerts = sample_batch()
        once = filter_by_sport(alerts, Sport.NBA)
        twice = filter_by_sport(once, Sport.NBA)
        assert once == twice

    def test_type_filter(self):
        injuries = filter_by_type(sample_batch(), "injury")
        assert injuries
        assert all(a.alert_type == AlertType.INJURY for a in injuries)

    def test_alert_without_sport_excluded(self):
        alerts = [make_alert(sport=None)]
        assert filter_by_sport(alerts, "nba") == []


class TestUnreadCount:
    """Test unread count."""

    def test_counts_unread(self):
        alerts = [make_alert("a"), make_alert("b", read=True), make_alert("c")]
        assert unread_count(alerts) == 2

    def test_fresh_batch_all_unread(self):
        alerts = sample_batch()
        assert unread_count(alerts) == len(alerts)
