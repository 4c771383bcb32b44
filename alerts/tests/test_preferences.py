# alerts/tests/test_preferences.py
"""Tests for alert preferences."""

import pytest

from alerts.preferences import DEFAULT_PREFERENCES, AlertPreferences
from context.game import Confidence, Sport


class TestDefaults:
    """Test default preferences."""

    def test_default_values(self):
        prefs = AlertPreferences.with_defaults("user-1")

        assert prefs.user_id == "user-1"
        assert prefs.enable_value_bet_alerts is True
        assert prefs.enable_high_confidence_alerts is True
        assert prefs.enable_line_movement_alerts is False
        assert prefs.enable_injury_alerts is True
        assert prefs.min_edge_threshold == 3.0
        assert prefs.min_confidence == Confidence.MEDIUM
        assert prefs.sports == frozenset({Sport.NBA, Sport.NFL})

    def test_default_singleton_has_no_user(self):
        assert DEFAULT_PREFERENCES.user_id == ""


class TestWithDefaults:
    """Test merging overrides over defaults."""

    def test_overrides_applied(self):
        prefs = AlertPreferences.with_defaults(
            "user-1",
            min_edge_threshold=5,
            min_confidence="high",
            sports=["nfl"],
            enable_injury_alerts=False,
        )
        assert prefs.min_edge_threshold == 5.0
        assert prefs.min_confidence == Confidence.HIGH
        assert prefs.sports == frozenset({Sport.NFL})
        assert prefs.enable_injury_alerts is False
        # Untouched fields keep defaults
        assert prefs.enable_value_bet_alerts is True

    def test_user_id_cannot_be_overridden(self):
        prefs = AlertPreferences.with_defaults("user-1", user_id="someone-else")
        assert prefs.user_id == "user-1"

    def test_unknown_and_none_ignored(self):
        prefs = AlertPreferences.with_defaults("user-1", favorite_team="Lakers", min_confidence=None)
        assert prefs.min_confidence == Confidence.MEDIUM

    def test_line_movement_kept(self):
        prefs = AlertPreferences.with_defaults("user-1", enable_line_movement_alerts=True)
        assert prefs.enable_line_movement_alerts is True

    def test_invalid_confidence_raises(self):
        with pytest.raises(ValueError):
            AlertPreferences.with_defaults("user-1", min_confidence="certain")

    def test_invalid_sport_raises(self):
        with pytest.raises(ValueError):
            AlertPreferences.with_defaults("user-1", sports=["nhl"])


class TestWantsSport:
    """Test sport membership."""

    def test_accepts_enum_or_string(self):
        prefs = AlertPreferences.with_defaults("u", sports=["nba"])
        assert prefs.wants_sport(Sport.NBA) is True
        assert prefs.wants_sport("nba") is True
        assert prefs.wants_sport("nfl") is False

    def test_empty_sports_wants_nothing(self):
        prefs = AlertPreferences(user_id="u", sports=[])
        assert prefs.wants_sport("nba") is False


class TestToDict:
    """Test serialization."""

    def test_to_dict(self):
        prefs = AlertPreferences.with_defaults("user-1", email="a@b.co")
        d = prefs.to_dict()

        assert d["user_id"] == "user-1"
        assert d["min_confidence"] == "medium"
        assert d["sports"] == ["nba", "nfl"]
        assert d["email"] == "a@b.co"
        assert d["enable_line_movement_alerts"] is False
