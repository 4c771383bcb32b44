# alerts/preferences.py
"""
Per-user alert preferences.

Toggles select which trigger rules run; thresholds only gate value bets.
enable_line_movement_alerts is stored and echoed back, but no rule
consumes it until a line history source exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Iterable, Optional, Union

from context.game import Confidence, Sport


@dataclass(frozen=True)
class AlertPreferences:
    """Alert settings for one user."""

    user_id: str
    enable_value_bet_alerts: bool = True
    enable_high_confidence_alerts: bool = True
    enable_line_movement_alerts: bool = False   # Requires real-time line data
    enable_injury_alerts: bool = True
    min_edge_threshold: float = 3.0             # Points of edge
    min_confidence: Confidence = Confidence.MEDIUM
    sports: frozenset[Sport] = field(
        default_factory=lambda: frozenset({Sport.NBA, Sport.NFL})
    )
    email: Optional[str] = None

    def __post_init__(self) -> None:
        # Normalize raw values passed in from dicts
        object.__setattr__(self, "min_confidence", Confidence(self.min_confidence))
        object.__setattr__(self, "min_edge_threshold", float(self.min_edge_threshold))
        object.__setattr__(self, "sports", _normalize_sports(self.sports))

    def wants_sport(self, sport: Union[Sport, str]) -> bool:
        return Sport(sport) in self.sports

    @classmethod
    def with_defaults(cls, user_id: str, **overrides) -> AlertPreferences:
        """
        Build preferences from defaults plus overrides.

        Unknown keys and None values are ignored. user_id always wins
        over any user_id in overrides.
        """
        known = {f.name for f in fields(cls)} - {"user_id"}
        clean = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(DEFAULT_PREFERENCES, user_id=user_id, **clean)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "enable_value_bet_alerts": self.enable_value_bet_alerts,
            "enable_high_confidence_alerts": self.enable_high_confidence_alerts,
            "enable_line_movement_alerts": self.enable_line_movement_alerts,
            "enable_injury_alerts": self.enable_injury_alerts,
            "min_edge_threshold": self.min_edge_threshold,
            "min_confidence": self.min_confidence.value,
            "sports": sorted(s.value for s in self.sports),
            "email": self.email,
        }


def _normalize_sports(sports: Iterable[Union[Sport, str]]) -> frozenset[Sport]:
    return frozenset(Sport(s) for s in sports)


DEFAULT_PREFERENCES = AlertPreferences(user_id="")
