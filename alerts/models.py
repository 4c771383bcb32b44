# alerts/models.py
"""
Alert data models.

Defines the Alert schema and related enums.
Every alert is derived from a single game in the input batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from context.game import BetSide, Confidence, Sport


class AlertType(str, Enum):
    """Types of alerts the system can generate."""

    VALUE_BET = "value_bet"
    HIGH_CONFIDENCE = "high_confidence"
    LINE_MOVEMENT = "line_movement"     # Reserved, no line history source yet
    INJURY = "injury"


class AlertPriority(str, Enum):
    """Urgency tier, computed independently of confidence."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, high first."""
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    AlertPriority.HIGH: 0,
    AlertPriority.MEDIUM: 1,
    AlertPriority.LOW: 2,
}

# Short prefix per type, used to build alert ids
ID_PREFIXES = {
    AlertType.VALUE_BET: "vb",
    AlertType.HIGH_CONFIDENCE: "hc",
    AlertType.LINE_MOVEMENT: "lm",
    AlertType.INJURY: "inj",
}


def to_datetime(value: Union[datetime, str]) -> datetime:
    """
    Normalize a timestamp to an aware datetime.

    Accepts datetime objects or ISO-8601 text (including a trailing 'Z').
    Naive values are taken to be UTC.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_alert_id(alert_type: AlertType, game_id: str, subject: str) -> str:
    """Deterministic id from the structural key (game, type, subject)."""
    return f"{ID_PREFIXES[alert_type]}-{game_id}-{subject}"


@dataclass(frozen=True)
class Alert:
    """
    Immutable alert record.

    (game_id, alert_type, subject) is unique within one generation pass.
    subject discriminates alerts of the same type on the same game:
    bet type and side for value bets (numbered when a pair repeats),
    home/away for injuries, 'pick' for high-confidence picks.
    """

    alert_id: str
    user_id: str
    alert_type: AlertType
    title: str
    message: str
    game_id: str
    priority: AlertPriority
    created_at: datetime
    subject: str = ""
    read: bool = False

    # Type-specific context
    bet_side: Optional[BetSide] = None
    edge: Optional[float] = None
    confidence: Optional[Confidence] = None
    sport: Optional[Sport] = None

    @property
    def key(self) -> tuple[str, AlertType, str]:
        return (self.game_id, self.alert_type, self.subject)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            "alert_id": self.alert_id,
            "user_id": self.user_id,
            "alert_type": self.alert_type.value,
            "title": self.title,
            "message": self.message,
            "game_id": self.game_id,
            "priority": self.priority.value,
            "created_at": self.created_at.isoformat(),
            "subject": self.subject,
            "read": self.read,
            "bet_side": self.bet_side.value if self.bet_side else None,
            "edge": self.edge,
            "confidence": self.confidence.value if self.confidence else None,
            "sport": self.sport.value if self.sport else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Alert:
        """Rebuild an alert from to_dict() output."""
        bet_side = data.get("bet_side")
        confidence = data.get("confidence")
        sport = data.get("sport")
        edge = data.get("edge")
        return cls(
            alert_id=data["alert_id"],
            user_id=data["user_id"],
            alert_type=AlertType(data["alert_type"]),
            title=data.get("title", ""),
            message=data.get("message", ""),
            game_id=data["game_id"],
            priority=AlertPriority(data["priority"]),
            created_at=to_datetime(data["created_at"]),
            subject=data.get("subject", ""),
            read=bool(data.get("read", False)),
            bet_side=BetSide(bet_side) if bet_side else None,
            edge=float(edge) if edge is not None else None,
            confidence=Confidence(confidence) if confidence else None,
            sport=Sport(sport) if sport else None,
        )


def value_bet_priority(edge: float) -> AlertPriority:
    if edge >= 5:
        return AlertPriority.HIGH
    if edge >= 4:
        return AlertPriority.MEDIUM
    return AlertPriority.LOW


def pick_priority(win_probability: float) -> AlertPriority:
    return AlertPriority.HIGH if win_probability >= 75 else AlertPriority.MEDIUM


def injury_priority(count: int) -> AlertPriority:
    return AlertPriority.HIGH if count >= 3 else AlertPriority.MEDIUM
