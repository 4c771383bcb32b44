# context/game.py
"""
Game prediction schema - the input contract for alert generation.

Each GameWithPrediction bundles one scheduled game with the model's
prediction, the pre-computed value bets and (optionally) injury reports.
Edges arrive already computed; nothing in here derives them.

Dictionaries coming from the web front end use camelCase keys, the API
uses snake_case. from_dict() accepts both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Confidence(str, Enum):
    """Discretized certainty attached to a prediction or a value bet."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Sport(str, Enum):
    """Sports the prediction source covers."""

    NBA = "nba"
    NFL = "nfl"


class BetSide(str, Enum):
    """Which side of a market a value bet takes."""

    UNDERDOG = "underdog"
    FAVORITE = "favorite"
    OVER = "over"
    UNDER = "under"


class FavoredTeam(str, Enum):
    HOME = "home"
    AWAY = "away"
    NEUTRAL = "neutral"


# Ordinal used for threshold comparisons (higher = more certain)
CONFIDENCE_ORDER = {
    Confidence.LOW: 0,
    Confidence.MEDIUM: 1,
    Confidence.HIGH: 2,
}

# Injury statuses that count as a missing player
SIGNIFICANT_INJURY_STATUSES = ("Out", "Doubtful")


def meets_confidence(
    actual: Union[Confidence, str],
    threshold: Union[Confidence, str],
) -> bool:
    """True if `actual` is at least as confident as `threshold`."""
    return CONFIDENCE_ORDER[Confidence(actual)] >= CONFIDENCE_ORDER[Confidence(threshold)]


def _pick(data: dict, snake: str, camel: str, default: Any = None) -> Any:
    """Read a key in either snake_case or camelCase form."""
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass(frozen=True)
class PredictionFactor:
    """One named input to the prediction with its signed impact in points."""

    name: str
    impact: float
    favored_team: FavoredTeam = FavoredTeam.NEUTRAL
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "favored_team", FavoredTeam(self.favored_team))

    @classmethod
    def from_dict(cls, data: dict) -> PredictionFactor:
        return cls(
            name=data["name"],
            impact=float(data.get("impact", 0.0)),
            favored_team=FavoredTeam(_pick(data, "favored_team", "favoredTeam", "neutral")),
            description=data.get("description", "") or "",
        )


@dataclass(frozen=True)
class PowerRatings:
    """Per-team strength scores. differential is always home - away."""

    home: float
    away: float
    differential: Optional[float] = None

    def __post_init__(self) -> None:
        if self.differential is None:
            object.__setattr__(self, "differential", self.home - self.away)

    @classmethod
    def from_dict(cls, data: dict) -> PowerRatings:
        differential = data.get("differential")
        return cls(
            home=float(data["home"]),
            away=float(data["away"]),
            differential=float(differential) if differential is not None else None,
        )


@dataclass(frozen=True)
class GamePrediction:
    """
    Model output for a single game.

    predicted_spread is signed: negative means the home team is favored.
    win_probability is the predicted winner's probability on a 0-100 scale.
    """

    predicted_winner: str
    win_probability: float
    confidence: Confidence
    predicted_spread: float = 0.0
    predicted_total: float = 0.0
    predicted_home_score: float = 0.0
    predicted_away_score: float = 0.0
    power_ratings: Optional[PowerRatings] = None
    factors: tuple[PredictionFactor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", Confidence(self.confidence))
        # Clamp to the 0-100 scale rather than raise
        if not 0.0 <= self.win_probability <= 100.0:
            object.__setattr__(
                self,
                "win_probability",
                max(0.0, min(100.0, self.win_probability)),
            )

    @classmethod
    def from_dict(cls, data: dict) -> GamePrediction:
        ratings = _pick(data, "power_ratings", "powerRatings")
        return cls(
            predicted_winner=_pick(data, "predicted_winner", "predictedWinner"),
            win_probability=float(_pick(data, "win_probability", "winProbability", 0.0)),
            confidence=Confidence(data["confidence"]),
            predicted_spread=float(_pick(data, "predicted_spread", "predictedSpread", 0.0)),
            predicted_total=float(_pick(data, "predicted_total", "predictedTotal", 0.0)),
            predicted_home_score=float(
                _pick(data, "predicted_home_score", "predictedHomeScore", 0.0)
            ),
            predicted_away_score=float(
                _pick(data, "predicted_away_score", "predictedAwayScore", 0.0)
            ),
            power_ratings=PowerRatings.from_dict(ratings) if ratings else None,
            factors=tuple(
                PredictionFactor.from_dict(f) for f in data.get("factors", None) or ()
            ),
        )


@dataclass(frozen=True)
class ValueBet:
    """
    A market side the model considers mispriced.

    edge is the disagreement in points between the model line and the
    market line, already computed upstream.
    """

    bet_type: str                       # spread, moneyline, total_over, total_under
    bet_side: BetSide
    team_to_bet: str                    # Team name, or "Over"/"Under" for totals
    edge: float
    confidence: Confidence
    recommendation: str = ""
    bet_description: str = ""           # e.g. "Bet LAKERS +5.5 (Underdog)"
    explanation: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "bet_side", BetSide(self.bet_side))
        object.__setattr__(self, "confidence", Confidence(self.confidence))

    @classmethod
    def from_dict(cls, data: dict) -> ValueBet:
        return cls(
            bet_type=_pick(data, "bet_type", "betType"),
            bet_side=BetSide(_pick(data, "bet_side", "betSide")),
            team_to_bet=_pick(data, "team_to_bet", "teamToBet", ""),
            edge=float(data["edge"]),
            confidence=Confidence(data["confidence"]),
            recommendation=data.get("recommendation", "") or "",
            bet_description=_pick(data, "bet_description", "betDescription", "") or "",
            explanation=data.get("explanation", "") or "",
        )


@dataclass(frozen=True)
class InjuryReport:
    """A single injury line. status is free text from the feed."""

    player_name: str
    status: str

    @property
    def is_significant(self) -> bool:
        """True only for the exact statuses Out and Doubtful."""
        return self.status in SIGNIFICANT_INJURY_STATUSES

    @classmethod
    def from_dict(cls, data: dict) -> InjuryReport:
        return cls(
            player_name=_pick(data, "player_name", "playerName", "Unknown"),
            status=data.get("status", "") or "",
        )


@dataclass(frozen=True)
class GameInjuries:
    """Injury reports for both sides of a game."""

    home: tuple[InjuryReport, ...] = field(default_factory=tuple)
    away: tuple[InjuryReport, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> GameInjuries:
        return cls(
            home=tuple(InjuryReport.from_dict(i) for i in data.get("home") or ()),
            away=tuple(InjuryReport.from_dict(i) for i in data.get("away") or ()),
        )


@dataclass(frozen=True)
class GameWithPrediction:
    """One game as handed to the alert engine."""

    game_id: str
    home_team: str
    away_team: str
    sport: Sport
    prediction: GamePrediction
    game_time: str = ""
    value_bets: tuple[ValueBet, ...] = field(default_factory=tuple)
    injuries: Optional[GameInjuries] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "game_id", str(self.game_id))
        object.__setattr__(self, "sport", Sport(self.sport))
        object.__setattr__(self, "value_bets", tuple(self.value_bets))

    @property
    def matchup(self) -> str:
        """Display form 'Away @ Home'."""
        return f"{self.away_team} @ {self.home_team}"

    @classmethod
    def from_dict(cls, data: dict) -> GameWithPrediction:
        injuries = data.get("injuries")
        return cls(
            game_id=str(_pick(data, "game_id", "gameId")),
            home_team=_pick(data, "home_team", "homeTeam"),
            away_team=_pick(data, "away_team", "awayTeam"),
            sport=Sport(data["sport"]),
            prediction=GamePrediction.from_dict(data["prediction"]),
            game_time=_pick(data, "game_time", "gameTime", "") or "",
            value_bets=tuple(
                ValueBet.from_dict(b) for b in _pick(data, "value_bets", "valueBets") or ()
            ),
            injuries=GameInjuries.from_dict(injuries) if injuries is not None else None,
        )
