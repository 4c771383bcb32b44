# app/schemas/alerts.py
"""
Pydantic schemas for the alerts API.

Request bodies mirror context.game / alerts.preferences with snake_case
fields. Conversion to core dataclasses lives in the router.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


ConfidenceLiteral = Literal["low", "medium", "high"]
SportLiteral = Literal["nba", "nfl"]
BetSideLiteral = Literal["underdog", "favorite", "over", "under"]


# =============================================================================
# Request Schemas
# =============================================================================


class PredictionFactorSchema(BaseModel):
    name: str
    impact: float = 0.0
    favored_team: Literal["home", "away", "neutral"] = "neutral"
    description: str = ""


class PowerRatingsSchema(BaseModel):
    home: float
    away: float
    differential: Optional[float] = None


class GamePredictionSchema(BaseModel):
    """Prediction source output for one game."""
    predicted_winner: str
    win_probability: float = Field(ge=0, le=100)
    confidence: ConfidenceLiteral
    predicted_spread: float = 0.0  # negative = home favored
    predicted_total: float = 0.0
    predicted_home_score: float = 0.0
    predicted_away_score: float = 0.0
    power_ratings: Optional[PowerRatingsSchema] = None
    factors: List[PredictionFactorSchema] = Field(default_factory=list)


class ValueBetSchema(BaseModel):
    """Value bet with a pre-computed edge."""
    bet_type: str  # spread, moneyline, total_over, total_under
    bet_side: BetSideLiteral
    team_to_bet: str = ""
    edge: float = Field(ge=0)
    confidence: ConfidenceLiteral
    recommendation: str = ""
    bet_description: str = ""
    explanation: str = ""


class InjurySchema(BaseModel):
    player_name: str = "Unknown"
    status: str = ""


class GameInjuriesSchema(BaseModel):
    home: List[InjurySchema] = Field(default_factory=list)
    away: List[InjurySchema] = Field(default_factory=list)


class GameSchema(BaseModel):
    game_id: str
    home_team: str
    away_team: str
    game_time: str = ""
    sport: SportLiteral
    prediction: GamePredictionSchema
    value_bets: List[ValueBetSchema] = Field(default_factory=list)
    injuries: Optional[GameInjuriesSchema] = None


class AlertPreferencesSchema(BaseModel):
    """Preference fields. Missing fields take the defaults."""
    enable_value_bet_alerts: Optional[bool] = None
    enable_high_confidence_alerts: Optional[bool] = None
    enable_line_movement_alerts: Optional[bool] = None
    enable_injury_alerts: Optional[bool] = None
    min_edge_threshold: Optional[float] = Field(default=None, ge=0)
    min_confidence: Optional[ConfidenceLiteral] = None
    sports: Optional[List[SportLiteral]] = None
    email: Optional[str] = None


class GenerateAlertsRequestSchema(BaseModel):
    """
    Request schema for alert generation.

    {
      "games": [ ... GameSchema JSON ... ],
      "preferences": { ... optional, stored preferences if omitted ... }
    }
    """
    games: List[GameSchema]
    preferences: Optional[AlertPreferencesSchema] = None


class MarkAllReadRequestSchema(BaseModel):
    alert_ids: List[str] = Field(default_factory=list)


# =============================================================================
# Response Schemas
# =============================================================================


class AlertSchema(BaseModel):
    alert_id: str
    user_id: str
    alert_type: str
    title: str
    message: str
    game_id: str
    priority: str
    created_at: str
    subject: str
    read: bool
    bet_side: Optional[str] = None
    edge: Optional[float] = None
    confidence: Optional[str] = None
    sport: Optional[str] = None
    time_ago: str


class PreferencesResponseSchema(BaseModel):
    user_id: str
    enable_value_bet_alerts: bool
    enable_high_confidence_alerts: bool
    enable_line_movement_alerts: bool
    enable_injury_alerts: bool
    min_edge_threshold: float
    min_confidence: str
    sports: List[str]
    email: Optional[str] = None


class GenerateAlertsResponseSchema(BaseModel):
    request_id: str
    alerts: List[AlertSchema]
    preferences: PreferencesResponseSchema
    unread_count: int
    counts_by_type: dict[str, int]


class ServiceDisabledResponseSchema(BaseModel):
    """Response when alerts are disabled."""
    error: str = "Alerts disabled"
    detail: str = "Alert generation is currently disabled. Set ALERTS_ENABLED=true to enable."
    code: str = "SERVICE_DISABLED"
