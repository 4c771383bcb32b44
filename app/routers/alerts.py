# app/routers/alerts.py
"""
Alerts API Router.

Exposes alert generation, preferences and read state over HTTP.
Feature-flagged via ALERTS_ENABLED environment variable (default on).
"""
from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request, status

from alerts.formatting import filter_by_sport, filter_by_type, group_by_type, time_ago, unread_count
from alerts.models import Alert, utc_now
from alerts.preferences import AlertPreferences
from alerts.service import AlertService, get_alert_service
from app.config import is_alerts_enabled, load_config
from app.correlation import get_request_id, get_user_id
from app.schemas.alerts import (
    AlertPreferencesSchema,
    AlertSchema,
    GenerateAlertsRequestSchema,
    GenerateAlertsResponseSchema,
    MarkAllReadRequestSchema,
    PreferencesResponseSchema,
    ServiceDisabledResponseSchema,
)
from context.game import GameWithPrediction

logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(
    prefix="/alerts",
    tags=["Alerts"],
)

SportFilter = Literal["all", "nba", "nfl"]
TypeFilter = Literal["all", "value_bet", "high_confidence", "line_movement", "injury"]


# =============================================================================
# Feature Flag
# =============================================================================


def _require_enabled() -> None:
    if not is_alerts_enabled():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=ServiceDisabledResponseSchema().model_dump(),
        )


def _service() -> AlertService:
    return get_alert_service(
        max_games_per_sport=load_config(fail_fast=False).max_games_per_sport
    )


# =============================================================================
# Conversion Functions
# =============================================================================


def _convert_alert(alert: Alert, now) -> AlertSchema:
    """Convert core Alert to schema, adding the relative time label."""
    return AlertSchema(**alert.to_dict(), time_ago=time_ago(alert.created_at, now))


def _convert_preferences(preferences: AlertPreferences) -> PreferencesResponseSchema:
    return PreferencesResponseSchema(**preferences.to_dict())


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/status",
    summary="Check alerts status",
    description="Check if the alerts feature is enabled.",
)
async def status_check():
    """Check if alerts are enabled."""
    return {
        "enabled": is_alerts_enabled(),
        "service": "alerts",
    }


@router.post(
    "/generate",
    response_model=GenerateAlertsResponseSchema,
    responses={
        200: {"description": "Alerts generated"},
        400: {"description": "Invalid request"},
        503: {
            "description": "Service disabled",
            "model": ServiceDisabledResponseSchema,
        },
    },
    summary="Generate alerts",
    description="Generate ranked alerts for the calling user from a batch of game predictions.",
)
async def generate(
    request: GenerateAlertsRequestSchema,
    raw_request: Request,
    sport: SportFilter = "all",
    alert_type: TypeFilter = Query("all", alias="type"),
) -> GenerateAlertsResponseSchema:
    """
    Generate alerts for the calling user.

    Uses the preferences in the body when given, otherwise the user's
    stored preferences. Read state is applied from earlier mark-read calls.
    """
    _require_enabled()

    request_id = get_request_id(raw_request) or "unknown"
    user_id = get_user_id(raw_request)
    service = _service()

    try:
        games = [GameWithPrediction.from_dict(g.model_dump()) for g in request.games]

        if request.preferences is not None:
            preferences = AlertPreferences.with_defaults(
                user_id, **request.preferences.model_dump(exclude_none=True)
            )
        else:
            preferences = service.get_preferences(user_id)

        now = utc_now()
        alerts = service.alerts_for_user(user_id, games, preferences=preferences, now=now)
        alerts = filter_by_type(filter_by_sport(alerts, sport), alert_type)

        return GenerateAlertsResponseSchema(
            request_id=request_id,
            alerts=[_convert_alert(a, now) for a in alerts],
            preferences=_convert_preferences(preferences),
            unread_count=unread_count(alerts),
            counts_by_type={t.value: len(group) for t, group in group_by_type(alerts).items()},
        )

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid request",
                "detail": str(e),
                "code": "VALIDATION_ERROR",
            },
        )
    except Exception as e:
        logger.exception(f"Alert generation failed (request_id={request_id})")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal error",
                "detail": str(e),
                "code": "INTERNAL_ERROR",
            },
        )


@router.get(
    "/preferences",
    response_model=PreferencesResponseSchema,
    summary="Get alert preferences",
)
async def get_preferences(raw_request: Request) -> PreferencesResponseSchema:
    """Stored preferences for the calling user, or defaults."""
    _require_enabled()
    preferences = _service().get_preferences(get_user_id(raw_request))
    return _convert_preferences(preferences)


@router.put(
    "/preferences",
    response_model=PreferencesResponseSchema,
    summary="Save alert preferences",
)
async def save_preferences(
    body: AlertPreferencesSchema,
    raw_request: Request,
) -> PreferencesResponseSchema:
    """Merge the given fields over the defaults and store them."""
    _require_enabled()
    preferences = _service().save_preferences(
        get_user_id(raw_request), **body.model_dump(exclude_none=True)
    )
    return _convert_preferences(preferences)


@router.post(
    "/read",
    summary="Mark alerts read",
)
async def mark_all_read(body: MarkAllReadRequestSchema, raw_request: Request):
    """Mark every given alert id as read for the calling user."""
    _require_enabled()
    count = _service().mark_all_read(get_user_id(raw_request), body.alert_ids)
    return {"success": True, "marked": count}


@router.post(
    "/{alert_id}/read",
    summary="Mark one alert read",
)
async def mark_read(alert_id: str, raw_request: Request):
    """Mark a single alert as read for the calling user."""
    _require_enabled()
    _service().mark_read(get_user_id(raw_request), alert_id)
    return {"success": True, "alert_id": alert_id}
