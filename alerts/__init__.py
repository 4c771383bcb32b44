# alerts/__init__.py
"""
Prediction alerts module.

Turns game predictions, value bets and injury reports into ranked,
per-user alerts.
"""

from alerts.models import Alert, AlertType, AlertPriority
from alerts.preferences import AlertPreferences, DEFAULT_PREFERENCES
from alerts.engine import generate_alerts, sort_alerts
from alerts.service import AlertService, get_alert_service

__all__ = [
    "Alert",
    "AlertType",
    "AlertPriority",
    "AlertPreferences",
    "DEFAULT_PREFERENCES",
    "generate_alerts",
    "sort_alerts",
    "AlertService",
    "get_alert_service",
]
