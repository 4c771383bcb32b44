# alerts/formatting.py
"""
Display helpers for alert lists.

Pure functions used by the API and any rendering surface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Union

from alerts.models import Alert, AlertPriority, AlertType, to_datetime, utc_now
from context.game import Sport


ALL = "all"

PRIORITY_COLORS = {
    AlertPriority.HIGH: "text-red-400 bg-red-500/10 border-red-500/30",
    AlertPriority.MEDIUM: "text-yellow-400 bg-yellow-500/10 border-yellow-500/30",
    AlertPriority.LOW: "text-gray-400 bg-gray-500/10 border-gray-500/30",
}

PRIORITY_ICONS = {
    AlertPriority.HIGH: "🔴",
    AlertPriority.MEDIUM: "🟡",
    AlertPriority.LOW: "⚪",
}

TYPE_ICONS = {
    AlertType.VALUE_BET: "💰",
    AlertType.HIGH_CONFIDENCE: "✅",
    AlertType.LINE_MOVEMENT: "📊",
    AlertType.INJURY: "🏥",
}


def time_ago(created_at: Union[datetime, str], now: Optional[datetime] = None) -> str:
    """
    Relative time label: 'Just now', '5m ago', '3h ago', '2d ago'.

    Each unit is truncated toward zero.
    """
    if now is None:
        now = utc_now()
    elapsed = to_datetime(now) - to_datetime(created_at)

    minutes = int(elapsed.total_seconds() / 60)
    hours = int(minutes / 60)
    days = int(hours / 24)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{days}d ago"


def priority_color(priority: Union[AlertPriority, str]) -> str:
    return PRIORITY_COLORS[AlertPriority(priority)]


def priority_icon(priority: Union[AlertPriority, str]) -> str:
    return PRIORITY_ICONS[AlertPriority(priority)]


def type_icon(alert_type: Union[AlertType, str]) -> str:
    return TYPE_ICONS[AlertType(alert_type)]


def format_alert_message(alert: Alert, now: Optional[datetime] = None) -> str:
    """Plain-text rendering: icon + title, message, relative time."""
    return (
        f"{priority_icon(alert.priority)} {alert.title}\n"
        f"{alert.message}\n"
        f"{time_ago(alert.created_at, now)}"
    )


def group_by_type(alerts: Iterable[Alert]) -> dict[AlertType, list[Alert]]:
    """Partition alerts by type. Order within each group is preserved."""
    groups: dict[AlertType, list[Alert]] = {}
    for alert in alerts:
        groups.setdefault(alert.alert_type, []).append(alert)
    return groups


def filter_by_sport(alerts: list[Alert], sport: Union[Sport, str]) -> list[Alert]:
    """'all' returns the input unchanged; otherwise exact sport match."""
    if sport == ALL:
        return alerts
    wanted = Sport(sport)
    return [a for a in alerts if a.sport == wanted]


def filter_by_type(alerts: list[Alert], alert_type: Union[AlertType, str]) -> list[Alert]:
    """'all' returns the input unchanged; otherwise exact type match."""
    if alert_type == ALL:
        return alerts
    wanted = AlertType(alert_type)
    return [a for a in alerts if a.alert_type == wanted]


def unread_count(alerts: Iterable[Alert]) -> int:
    return sum(1 for a in alerts if not a.read)
