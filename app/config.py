# app/config.py
"""
Centralized configuration management with startup validation.

Defines the environment variables the alerts API reads and provides
safe configuration loading with validation and logging.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SERVICE_NAME = "prediction-alerts"
SERVICE_VERSION = "0.1.0"

# Default values
DEFAULT_MAX_REQUEST_SIZE_BYTES = 1_048_576  # 1MB
MIN_REQUEST_SIZE_BYTES = 1024  # 1KB minimum
DEFAULT_MAX_GAMES_PER_SPORT = 10

_BOOL_VALUES = ("true", "1", "yes", "on", "false", "0", "no", "off")


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class AppConfig:
    """Application configuration loaded from environment."""

    # Service info
    service_name: str = SERVICE_NAME
    service_version: str = SERVICE_VERSION
    environment: str = "development"

    # Security settings
    max_request_size_bytes: int = DEFAULT_MAX_REQUEST_SIZE_BYTES

    # Alerts
    alerts_enabled: bool = True
    max_games_per_sport: int = DEFAULT_MAX_GAMES_PER_SPORT

    # Warnings collected during config load
    warnings: list = field(default_factory=list)


# =============================================================================
# Configuration Loading
# =============================================================================


def _parse_int_env(
    name: str, default: int, min_value: Optional[int] = None
) -> tuple[int, Optional[str]]:
    """
    Parse an integer environment variable with validation.

    Returns (value, warning_message).
    On invalid input, returns default with a warning.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default, None

    try:
        value = int(raw)
    except ValueError:
        warning = f"{name}='{raw}' is not a valid integer; using default {default}"
        return default, warning

    if min_value is not None and value < min_value:
        warning = f"{name}={value} is below minimum {min_value}; using default {default}"
        return default, warning

    return value, None


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    raw = os.environ.get(name, "").lower()
    if raw in ("true", "1", "yes", "on"):
        return True
    if raw in ("false", "0", "no", "off"):
        return False
    return default


def is_alerts_enabled() -> bool:
    """
    Live value of ALERTS_ENABLED (default on).

    Read per call so the flag can be flipped without a restart. Values that
    are not booleans count as on, matching load_config(fail_fast=False).
    """
    return _parse_bool_env("ALERTS_ENABLED", True)


def load_config(fail_fast: bool = True) -> AppConfig:
    """
    Load and validate application configuration from environment.

    Args:
        fail_fast: If True, raise ConfigurationError on critical issues.
                   If False, collect warnings and continue.

    Returns:
        AppConfig instance with validated configuration.

    Raises:
        ConfigurationError: If required configuration is missing/invalid
                           and fail_fast is True.
    """
    warnings = []

    # Environment
    environment = os.environ.get("RAILWAY_ENVIRONMENT", "development")

    # Security settings with validation
    max_request_size, size_warning = _parse_int_env(
        "MAX_REQUEST_SIZE_BYTES",
        DEFAULT_MAX_REQUEST_SIZE_BYTES,
        min_value=MIN_REQUEST_SIZE_BYTES,
    )
    if size_warning:
        warnings.append(size_warning)

    # Alerts
    raw_alerts_flag = os.environ.get("ALERTS_ENABLED", "").lower()
    if raw_alerts_flag and raw_alerts_flag not in _BOOL_VALUES:
        message = f"ALERTS_ENABLED='{raw_alerts_flag}' is not a boolean"
        if fail_fast:
            raise ConfigurationError(message)
        warnings.append(f"{message}; using default True")
    alerts_enabled = is_alerts_enabled()
    max_games, games_warning = _parse_int_env(
        "ALERT_MAX_GAMES_PER_SPORT",
        DEFAULT_MAX_GAMES_PER_SPORT,
        min_value=1,
    )
    if games_warning:
        warnings.append(games_warning)

    if environment == "production" and not alerts_enabled:
        warnings.append("ALERTS_ENABLED is false in production; /alerts endpoints will return 503")

    # Log warnings
    for warning in warnings:
        logger.warning(f"[CONFIG] {warning}")

    return AppConfig(
        environment=environment,
        max_request_size_bytes=max_request_size,
        alerts_enabled=alerts_enabled,
        max_games_per_sport=max_games,
        warnings=warnings,
    )


def log_config_snapshot(config: AppConfig) -> str:
    """
    Generate and log a safe configuration snapshot.

    Returns the snapshot string for testing purposes.
    Never logs actual secret values.
    """
    snapshot = (
        f"[STARTUP] service={config.service_name} "
        f"version={config.service_version} "
        f"environment={config.environment} "
        f"max_request_size_bytes={config.max_request_size_bytes} "
        f"alerts_enabled={config.alerts_enabled} "
        f"max_games_per_sport={config.max_games_per_sport}"
    )
    logger.info(snapshot)
    return snapshot
