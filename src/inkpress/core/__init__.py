"""Core Inkpress utilities.

This module exports core utilities for use throughout the application.
"""

from inkpress.core.config import AuthConfig, Settings, get_auth_config, get_settings
from inkpress.core.durations import parse_duration
from inkpress.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "AuthConfig",
    "Settings",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_auth_config",
    "get_logger",
    "get_settings",
    "parse_duration",
]
