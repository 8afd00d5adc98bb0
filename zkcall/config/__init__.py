"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables (and `.env`) with type validation and defaults.

Usage:
    from zkcall.config import get_settings

    settings = get_settings()
    print(settings.network.mode)
    print(settings.verifier.contract_name)
"""

from zkcall.config.settings import (
    Environment,
    LogLevel,
    NetworkMode,
    NetworkSettings,
    Settings,
    VerifierSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "NetworkSettings",
    "VerifierSettings",
    "get_settings",
    "Environment",
    "LogLevel",
    "NetworkMode",
]
