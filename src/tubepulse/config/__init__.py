"""
Configuration management module for tubepulse.

Handles application settings loaded from environment variables and ``.env``.
"""

from __future__ import annotations

from tubepulse.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
