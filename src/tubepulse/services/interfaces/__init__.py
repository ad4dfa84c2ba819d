"""
Service interfaces for tubepulse.

Abstract base classes that the concrete video providers implement, so the
CLI can switch between the Data API and web scraping without knowing which
one it is talking to.
"""

from __future__ import annotations

from tubepulse.services.interfaces.video_provider_interface import (
    VideoProviderInterface,
)

__all__ = ["VideoProviderInterface"]
