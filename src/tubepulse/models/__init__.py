"""
Data models for tubepulse.

Pydantic models for video records, channel diagnostics and the YouTube
Data API responses the API provider consumes.
"""

from __future__ import annotations

from .enums import ChannelTab, ContentType, ProviderMode
from .video import UNTITLED_PLACEHOLDER, ChannelInfo, VideoRecord

__all__ = [
    "ChannelInfo",
    "ChannelTab",
    "ContentType",
    "ProviderMode",
    "UNTITLED_PLACEHOLDER",
    "VideoRecord",
]
