"""
Enums for tubepulse models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class ContentType(str, Enum):
    """Kinds of channel content reported for each video record."""

    VIDEO = "video"
    STREAM = "stream"
    SHORTS = "shorts"


class ChannelTab(str, Enum):
    """Public channel listing tabs, in the order they are scraped."""

    VIDEOS = "videos"
    STREAMS = "streams"
    SHORTS = "shorts"

    @property
    def content_type(self) -> ContentType:
        """Content type assigned to items discovered on this tab."""
        return _TAB_CONTENT_TYPES[self]


class ProviderMode(str, Enum):
    """Data source used to build a report."""

    API = "API"
    WEB = "Web"


_TAB_CONTENT_TYPES: dict[ChannelTab, ContentType] = {
    ChannelTab.VIDEOS: ContentType.VIDEO,
    ChannelTab.STREAMS: ContentType.STREAM,
    ChannelTab.SHORTS: ContentType.SHORTS,
}
