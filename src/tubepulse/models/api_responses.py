"""
Pydantic models for YouTube Data API v3 responses.

Only the parts of the channels, search and videos list responses that the
API provider reads are modelled; unexpected fields are ignored.

The models follow YouTube API response structures with camelCase to snake_case
conversion handled via Pydantic's alias_generator.

References:
- YouTube Data API v3 Reference: https://developers.google.com/youtube/v3/docs
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import ContentType

SHORTS_MAX_SECONDS = 60

_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


# =============================================================================
# Base Configuration
# =============================================================================


class BaseYouTubeModel(BaseModel):
    """
    Base model for all YouTube API response models.

    Configures:
    - populate_by_name: Allow both camelCase (API) and snake_case (Python)
    - alias_generator: Auto-convert snake_case fields to camelCase for API
    - extra='ignore': Ignore unexpected fields from API responses
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


def parse_iso_duration_seconds(duration: Optional[str]) -> Optional[int]:
    """
    Convert an ISO-8601 ``PT#H#M#S`` duration into seconds.

    Returns None when the value is missing or not in that form.

    Examples
    --------
    >>> parse_iso_duration_seconds("PT1M5S")
    65
    >>> parse_iso_duration_seconds("P1D") is None
    True
    """
    if not duration or not duration.strip():
        return None
    m = _ISO_DURATION_RE.match(duration)
    if not m:
        return None
    hours = int(m.group(1) or 0)
    mins = int(m.group(2) or 0)
    secs = int(m.group(3) or 0)
    return hours * 3600 + mins * 60 + secs


# =============================================================================
# Channel Models
# =============================================================================


class ChannelStatisticsResponse(BaseYouTubeModel):
    """
    Statistics data for a YouTube channel.

    Note: YouTube API returns counts as strings. The subscriber count is kept
    as the raw string so it can be echoed back when it is not numeric.
    """

    subscriber_count: Optional[str] = Field(
        default=None,
        description="Subscriber count (may be hidden)",
    )
    hidden_subscriber_count: Optional[bool] = Field(
        default=None,
        description="Whether subscriber count is hidden",
    )

    @field_validator("subscriber_count", mode="before")
    @classmethod
    def stringify_count(cls, v: Any) -> Optional[str]:
        """Accept counts serialized as numbers as well as strings."""
        if v is None:
            return None
        return str(v)


class YouTubeChannelItem(BaseYouTubeModel):
    """A single channel from channels.list (``part=id`` or ``part=statistics``)."""

    id: Optional[str] = Field(default=None, description="Channel ID")
    statistics: Optional[ChannelStatisticsResponse] = Field(
        default=None, description="Channel statistics"
    )


class YouTubeChannelListResponse(BaseYouTubeModel):
    """Response body of channels.list."""

    items: list[YouTubeChannelItem] = Field(default_factory=list)


# =============================================================================
# Search Models
# =============================================================================


class SearchResultId(BaseYouTubeModel):
    """Identifies the resource a search result points at."""

    kind: str = Field(default="", description="Resource type (e.g., youtube#video)")
    video_id: Optional[str] = Field(default=None, description="Video ID")


class YouTubeSearchItem(BaseYouTubeModel):
    """A single search.list result with ``part=id``."""

    id: Optional[SearchResultId] = Field(default=None)


class YouTubeSearchListResponse(BaseYouTubeModel):
    """Response body of search.list."""

    items: list[YouTubeSearchItem] = Field(default_factory=list)

    @property
    def video_ids(self) -> list[str]:
        """Non-blank video IDs in result order."""
        return [
            item.id.video_id
            for item in self.items
            if item.id is not None
            and item.id.video_id is not None
            and item.id.video_id.strip()
        ]


# =============================================================================
# Video Models
# =============================================================================


class VideoSnippet(BaseYouTubeModel):
    """Basic metadata about a video."""

    title: Optional[str] = Field(default=None, description="Video title")
    live_broadcast_content: Optional[str] = Field(
        default=None, description="Live broadcast status (none, upcoming, live)"
    )


class VideoContentDetails(BaseYouTubeModel):
    """Content details for a video."""

    duration: Optional[str] = Field(
        default=None, description="Video duration in ISO 8601 format (e.g., PT4M13S)"
    )


class VideoStatisticsResponse(BaseYouTubeModel):
    """
    Statistics data for a YouTube video.

    Note: YouTube API returns counts as strings, so we convert to int.
    Like and comment counts may be hidden and are then absent.
    """

    view_count: Optional[int] = Field(default=None, description="View count")
    like_count: Optional[int] = Field(
        default=None, description="Like count (may be hidden)"
    )
    comment_count: Optional[int] = Field(
        default=None, description="Comment count (may be hidden)"
    )

    @field_validator("view_count", "like_count", "comment_count", mode="before")
    @classmethod
    def parse_count(cls, v: Any) -> Optional[int]:
        """Parse count from string or int; unparseable counts are unknown."""
        if v is None:
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return None
        return None


class YouTubeVideoResponse(BaseYouTubeModel):
    """
    YouTube video response from videos.list API.

    Represents a single video item from the YouTube Data API.
    """

    id: Optional[str] = Field(default=None, description="Video ID")
    snippet: Optional[VideoSnippet] = Field(
        default=None, description="Basic video metadata"
    )
    content_details: Optional[VideoContentDetails] = Field(
        default=None, description="Technical video details"
    )
    statistics: Optional[VideoStatisticsResponse] = Field(
        default=None, description="Video statistics"
    )

    @property
    def content_type(self) -> ContentType:
        """
        Classify the video as a stream, a short or a regular video.

        Live and upcoming broadcasts are streams; anything at most one
        minute long is a short. A missing duration counts as a video.
        """
        live = (self.snippet.live_broadcast_content or "") if self.snippet else ""
        if live.lower() in ("live", "upcoming"):
            return ContentType.STREAM

        duration = (
            parse_iso_duration_seconds(self.content_details.duration)
            if self.content_details
            else None
        )
        if duration is not None and duration <= SHORTS_MAX_SECONDS:
            return ContentType.SHORTS
        return ContentType.VIDEO


class YouTubeVideoListResponse(BaseYouTubeModel):
    """Response body of videos.list."""

    items: list[YouTubeVideoResponse] = Field(default_factory=list)
