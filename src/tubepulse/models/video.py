"""
Video and channel report models.

Defines the uniform Pydantic models that both video providers return,
regardless of whether the data came from the Data API or from scraped
pages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import ContentType
from .youtube_types import ChannelId, VideoId

UNTITLED_PLACEHOLDER = "(제목 없음)"
"""Title shown when a video carries no usable title text."""


class VideoRecord(BaseModel):
    """
    One discovered channel item with its engagement metrics.

    Counts are ``None`` when unknown; a value of zero always means the
    platform reported zero.
    """

    model_config = ConfigDict(frozen=True)

    id: VideoId = Field(..., description="YouTube video ID")
    title: str = Field(default=UNTITLED_PLACEHOLDER, description="Display title")
    view_count: Optional[int] = Field(default=None, ge=0, description="Number of views")
    like_count: Optional[int] = Field(default=None, ge=0, description="Number of likes")
    comment_count: Optional[int] = Field(
        default=None, ge=0, description="Number of comments"
    )
    content_type: ContentType = Field(
        default=ContentType.VIDEO, description="Video, live stream or short"
    )

    @field_validator("title", mode="before")
    @classmethod
    def default_blank_title(cls, v: Optional[str]) -> str:
        """Replace missing or blank titles with the placeholder."""
        if v is None or not str(v).strip():
            return UNTITLED_PLACEHOLDER
        return str(v)


class ChannelInfo(BaseModel):
    """
    Diagnostic channel details resolved while building a report.

    Attributes
    ----------
    handle : str
        The ``@handle`` the report was requested for.
    channel_id : str | None
        Stable ``UC...`` channel identifier, when it could be resolved.
    subscriber_count : int | None
        Parsed subscriber count, when the text could be normalized.
    subscriber_text : str
        Raw subscriber text from the page or API; ``"hidden"`` or
        ``"unknown"`` when no count is available.
    """

    model_config = ConfigDict(frozen=True)

    handle: str
    channel_id: Optional[ChannelId] = None
    subscriber_count: Optional[int] = Field(default=None, ge=0)
    subscriber_text: str = "unknown"

    @property
    def subscribers_display(self) -> str:
        """Subscriber count grouped by thousands, or the raw text."""
        if self.subscriber_count is not None:
            return f"{self.subscriber_count:,}"
        return self.subscriber_text
