"""
Intermediate models used by the web scraping services.

``ListingCandidate`` is what one renderer on a channel tab yields before any
filtering; ``WatchDetails`` is what a watch page adds on top of it. The
``TabPolicy`` table describes how each channel tab combines the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tubepulse.models.enums import ChannelTab


class WatchDetails(BaseModel):
    """
    Fields read from a single video's watch page.

    Every field is optional: a failed fetch or an unexpected page layout
    produces an instance with all fields ``None``.
    """

    model_config = ConfigDict(frozen=True)

    published_text: Optional[str] = Field(
        default=None, description="Relative time text or ISO publish date"
    )
    view_count: Optional[int] = Field(default=None, ge=0)
    like_count: Optional[int] = Field(default=None, ge=0)
    comment_count: Optional[int] = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        """Whether no field could be read."""
        return (
            self.published_text is None
            and self.view_count is None
            and self.like_count is None
            and self.comment_count is None
        )


class ListingCandidate(BaseModel):
    """A renderer read from a channel tab, before recency filtering."""

    model_config = ConfigDict(frozen=True)

    video_id: str
    title: str
    views_text: str = ""
    published_text: Optional[str] = None
    view_count: Optional[int] = Field(default=None, ge=0)


@dataclass(frozen=True)
class TabPolicy:
    """
    How candidates from one channel tab are filtered and enriched.

    Attributes
    ----------
    tab : ChannelTab
        The listing tab this policy applies to.
    detail_decides_window : bool
        Fetch the watch page and use its published text, falling back to
        the listing text, for the recency decision. Detail counts replace
        the listing counts. Only the first ``shorts_detail_budget``
        candidates are fetched; the rest of the tab is skipped.
    enrich_after_window : bool
        Decide recency from the listing text, then fetch the watch page
        for views, likes and comments only. Detail published text is
        never used.
    """

    tab: ChannelTab
    detail_decides_window: bool = False
    enrich_after_window: bool = False


TAB_POLICIES: tuple[TabPolicy, ...] = (
    TabPolicy(ChannelTab.VIDEOS),
    TabPolicy(ChannelTab.STREAMS, enrich_after_window=True),
    TabPolicy(ChannelTab.SHORTS, detail_decides_window=True),
)
"""Tabs in scraping order with their policies."""
