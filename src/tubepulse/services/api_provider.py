"""
YouTube Data API v3 video provider.

Used when an API key is configured. Resolves the channel from its handle,
searches for the channel's videos published inside the window and reads
their statistics in a single ``videos.list`` call. Results are limited to a
single search page (at most 50 items).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from tubepulse.exceptions import YouTubeAPIError
from tubepulse.models.api_responses import (
    BaseYouTubeModel,
    YouTubeChannelListResponse,
    YouTubeSearchListResponse,
    YouTubeVideoListResponse,
)
from tubepulse.models.video import ChannelInfo, VideoRecord
from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.interfaces.video_provider_interface import (
    VideoProviderInterface,
)

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
MAX_SEARCH_RESULTS = 50

ResponseT = TypeVar("ResponseT", bound=BaseYouTubeModel)


def published_after(window_days: int, now: Optional[datetime] = None) -> str:
    """
    Compute the ``publishedAfter`` search bound for a day window.

    Examples
    --------
    >>> published_after(7, datetime(2024, 5, 8, tzinfo=timezone.utc))
    '2024-05-01T00:00:00Z'
    """
    now = now or datetime.now(timezone.utc)
    bound = now - timedelta(days=max(1, window_days))
    return bound.strftime("%Y-%m-%dT%H:%M:%SZ")


class ApiVideoProvider(VideoProviderInterface):
    """
    Video provider backed by the YouTube Data API v3.

    Parameters
    ----------
    client : httpx.AsyncClient
        HTTP client owned by the caller.
    api_key : str
        Data API key sent with every request.
    diagnostics : Diagnostics
        Per-report diagnostics context.
    """

    def __init__(
        self, client: httpx.AsyncClient, api_key: str, diagnostics: Diagnostics
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.diagnostics = diagnostics
        self.channel_info: Optional[ChannelInfo] = None

    async def _get(
        self, resource: str, params: dict[str, Any], model: Type[ResponseT]
    ) -> ResponseT:
        """Call one list endpoint and validate its response body."""
        url = f"{YOUTUBE_API_BASE_URL}/{resource}"
        self.diagnostics.log("[API] GET %s %s", url, params)
        try:
            response = await self._client.get(url, params={**params, "key": self._api_key})
        except httpx.HTTPError as e:
            raise YouTubeAPIError(
                f"Request to {resource}.list failed: {type(e).__name__}: {e}",
                original_error=e,
                url=url,
            ) from e

        self.diagnostics.record(len(response.content))
        if not response.is_success:
            raise YouTubeAPIError(
                f"{resource}.list returned HTTP {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise YouTubeAPIError(
                f"Unexpected {resource}.list response: {e}",
                status_code=response.status_code,
                original_error=e,
                url=url,
            ) from e

    async def get_channel_id(self, handle: str) -> Optional[str]:
        """Resolve a ``@handle`` to its channel ID, or None if unknown."""
        data = await self._get(
            "channels", {"part": "id", "forHandle": handle}, YouTubeChannelListResponse
        )
        for item in data.items:
            if item.id:
                return item.id
        return None

    async def get_subscriber_text(self, channel_id: str) -> str:
        """
        Get a channel's subscriber count for display.

        Returns ``"hidden"`` when the channel hides it, the count grouped by
        thousands when numeric, the raw value otherwise, and ``"unknown"``
        when it cannot be read. Never raises.
        """
        try:
            data = await self._get(
                "channels",
                {"part": "statistics", "id": channel_id},
                YouTubeChannelListResponse,
            )
        except YouTubeAPIError as e:
            logger.debug("Subscriber lookup failed for %s: %s", channel_id, e.message)
            return "unknown"

        stats = data.items[0].statistics if data.items else None
        if stats is None:
            return "unknown"
        if stats.hidden_subscriber_count:
            return "hidden"
        if stats.subscriber_count is None:
            return "unknown"
        if stats.subscriber_count.isdigit():
            return f"{int(stats.subscriber_count):,}"
        return stats.subscriber_count

    async def search_recent_video_ids(
        self, channel_id: str, max_results: int, window_days: int
    ) -> List[str]:
        """Search a channel's videos published within the window, newest first."""
        data = await self._get(
            "search",
            {
                "part": "id",
                "order": "date",
                "channelId": channel_id,
                "type": "video",
                "maxResults": max(1, min(max_results, MAX_SEARCH_RESULTS)),
                "publishedAfter": published_after(window_days),
            },
            YouTubeSearchListResponse,
        )
        return data.video_ids

    async def get_video_records(self, video_ids: List[str]) -> List[VideoRecord]:
        """Fetch snippet, statistics and duration for videos and classify them."""
        data = await self._get(
            "videos",
            {"part": "snippet,statistics,contentDetails", "id": ",".join(video_ids)},
            YouTubeVideoListResponse,
        )
        records: List[VideoRecord] = []
        for video in data.items:
            if not video.id or not video.id.strip():
                logger.debug("Skipping videos.list item without an ID")
                continue
            stats = video.statistics
            records.append(
                VideoRecord(
                    id=video.id,
                    title=video.snippet.title if video.snippet else None,
                    view_count=stats.view_count if stats else None,
                    like_count=stats.like_count if stats else None,
                    comment_count=stats.comment_count if stats else None,
                    content_type=video.content_type,
                )
            )
        return records

    async def get_recent_videos(
        self, handle: str, max_results: int, window_days: int
    ) -> List[VideoRecord]:
        """
        Get a channel's recent items through the Data API.

        Parameters
        ----------
        handle : str
            Channel handle including the leading ``@``.
        max_results : int
            Maximum number of records, clamped to 1-50.
        window_days : int
            Recency window in days (clamped to at least 1).

        Returns
        -------
        List[VideoRecord]
            Records in search order; empty when the handle does not resolve
            or nothing was published inside the window.

        Raises
        ------
        YouTubeAPIError
            If the channel, search or videos call fails.
        """
        self.diagnostics.log("[API] Resolving channelId for %s ...", handle)
        self.channel_info = None
        channel_id = await self.get_channel_id(handle)
        if channel_id is None:
            logger.info("channelId not found for %s", handle)
            self.channel_info = ChannelInfo(handle=handle)
            return []
        logger.info("channelId for %s: %s", handle, channel_id)

        subscriber_text = await self.get_subscriber_text(channel_id)
        self.channel_info = ChannelInfo(
            handle=handle, channel_id=channel_id, subscriber_text=subscriber_text
        )
        logger.info("Subscribers for %s: %s", handle, subscriber_text)

        video_ids = await self.search_recent_video_ids(channel_id, max_results, window_days)
        if not video_ids:
            return []
        return await self.get_video_records(video_ids)
