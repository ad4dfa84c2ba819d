"""
Web scraping video provider.

Builds a channel's recent activity report from public YouTube pages when no
Data API key is available. The channel's ``videos``, ``streams`` and
``shorts`` tabs are scraped in that order until the requested number of
items is collected. Each tab is read from its embedded ``ytInitialData``
blob; watch pages are fetched only where a tab's listing lacks reliable
information (see ``TAB_POLICIES``).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from tubepulse.exceptions import PageParseError
from tubepulse.models.enums import ChannelTab
from tubepulse.models.video import UNTITLED_PLACEHOLDER, ChannelInfo, VideoRecord
from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.interfaces.video_provider_interface import (
    VideoProviderInterface,
)
from tubepulse.services.scraping.embedded_json import YT_INITIAL_DATA, load_embedded_json
from tubepulse.services.scraping.json_walker import (
    JsonValue,
    find_channel_id,
    find_renderers,
    find_subscriber_text,
    first_text,
    get_string,
    is_blank,
)
from tubepulse.services.scraping.models import (
    TAB_POLICIES,
    ListingCandidate,
    TabPolicy,
)
from tubepulse.services.scraping.numbers import parse_first_number, parse_scaled_number
from tubepulse.services.scraping.page_fetcher import PageFetcher
from tubepulse.services.scraping.recency import is_within_window
from tubepulse.services.scraping.watch_page import WatchPageParser

logger = logging.getLogger(__name__)

ACCESSIBILITY_LABEL_PATH = ("accessibility", "accessibilityData", "label")
TITLE_PATHS = (("title",), ("headline",))
VIEWS_TEXT_PATHS = (("viewCountText",), ACCESSIBILITY_LABEL_PATH)
PUBLISHED_TEXT_PATHS = (("publishedTimeText",), ACCESSIBILITY_LABEL_PATH)

# Pages tried, in order, when a tab's header has no subscriber text.
SUBSCRIBER_FALLBACK_PAGES = ("", "about")


def read_candidate(renderer: dict[str, Any]) -> Optional[ListingCandidate]:
    """
    Read the listing fields of one renderer.

    Returns ``None`` when the renderer has no usable ``videoId``.
    """
    video_id = get_string(renderer, ("videoId",))
    if is_blank(video_id):
        return None

    views_text = first_text(renderer, VIEWS_TEXT_PATHS) or ""
    return ListingCandidate(
        video_id=video_id,
        title=first_text(renderer, TITLE_PATHS) or UNTITLED_PLACEHOLDER,
        views_text=views_text,
        published_text=first_text(renderer, PUBLISHED_TEXT_PATHS),
        view_count=parse_first_number(views_text),
    )


class WebVideoProvider(VideoProviderInterface):
    """
    Video provider backed by scraped channel and watch pages.

    Parameters
    ----------
    fetcher : PageFetcher
        Fetcher shared by every page request of one report.
    diagnostics : Diagnostics
        Per-report diagnostics context.
    shorts_detail_budget : int, optional
        Number of shorts whose watch page is fetched per report
        (default: 2). Shorts beyond the budget are skipped because their
        listing shows no publish time.

    Attributes
    ----------
    channel_info : ChannelInfo | None
        Channel details resolved from the first tab scraped, available
        after ``get_recent_videos`` returns.

    Examples
    --------
    >>> async with httpx.AsyncClient() as client:
    ...     diagnostics = Diagnostics()
    ...     provider = WebVideoProvider(PageFetcher(client, diagnostics), diagnostics)
    ...     videos = await provider.get_recent_videos("@GoogleDevelopers", 5, 30)
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        diagnostics: Diagnostics,
        shorts_detail_budget: int = 2,
    ) -> None:
        self.fetcher = fetcher
        self.diagnostics = diagnostics
        self.shorts_detail_budget = max(0, shorts_detail_budget)
        self.watch_pages = WatchPageParser(fetcher, diagnostics)
        self.channel_info: Optional[ChannelInfo] = None

    async def get_recent_videos(
        self, handle: str, max_results: int, window_days: int
    ) -> List[VideoRecord]:
        """
        Collect recent items from the channel's listing tabs.

        Parameters
        ----------
        handle : str
            Channel handle including the leading ``@``.
        max_results : int
            Maximum number of records to return.
        window_days : int
            Recency window in days (clamped to at least 1).

        Returns
        -------
        List[VideoRecord]
            Records in discovery order, unique by video ID.

        Raises
        ------
        NetworkError
            If a channel tab cannot be fetched.
        """
        results: List[VideoRecord] = []
        self.channel_info = None

        for index, policy in enumerate(TAB_POLICIES):
            remaining = max_results - len(results)
            if remaining <= 0:
                break
            await self._append_from_tab(
                handle,
                policy,
                remaining,
                results,
                window_days,
                resolve_channel=index == 0,
            )

        return results

    async def _load_tab(self, handle: str, tab: ChannelTab) -> JsonValue:
        self.diagnostics.log("[WEB] Fetching /%s ...", tab.value)
        html = await self.fetcher.fetch_channel_tab(handle, tab.value)
        data = load_embedded_json(html, YT_INITIAL_DATA)
        if data is None:
            raise PageParseError(
                f"No usable {YT_INITIAL_DATA} on {handle}/{tab.value}",
                marker=YT_INITIAL_DATA,
            )
        return data

    async def _append_from_tab(
        self,
        handle: str,
        policy: TabPolicy,
        remaining: int,
        sink: List[VideoRecord],
        window_days: int,
        resolve_channel: bool = False,
    ) -> None:
        tab = policy.tab
        try:
            data = await self._load_tab(handle, tab)
        except PageParseError as e:
            logger.debug("Skipping tab: %s", e.message)
            return

        if resolve_channel:
            self.channel_info = await self._resolve_channel_info(handle, data)

        seen = {record.id for record in sink}
        added = 0
        details_used = 0

        for renderer in find_renderers(data):
            candidate = read_candidate(renderer)
            if candidate is None or candidate.video_id in seen:
                continue

            video_id = candidate.video_id
            self.diagnostics.log(
                "[WEB][LIST %s] id=%s | title=%s | viewsText=%s | publishedText=%s",
                tab.value,
                video_id,
                candidate.title,
                candidate.views_text,
                candidate.published_text or "(없음)",
            )

            published_text = candidate.published_text
            view_count = candidate.view_count
            like_count: Optional[int] = None
            comment_count: Optional[int] = None

            if policy.detail_decides_window:
                if details_used >= self.shorts_detail_budget:
                    self.diagnostics.trace(
                        video_id,
                        "[SKIP %s] id=%s | reason=detail budget exhausted",
                        tab.value,
                        video_id,
                    )
                    continue
                details = await self.watch_pages.fetch_details(video_id)
                details_used += 1
                published_text = details.published_text or published_text
                if details.view_count is not None:
                    view_count = details.view_count
                like_count = details.like_count
                comment_count = details.comment_count
                if not self._within_window(tab, video_id, published_text, window_days):
                    continue
            else:
                if not self._within_window(tab, video_id, published_text, window_days):
                    continue
                if policy.enrich_after_window:
                    details = await self.watch_pages.fetch_details(video_id)
                    like_count = details.like_count
                    comment_count = details.comment_count
                    if details.view_count is not None:
                        view_count = details.view_count

            self.diagnostics.log(
                "[WEB][ADD %s] id=%s | published=%s | views=%s",
                tab.value,
                video_id,
                published_text or "(없음)",
                view_count if view_count is not None else "-",
            )
            sink.append(
                VideoRecord(
                    id=video_id,
                    title=candidate.title,
                    view_count=view_count,
                    like_count=like_count,
                    comment_count=comment_count,
                    content_type=tab.content_type,
                )
            )
            seen.add(video_id)
            added += 1
            if added >= remaining:
                break

    def _within_window(
        self,
        tab: ChannelTab,
        video_id: str,
        published_text: Optional[str],
        window_days: int,
    ) -> bool:
        within = is_within_window(published_text, window_days)
        self.diagnostics.trace(
            video_id,
            "[%s %s] id=%s | publishedText=%s | withinWindow=%s",
            "KEEP" if within else "SKIP",
            tab.value,
            video_id,
            published_text or "(없음)",
            within,
        )
        return within

    async def _resolve_channel_info(self, handle: str, data: JsonValue) -> ChannelInfo:
        self.diagnostics.log("[WEB] Resolving channelId for %s ...", handle)
        channel_id = find_channel_id(data)
        if channel_id is None:
            logger.info("channelId not found for %s", handle)
        else:
            logger.info("channelId for %s: %s", handle, channel_id)

        subscriber_text = find_subscriber_text(data)
        if is_blank(subscriber_text):
            subscriber_text = await self._fetch_subscriber_text(handle)

        info = ChannelInfo(handle=handle, channel_id=channel_id)
        if not is_blank(subscriber_text):
            info = ChannelInfo(
                handle=handle,
                channel_id=channel_id,
                subscriber_count=parse_scaled_number(subscriber_text),
                subscriber_text=subscriber_text,
            )
        logger.info("Subscribers for %s: %s", handle, info.subscribers_display)
        return info

    async def _fetch_subscriber_text(self, handle: str) -> Optional[str]:
        """Read subscriber text from the channel root page, then ``/about``."""
        for page in SUBSCRIBER_FALLBACK_PAGES:
            try:
                html = await self.fetcher.fetch_channel_page(handle, page)
            except Exception as e:
                self.diagnostics.log(
                    "[WEB] subscriber fallback /%s failed: %s", page, e
                )
                continue
            if html is None:
                continue
            data = load_embedded_json(html, YT_INITIAL_DATA)
            if data is None:
                continue
            text = find_subscriber_text(data)
            if not is_blank(text):
                return text
        return None
