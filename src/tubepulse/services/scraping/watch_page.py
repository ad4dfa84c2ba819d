"""
Watch page detail extraction.

A watch page carries two embedded blobs: ``ytInitialPlayerResponse`` holds
the exact view count and ``ytInitialData`` holds the rendered publish time
and the like/comment button labels. Like and comment counts are read from
the first display string mentioning them, falling back to a plain regex
over the raw HTML when the data model has no such string.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.scraping.embedded_json import (
    YT_INITIAL_DATA,
    YT_INITIAL_PLAYER_RESPONSE,
    load_embedded_json,
)
from tubepulse.services.scraping.json_walker import (
    JsonValue,
    find_first_by_keys,
    find_first_string_containing,
    get_string,
    is_blank,
)
from tubepulse.services.scraping.models import WatchDetails
from tubepulse.services.scraping.numbers import parse_scaled_number
from tubepulse.services.scraping.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)

PUBLISHED_KEYS = ("publishedTimeText", "dateText")
LIKE_NEEDLES = ("좋아요", "likes")
COMMENT_NEEDLES = ("댓글", "comments")

_RAW_LIKES_RE = re.compile(r"(좋아요|likes)\s*([0-9][0-9,. ]*)", re.IGNORECASE)
_RAW_COMMENTS_RE = re.compile(r"(댓글|comments?)\s*([0-9][0-9,. ]*)", re.IGNORECASE)


def _parse_view_count(player_response: JsonValue) -> Optional[int]:
    text = get_string(player_response, ("videoDetails", "viewCount"))
    if text is None or not text.strip().isdigit():
        return None
    return int(text.strip())


def _count_from_text(root: JsonValue, needles: tuple[str, ...]) -> Optional[int]:
    text = find_first_string_containing(root, needles)
    if is_blank(text):
        return None
    return parse_scaled_number(text)


def _count_from_raw_html(html: str, pattern: re.Pattern[str]) -> Optional[int]:
    match = pattern.search(html)
    if match is None:
        return None
    return parse_scaled_number(match.group(2))


def _like_count_from_aria_labels(html: str) -> Optional[int]:
    """
    Read a like count from ``aria-label`` attributes such as ``"1,579 likes"``.

    Covers labels where the number precedes the word, which the raw HTML
    pattern does not match.
    """
    soup = BeautifulSoup(html, "html.parser")
    for elem in soup.find_all(attrs={"aria-label": True}):
        label = str(elem.get("aria-label", ""))
        if any(needle in label.lower() for needle in LIKE_NEEDLES):
            count = parse_scaled_number(label)
            if count is not None:
                return count
    return None


def parse_watch_page(html: str) -> WatchDetails:
    """
    Read published text and engagement counts from watch page HTML.

    Parameters
    ----------
    html : str
        Raw watch page HTML.

    Returns
    -------
    WatchDetails
        Fields that could be read; the rest are ``None``.

    Notes
    -----
    The published text is taken from the first ``publishedTimeText`` or
    ``dateText`` in ``ytInitialData``, else from
    ``microformat.microformatDataRenderer.publishDate``. An ISO date from
    the latter is kept as text and will not pass the relative-time window
    check.
    """
    view_count = _parse_view_count(load_embedded_json(html, YT_INITIAL_PLAYER_RESPONSE))

    published_text: Optional[str] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None

    initial_data = load_embedded_json(html, YT_INITIAL_DATA)
    if initial_data is not None:
        published_text = find_first_by_keys(initial_data, PUBLISHED_KEYS)
        if is_blank(published_text):
            publish_date = get_string(
                initial_data, ("microformat", "microformatDataRenderer", "publishDate")
            )
            published_text = None if is_blank(publish_date) else publish_date

        like_count = _count_from_text(initial_data, LIKE_NEEDLES)
        comment_count = _count_from_text(initial_data, COMMENT_NEEDLES)

    if like_count is None:
        like_count = _count_from_raw_html(html, _RAW_LIKES_RE)
    if like_count is None:
        logger.debug("No like count in page data, scanning aria-label attributes")
        like_count = _like_count_from_aria_labels(html)
    if comment_count is None:
        comment_count = _count_from_raw_html(html, _RAW_COMMENTS_RE)

    return WatchDetails(
        published_text=published_text,
        view_count=view_count,
        like_count=like_count,
        comment_count=comment_count,
    )


class WatchPageParser:
    """
    Fetches and parses watch pages on behalf of the scraper orchestrator.

    Parameters
    ----------
    fetcher : PageFetcher
        Shared page fetcher.
    diagnostics : Diagnostics
        Receives detail fetch failures.
    """

    def __init__(self, fetcher: PageFetcher, diagnostics: Diagnostics) -> None:
        self.fetcher = fetcher
        self.diagnostics = diagnostics

    async def fetch_details(self, video_id: str) -> WatchDetails:
        """
        Fetch a watch page and read its details.

        Never raises: any fetch or parse failure is logged and yields an
        all-``None`` result, so a single broken detail page cannot abort a
        channel report.

        Parameters
        ----------
        video_id : str
            YouTube video ID.

        Returns
        -------
        WatchDetails
            Details read from the page.
        """
        try:
            html = await self.fetcher.fetch_watch_page(video_id)
            return parse_watch_page(html)
        except Exception as e:
            self.diagnostics.log("[WEB][DETAIL] %s detail fetch error: %s", video_id, e)
            return WatchDetails()
