"""
Tests for the web scraping video provider.

Each test serves synthetic channel tab and watch pages through a routed
mock client and checks which items are reported and how they are enriched.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict
from unittest.mock import MagicMock

import httpx
import pytest

from tests.factories.page_factory import (
    CHANNEL_ID,
    HANDLE,
    channel_data,
    html_page,
    short_renderer,
    video_renderer,
    watch_html,
)
from tubepulse.exceptions import NetworkError
from tubepulse.models.enums import ContentType
from tubepulse.models.video import UNTITLED_PLACEHOLDER
from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.scraping.orchestrator import WebVideoProvider, read_candidate
from tubepulse.services.scraping.page_fetcher import PageFetcher

ClientFactory = Callable[[Dict[str, Any]], MagicMock]

EMPTY_TAB = html_page(channel_data())


def make_provider(
    client: MagicMock, diagnostics: Diagnostics, shorts_detail_budget: int = 2
) -> WebVideoProvider:
    return WebVideoProvider(
        PageFetcher(client, diagnostics), diagnostics, shorts_detail_budget=shorts_detail_budget
    )


def requested_urls(client: MagicMock) -> list[str]:
    return [call.args[0] for call in client.get.call_args_list]


@pytest.mark.asyncio
class TestVideosTab:
    """Test listing-only reporting from the videos tab."""

    async def test_reports_recent_videos(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(
                    channel_data(
                        video_renderer("vid_a", title="Launch", published="3 hours ago"),
                        video_renderer("vid_b", title="Recap", published="5일 전", views="조회수 12,345회"),
                        video_renderer("vid_old", published="2 months ago"),
                    )
                ),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
            }
        )
        diagnostics = Diagnostics()
        provider = make_provider(client, diagnostics)

        videos = await provider.get_recent_videos(HANDLE, 10, 30)

        by_id = {video.id: video for video in videos}
        assert set(by_id) == {"vid_a", "vid_b"}
        assert by_id["vid_a"].title == "Launch"
        assert by_id["vid_a"].view_count == 1234
        assert by_id["vid_b"].view_count == 12345
        assert all(video.content_type is ContentType.VIDEO for video in videos)
        assert all(video.like_count is None and video.comment_count is None for video in videos)
        # No watch pages are fetched for the videos tab.
        assert not any("watch?v=" in url for url in requested_urls(client))
        assert diagnostics.traffic_bytes > 0

    async def test_resolves_channel_info(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {"/videos": html_page(channel_data()), "/streams": EMPTY_TAB, "/shorts": EMPTY_TAB}
        )
        provider = make_provider(client, Diagnostics())

        await provider.get_recent_videos(HANDLE, 5, 30)

        assert provider.channel_info is not None
        assert provider.channel_info.channel_id == CHANNEL_ID
        assert provider.channel_info.subscriber_count == 12000
        assert provider.channel_info.subscriber_text == "구독자 1.2만명"

    async def test_oversized_counts_are_unknown(self, mock_client: ClientFactory) -> None:
        huge = "9" * 400
        client = mock_client(
            {
                "/videos": html_page(
                    channel_data(
                        video_renderer("vid_a", views=f"{huge} views"),
                        subscribers=huge,
                    )
                ),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
            }
        )
        provider = make_provider(client, Diagnostics())

        videos = await provider.get_recent_videos(HANDLE, 5, 30)

        assert [video.id for video in videos] == ["vid_a"]
        assert videos[0].view_count is None
        assert provider.channel_info is not None
        assert provider.channel_info.subscriber_count is None
        assert provider.channel_info.subscribers_display == huge

    async def test_stops_when_quota_reached(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(
                    channel_data(video_renderer("vid_a"), video_renderer("vid_b"))
                )
            }
        )
        provider = make_provider(client, Diagnostics())

        videos = await provider.get_recent_videos(HANDLE, 1, 30)

        assert len(videos) == 1
        assert requested_urls(client) == [
            "https://www.youtube.com/%40GoogleDevelopers/videos?hl=ko"
        ]

    async def test_skips_blank_ids_and_defaults_title(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(
                    channel_data(video_renderer("  "), video_renderer("vid_x", title=None))
                ),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 30)

        assert [video.id for video in videos] == ["vid_x"]
        assert videos[0].title == UNTITLED_PLACEHOLDER

    async def test_accessibility_label_fallback(self, mock_client: ClientFactory) -> None:
        renderer = {
            "videoRenderer": {
                "videoId": "vid_acc",
                "title": {"simpleText": "Accessible"},
                "accessibility": {"accessibilityData": {"label": "Accessible 2 hours ago 1,500 views"}},
            }
        }
        client = mock_client(
            {"/videos": html_page(channel_data(renderer)), "/streams": EMPTY_TAB, "/shorts": EMPTY_TAB}
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 1)

        assert len(videos) == 1
        # The label supplies the publish time; its first digit run is read as views.
        assert videos[0].view_count == 2

    async def test_tab_without_data_is_skipped(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": "<html><body>consent page</body></html>",
                "/streams": html_page(channel_data(video_renderer("live_1"))),
                "/shorts": EMPTY_TAB,
                "watch?v=": watch_html(),
            }
        )
        provider = make_provider(client, Diagnostics())

        videos = await provider.get_recent_videos(HANDLE, 5, 30)

        assert [video.id for video in videos] == ["live_1"]
        assert provider.channel_info is None

    async def test_tab_fetch_failure_propagates(self, mock_client: ClientFactory) -> None:
        client = mock_client({"/videos": httpx.Response(500)})
        with pytest.raises(NetworkError):
            await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 30)


@pytest.mark.asyncio
class TestStreamsTab:
    """Test stream enrichment and de-duplication across tabs."""

    async def test_duplicate_ids_are_reported_once(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(channel_data(video_renderer("shared"))),
                "/streams": html_page(
                    channel_data(video_renderer("shared"), video_renderer("stream_only"))
                ),
                "/shorts": EMPTY_TAB,
                "watch?v=": watch_html(),
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 10, 30)

        ids = [video.id for video in videos]
        assert sorted(ids) == ["shared", "stream_only"]
        by_id = {video.id: video for video in videos}
        assert by_id["shared"].content_type is ContentType.VIDEO
        assert by_id["stream_only"].content_type is ContentType.STREAM

    async def test_stream_counts_come_from_watch_page(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": html_page(channel_data(video_renderer("live_1", published="3 days ago"))),
                "/shorts": EMPTY_TAB,
                # The detail page's publish time never overrides the listing.
                "watch?v=live_1": watch_html(published="2 years ago"),
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 30)

        assert len(videos) == 1
        stream = videos[0]
        assert stream.view_count == 5000
        assert stream.like_count == 1200
        assert stream.comment_count == 34

    async def test_streams_outside_window_skip_detail(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": html_page(channel_data(video_renderer("old", published="40 days ago"))),
                "/shorts": EMPTY_TAB,
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 30)

        assert videos == []
        assert not any("watch?v=" in url for url in requested_urls(client))

    async def test_failed_detail_keeps_listing_values(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": html_page(channel_data(video_renderer("live_1"))),
                "/shorts": EMPTY_TAB,
                "watch?v=": httpx.Response(500),
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 5, 30)

        assert len(videos) == 1
        assert videos[0].view_count == 1234
        assert videos[0].like_count is None


@pytest.mark.asyncio
class TestShortsTab:
    """Test detail-driven recency for shorts."""

    async def test_detail_budget_limits_shorts(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": EMPTY_TAB,
                "/shorts": html_page(
                    channel_data(short_renderer("s1"), short_renderer("s2"), short_renderer("s3"))
                ),
                "watch?v=": watch_html(),
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 10, 30)

        assert len(videos) == 2
        assert all(video.content_type is ContentType.SHORTS for video in videos)
        assert all(video.view_count == 5000 for video in videos)
        assert all(video.title == "Sample short" for video in videos)
        watch_requests = [url for url in requested_urls(client) if "watch?v=" in url]
        assert len(watch_requests) == 2

    async def test_budget_is_spent_on_old_shorts(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": EMPTY_TAB,
                "/shorts": html_page(
                    channel_data(short_renderer("s1"), short_renderer("s2"), short_renderer("s3"))
                ),
                "watch?v=": watch_html(published="3 days ago"),
            }
        )
        videos = await make_provider(client, Diagnostics()).get_recent_videos(HANDLE, 10, 1)

        assert videos == []
        watch_requests = [url for url in requested_urls(client) if "watch?v=" in url]
        assert len(watch_requests) == 2

    async def test_zero_budget_skips_all_shorts(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": EMPTY_TAB,
                "/streams": EMPTY_TAB,
                "/shorts": html_page(channel_data(short_renderer("s1"))),
            }
        )
        provider = make_provider(client, Diagnostics(), shorts_detail_budget=0)
        assert await provider.get_recent_videos(HANDLE, 10, 30) == []


@pytest.mark.asyncio
class TestSubscriberFallback:
    """Test subscriber text lookup on other channel pages."""

    async def test_root_page_fallback(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(channel_data(subscribers=None)),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
                "%40GoogleDevelopers?hl": html_page(
                    channel_data(subscribers="1.5M subscribers")
                ),
            }
        )
        provider = make_provider(client, Diagnostics())
        await provider.get_recent_videos(HANDLE, 5, 30)

        assert provider.channel_info is not None
        assert provider.channel_info.subscriber_count == 1_500_000

    async def test_about_page_fallback(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(channel_data(subscribers=None)),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
                "/about": html_page(channel_data(subscribers="구독자 3천명")),
            }
        )
        provider = make_provider(client, Diagnostics())
        await provider.get_recent_videos(HANDLE, 5, 30)

        assert provider.channel_info is not None
        assert provider.channel_info.subscriber_count == 3000

    async def test_fallback_failures_are_absorbed(self, mock_client: ClientFactory) -> None:
        client = mock_client(
            {
                "/videos": html_page(channel_data(subscribers=None)),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
                "%40GoogleDevelopers?hl": httpx.ConnectError("reset"),
            }
        )
        provider = make_provider(client, Diagnostics())
        await provider.get_recent_videos(HANDLE, 5, 30)

        assert provider.channel_info is not None
        assert provider.channel_info.subscriber_count is None
        assert provider.channel_info.subscriber_text == "unknown"


@pytest.mark.asyncio
class TestTracing:
    """Test always-on recency logging for traced video IDs."""

    async def test_traced_ids_log_at_info(
        self, mock_client: ClientFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = mock_client(
            {
                "/videos": html_page(
                    channel_data(video_renderer("traced_id"), video_renderer("other_id"))
                ),
                "/streams": EMPTY_TAB,
                "/shorts": EMPTY_TAB,
            }
        )
        diagnostics = Diagnostics(trace_ids=["TRACED_ID"])
        caplog.set_level(logging.INFO, logger="tubepulse")

        await make_provider(client, diagnostics).get_recent_videos(HANDLE, 5, 30)

        info_messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert any("id=traced_id" in message for message in info_messages)
        assert not any("id=other_id" in message for message in info_messages)


def test_read_candidate() -> None:
    renderer = video_renderer("vid_1", title="Title", published="1 day ago")["gridVideoRenderer"]
    candidate = read_candidate(renderer)
    assert candidate is not None
    assert candidate.video_id == "vid_1"
    assert candidate.published_text == "1 day ago"
    assert candidate.view_count == 1234
    assert read_candidate({"title": "no id"}) is None
