"""
Web scraping services for tubepulse.

Reads channel activity from the JSON that YouTube embeds in its public
pages: extraction of the embedded blobs, schemaless traversal of the data
model, normalization of display text, and the orchestration of channel tab
and watch page requests.
"""

from __future__ import annotations

from tubepulse.services.scraping.orchestrator import WebVideoProvider
from tubepulse.services.scraping.page_fetcher import PageFetcher
from tubepulse.services.scraping.watch_page import WatchPageParser, parse_watch_page

__all__: list[str] = [
    "PageFetcher",
    "WatchPageParser",
    "WebVideoProvider",
    "parse_watch_page",
]
