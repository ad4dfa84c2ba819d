"""
Fixtures for web scraping tests.

Pages are built from small synthetic ``ytInitialData`` documents and served
by a mocked ``httpx.AsyncClient`` that routes on the requested URL. No live
HTTP calls are made.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Union
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.scraping.page_fetcher import PageFetcher

Route = Union[str, httpx.Response, Exception]


def make_response(url: str, route: Route) -> httpx.Response:
    request = httpx.Request("GET", url)
    if isinstance(route, httpx.Response):
        return httpx.Response(route.status_code, content=route.content, request=request)
    return httpx.Response(200, text=route, request=request)


@pytest.fixture
def mock_client() -> Callable[[Dict[str, Route]], MagicMock]:
    """
    Factory for a mocked AsyncClient serving pages by URL substring.

    Routes are matched in insertion order against the requested URL. A
    route value may be page text, a prepared ``httpx.Response`` or an
    exception to raise. Unmatched URLs answer 404.
    """

    def _factory(routes: Dict[str, Route]) -> MagicMock:
        async def _get(url: str, **kwargs: Any) -> httpx.Response:
            for fragment, route in routes.items():
                if fragment in url:
                    if isinstance(route, Exception):
                        raise route
                    return make_response(url, route)
            return httpx.Response(404, text="not found", request=httpx.Request("GET", url))

        client = MagicMock(spec=httpx.AsyncClient)
        client.get = AsyncMock(side_effect=_get)
        return client

    return _factory


@pytest.fixture
def make_fetcher(
    mock_client: Callable[[Dict[str, Route]], MagicMock], diagnostics: Diagnostics
) -> Callable[[Dict[str, Route]], PageFetcher]:
    """Factory for a PageFetcher over a routed mock client."""

    def _factory(routes: Dict[str, Route]) -> PageFetcher:
        return PageFetcher(mock_client(routes), diagnostics)

    return _factory
