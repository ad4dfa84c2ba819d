"""
HTTP access to public YouTube pages.

Provides the single place where the scraping services touch the network.
Every response body is counted in the shared diagnostics context. Requests
are issued one at a time by the caller and are never retried.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from tubepulse.exceptions import NetworkError
from tubepulse.services.diagnostics import Diagnostics

logger = logging.getLogger(__name__)

YOUTUBE_BASE_URL = "https://www.youtube.com"


def channel_url(handle: str, tab: str = "", hl: str = "ko") -> str:
    """
    Build the URL of a channel page.

    Examples
    --------
    >>> channel_url("@GoogleDevelopers", "videos")
    'https://www.youtube.com/%40GoogleDevelopers/videos?hl=ko'
    >>> channel_url("@GoogleDevelopers")
    'https://www.youtube.com/%40GoogleDevelopers?hl=ko'
    """
    path = quote(handle, safe="")
    if tab:
        path = f"{path}/{tab}"
    return f"{YOUTUBE_BASE_URL}/{path}?hl={quote(hl, safe='')}"


def watch_url(video_id: str, hl: str = "ko") -> str:
    """
    Build the URL of a video's watch page.

    Examples
    --------
    >>> watch_url("dQw4w9WgXcQ")
    'https://www.youtube.com/watch?v=dQw4w9WgXcQ&hl=ko'
    """
    return f"{YOUTUBE_BASE_URL}/watch?v={quote(video_id, safe='')}&hl={quote(hl, safe='')}"


class PageFetcher:
    """
    Fetches YouTube HTML pages through a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    client : httpx.AsyncClient
        Client configured with headers and timeout by the caller, which
        also owns its lifecycle.
    diagnostics : Diagnostics
        Receives the size of every response body.
    hl : str, optional
        Interface language requested from YouTube (default: ``"ko"``).
    """

    def __init__(
        self, client: httpx.AsyncClient, diagnostics: Diagnostics, hl: str = "ko"
    ) -> None:
        self._client = client
        self.diagnostics = diagnostics
        self.hl = hl

    async def _get(self, url: str) -> httpx.Response:
        self.diagnostics.log("[WEB] GET %s", url)
        try:
            return await self._client.get(url)
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Request to {url} failed: {type(e).__name__}: {e}",
                original_error=e,
                url=url,
            ) from e

    def _read(self, response: httpx.Response) -> str:
        body = response.content
        self.diagnostics.record(len(body))
        return body.decode("utf-8", errors="replace")

    async def fetch(self, url: str) -> str:
        """
        Fetch a page the caller cannot do without.

        Parameters
        ----------
        url : str
            Absolute page URL.

        Returns
        -------
        str
            The decoded response body.

        Raises
        ------
        NetworkError
            If the request fails at the transport level or the server
            answers with a non-2xx status.
        """
        response = await self._get(url)
        if not response.is_success:
            raise NetworkError(f"HTTP {response.status_code} from {url}", url=url)
        return self._read(response)

    async def fetch_optional(self, url: str) -> str | None:
        """
        Fetch a page that may legitimately be missing.

        Returns None for a non-2xx response. Transport errors still raise
        ``NetworkError`` so the caller decides whether to absorb them.
        """
        response = await self._get(url)
        if not response.is_success:
            logger.debug("Optional page %s returned HTTP %d", url, response.status_code)
            return None
        return self._read(response)

    async def fetch_channel_tab(self, handle: str, tab: str) -> str:
        """Fetch a channel listing tab (``videos``, ``streams``, ``shorts``)."""
        return await self.fetch(channel_url(handle, tab, self.hl))

    async def fetch_channel_page(self, handle: str, tab: str = "") -> str | None:
        """Fetch an optional channel page (root or ``about``)."""
        return await self.fetch_optional(channel_url(handle, tab, self.hl))

    async def fetch_watch_page(self, video_id: str) -> str:
        """Fetch a video's watch page."""
        return await self.fetch(watch_url(video_id, self.hl))
