"""
Custom exceptions for the tubepulse application.

This module defines domain-specific exceptions for error handling
throughout the application. Only transport failures of required fetches
are raised to the CLI; page shape problems are absorbed by the scraping
services and degrade to unknown values.
"""

from __future__ import annotations


class TubepulseError(Exception):
    """Base exception for all tubepulse errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize TubepulseError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class NetworkError(TubepulseError):
    """
    Exception raised for network-related failures.

    Wraps transport errors (connection failures, timeouts) and non-2xx
    responses for fetches the caller cannot do without, such as a channel
    tab listing page. No retries are attempted before raising.

    Attributes
    ----------
    message : str
        Human-readable error message.
    original_error : Exception | None
        The original exception that caused this error.
    url : str | None
        The URL that was being fetched.

    Examples
    --------
    >>> try:
    ...     html = await fetcher.fetch(url)
    ... except NetworkError as e:
    ...     print(f"HTTP error for {e.url}: {e.message}")
    ...     raise typer.Exit(EXIT_CODE_NETWORK_ERROR)
    """

    def __init__(
        self,
        message: str = "Network error occurred",
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        """
        Initialize NetworkError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Network error occurred").
        original_error : Exception | None, optional
            The original exception that caused this error (default: None).
        url : str | None, optional
            The URL that was being fetched (default: None).
        """
        self.original_error = original_error
        self.url = url
        super().__init__(message)


class YouTubeAPIError(NetworkError):
    """
    Exception raised for YouTube Data API errors.

    Raised when one of the Data API calls returns a non-2xx status or a
    body that does not match the documented response schema.

    Attributes
    ----------
    message : str
        Human-readable error message.
    status_code : int | None
        HTTP status code returned by the API.
    """

    def __init__(
        self,
        message: str = "YouTube API error occurred",
        status_code: int | None = None,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        """
        Initialize YouTubeAPIError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "YouTube API error occurred").
        status_code : int | None, optional
            HTTP status code returned by the API (default: None).
        original_error : Exception | None, optional
            The original exception that caused this error (default: None).
        url : str | None, optional
            The request URL, with the API key removed (default: None).
        """
        self.status_code: int | None = status_code
        super().__init__(message, original_error=original_error, url=url)


class PageParseError(TubepulseError):
    """
    Exception raised when an embedded JSON blob cannot be parsed.

    Scraping services catch this and treat it as a soft failure (skip the
    tab, or leave detail fields unknown).

    Attributes
    ----------
    message : str
        Human-readable error message.
    marker : str | None
        The JavaScript variable name whose JSON failed to parse.
    """

    def __init__(
        self,
        message: str = "Failed to parse embedded page data",
        marker: str | None = None,
    ) -> None:
        """
        Initialize PageParseError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message.
        marker : str | None, optional
            The JavaScript variable name that was being extracted.
        """
        self.marker = marker
        super().__init__(message)


# Exit codes for CLI integration
EXIT_CODE_SUCCESS = 0
EXIT_CODE_USAGE_ERROR = 1
EXIT_CODE_NETWORK_ERROR = 10
EXIT_CODE_UNEXPECTED_ERROR = 11
EXIT_CODE_INTERRUPTED = 130  # Standard Unix signal interrupt exit code
