"""
Main CLI entry point for tubepulse.

``tubepulse HANDLE [MAX_RESULTS]`` prints a channel's recent videos, live
streams and shorts with their view, like and comment counts. The YouTube
Data API is used when ``YOUTUBE_API_KEY`` is set; otherwise the report is
scraped from the channel's public pages.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from tubepulse import __version__
from tubepulse.cli.constants import LOG_DATE_FORMAT, LOG_FORMAT, MAX_RESULTS, MIN_RESULTS
from tubepulse.cli.output import (
    print_channel_info,
    print_header,
    print_records,
    print_summary,
    write_csv,
)
from tubepulse.config.settings import Settings, get_settings
from tubepulse.exceptions import (
    EXIT_CODE_INTERRUPTED,
    EXIT_CODE_NETWORK_ERROR,
    EXIT_CODE_SUCCESS,
    EXIT_CODE_UNEXPECTED_ERROR,
    EXIT_CODE_USAGE_ERROR,
    NetworkError,
)
from tubepulse.models.enums import ProviderMode
from tubepulse.models.video import ChannelInfo, VideoRecord
from tubepulse.models.youtube_types import normalize_handle
from tubepulse.services.api_provider import ApiVideoProvider
from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.interfaces.video_provider_interface import (
    VideoProviderInterface,
)
from tubepulse.services.scraping.orchestrator import WebVideoProvider
from tubepulse.services.scraping.page_fetcher import PageFetcher
from tubepulse.services.scraping.recency import clamp_window

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

_HANDLER_NAME = "tubepulse-cli"

app = typer.Typer(
    name="tubepulse",
    help="Recent YouTube channel activity with engagement metrics",
    add_completion=False,
    rich_markup_mode="rich",
)


def configure_logging(verbose: bool, level: str = "WARNING") -> None:
    """
    Route ``tubepulse`` log records to stderr.

    Parameters
    ----------
    verbose : bool
        If True, log at DEBUG level regardless of ``level``.
    level : str, optional
        Log level name used when not verbose (default: "WARNING").
    """
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)

    package_logger = logging.getLogger("tubepulse")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(console_handler)
    package_logger.setLevel(log_level)


def build_provider(
    client: httpx.AsyncClient, settings: Settings, diagnostics: Diagnostics
) -> VideoProviderInterface:
    """Select the Data API provider when a key is configured, else the scraper."""
    if settings.has_api_key:
        return ApiVideoProvider(client, settings.youtube_api_key.strip(), diagnostics)
    fetcher = PageFetcher(client, diagnostics, hl=settings.interface_language)
    return WebVideoProvider(
        fetcher, diagnostics, shorts_detail_budget=settings.shorts_detail_budget
    )


async def fetch_report(
    handle: str,
    max_results: int,
    days: int,
    settings: Settings,
    diagnostics: Diagnostics,
) -> Tuple[List[VideoRecord], Optional[ChannelInfo]]:
    """
    Build one report with a short-lived HTTP client.

    Returns
    -------
    Tuple[List[VideoRecord], Optional[ChannelInfo]]
        The records and the channel details the provider resolved.
    """
    headers = {
        "User-Agent": settings.user_agent,
        "Accept-Language": settings.interface_language,
    }
    async with httpx.AsyncClient(
        headers=headers, timeout=settings.request_timeout, follow_redirects=True
    ) as client:
        provider = build_provider(client, settings, diagnostics)
        records = await provider.get_recent_videos(handle, max_results, days)
        return records, provider.channel_info


def _parse_max_results(value: Optional[str], default: int) -> int:
    """Parse MAX_RESULTS, falling back to ``default`` when invalid."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(
            "MAX_RESULTS must be an integer, got %r; using %d", value, default
        )
        return default
    if not MIN_RESULTS <= parsed <= MAX_RESULTS:
        logger.warning(
            "MAX_RESULTS must be between %d and %d, got %d; using %d",
            MIN_RESULTS,
            MAX_RESULTS,
            parsed,
            default,
        )
        return default
    return parsed


def _version_callback(value: Optional[bool]) -> None:
    if value:
        console.print(f"tubepulse v{__version__}")
        raise typer.Exit(code=EXIT_CODE_SUCCESS)


@app.command()
def report(
    handle: Optional[str] = typer.Argument(
        None, help="Channel handle, e.g. @GoogleDevelopers (the @ is optional)"
    ),
    max_results: Optional[str] = typer.Argument(
        None, help=f"Maximum number of items ({MIN_RESULTS}-{MAX_RESULTS}, default 5)"
    ),
    days: Optional[int] = typer.Option(
        None, "--days", "-d", help="Only report items published within N days (default 30)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", "--debug", help="Enable detailed debug logging"
    ),
    csv_path: Optional[Path] = typer.Option(
        None, "--csv", help="Also write the records to a CSV file"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Show a channel's recent videos, streams and shorts.

    Uses the YouTube Data API when YOUTUBE_API_KEY is set and scrapes the
    public channel pages otherwise.
    """
    if handle is None or not handle.strip():
        err_console.print("[red]Usage:[/red] tubepulse @handle \\[MAX_RESULTS]")
        err_console.print("[dim]Example: tubepulse @GoogleDevelopers 5[/dim]")
        raise typer.Exit(code=EXIT_CODE_USAGE_ERROR)

    try:
        settings = get_settings()
    except ValidationError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_CODE_USAGE_ERROR)

    log_level = settings.log_level
    # Traced video decisions are logged at INFO and must reach stderr.
    if settings.trace_ids and logging.getLevelName(log_level) > logging.INFO:
        log_level = "INFO"
    configure_logging(verbose, log_level)

    count = _parse_max_results(max_results, settings.default_max_results)

    try:
        channel_handle = normalize_handle(handle)
    except ValueError as e:
        err_console.print(f"[red]Invalid handle:[/red] {escape(str(e))}")
        raise typer.Exit(code=EXIT_CODE_USAGE_ERROR)
    window = clamp_window(days if days is not None else settings.default_days)
    mode = ProviderMode.API if settings.has_api_key else ProviderMode.WEB
    diagnostics = Diagnostics(trace_ids=settings.trace_ids)

    print_header(console, channel_handle, mode)
    logger.debug(
        "Report for %s: max_results=%d, days=%d, mode=%s",
        channel_handle,
        count,
        window,
        mode.value,
    )

    exit_code = EXIT_CODE_SUCCESS
    records: List[VideoRecord] = []
    channel_info: Optional[ChannelInfo] = None
    try:
        records, channel_info = asyncio.run(
            fetch_report(channel_handle, count, window, settings, diagnostics)
        )
    except NetworkError as e:
        err_console.print(f"[red]HTTP error:[/red] {escape(e.message)}")
        exit_code = EXIT_CODE_NETWORK_ERROR
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        exit_code = EXIT_CODE_INTERRUPTED
    except Exception as e:
        logger.exception("Unexpected error while building report")
        err_console.print(f"[red]Unexpected error:[/red] {type(e).__name__}: {escape(str(e))}")
        exit_code = EXIT_CODE_UNEXPECTED_ERROR

    if exit_code != EXIT_CODE_SUCCESS:
        raise typer.Exit(code=exit_code)

    print_channel_info(console, channel_info)
    print_records(console, records)
    traffic = diagnostics.traffic_bytes if mode is ProviderMode.WEB else None
    print_summary(console, records, traffic)

    if csv_path is not None:
        rows = write_csv(records, csv_path)
        console.print(f"[green]Wrote {rows} rows to[/green] {csv_path}")


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
