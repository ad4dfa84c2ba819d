"""
Report rendering for the ``tubepulse`` command.

Report lines are printed without Rich markup or highlighting so that video
titles containing brackets come through unchanged and the
``id=... | views=...`` layout stays stable for scripts.
"""

from __future__ import annotations

import csv
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tubepulse.cli.constants import CSV_COLUMNS, MISSING_VALUE, NO_RESULTS_MESSAGE
from tubepulse.models.enums import ContentType, ProviderMode
from tubepulse.models.video import ChannelInfo, VideoRecord
from tubepulse.services.scraping.numbers import format_count


def format_record_line(record: VideoRecord) -> str:
    """
    Format one record as a report line.

    Examples
    --------
    >>> format_record_line(VideoRecord(id="abc", title="Hello", view_count=10))
    'id=abc | views=10 | likes=- | comments=- | title=Hello'
    """
    return (
        f"id={record.id}"
        f" | views={format_count(record.view_count, MISSING_VALUE)}"
        f" | likes={format_count(record.like_count, MISSING_VALUE)}"
        f" | comments={format_count(record.comment_count, MISSING_VALUE)}"
        f" | title={record.title}"
    )


def format_type_summary(records: Iterable[VideoRecord]) -> str:
    """Count records per content type, e.g. ``video=3, stream=1, shorts=0``."""
    counts = Counter(record.content_type for record in records)
    return ", ".join(f"{ct.value}={counts.get(ct, 0)}" for ct in ContentType)


def format_traffic(num_bytes: int) -> str:
    """
    Render a byte count with a binary-prefixed approximation.

    Examples
    --------
    >>> format_traffic(2048)
    '2,048 bytes (2.0 KiB)'
    """
    size = float(num_bytes)
    for unit in ("B", "KiB", "MiB"):
        if size < 1024 or unit == "MiB":
            break
        size /= 1024
    if unit == "B":
        return f"{num_bytes:,} bytes"
    return f"{num_bytes:,} bytes ({size:.1f} {unit})"


def print_plain(console: Console, text: str) -> None:
    """Print text verbatim: no markup, no highlighting, no wrapping."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_header(console: Console, handle: str, mode: ProviderMode) -> None:
    """Print the report header panel."""
    console.print(
        Panel(
            f"Handle: [bold]{escape(handle)}[/bold]\nMode: [cyan]{mode.value}[/cyan]",
            title="tubepulse",
            border_style="blue",
        )
    )


def print_channel_info(console: Console, info: Optional[ChannelInfo]) -> None:
    """Print the resolved channel ID and subscriber count."""
    if info is None:
        return
    print_plain(console, f"channelId: {info.channel_id or 'not found'}")
    print_plain(console, f"subscribers: {info.subscribers_display}")


def print_records(console: Console, records: List[VideoRecord]) -> None:
    """Print one line per record, or the no-results message."""
    if not records:
        print_plain(console, NO_RESULTS_MESSAGE)
        return
    for record in records:
        print_plain(console, format_record_line(record))


def print_summary(
    console: Console, records: List[VideoRecord], traffic_bytes: Optional[int] = None
) -> None:
    """Print the per-type summary and, in web mode, the bytes downloaded."""
    if records:
        print_plain(console, f"types: {format_type_summary(records)}")
    if traffic_bytes is not None:
        print_plain(console, f"traffic: {format_traffic(traffic_bytes)}")


def write_csv(records: Iterable[VideoRecord], path: Path) -> int:
    """
    Write records to a CSV file.

    Unknown counts are written as empty cells. Parent directories are
    created as needed.

    Returns
    -------
    int
        Number of rows written, excluding the header.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(CSV_COLUMNS))
        writer.writeheader()
        for record in records:
            writer.writerow(
                {
                    "id": record.id,
                    "type": record.content_type.value,
                    "views": format_count(record.view_count, ""),
                    "likes": format_count(record.like_count, ""),
                    "comments": format_count(record.comment_count, ""),
                    "title": record.title,
                }
            )
            rows += 1
    return rows
