"""
CLI constants for tubepulse.

This module provides shared constants for the ``tubepulse`` command:
- Argument bounds and defaults
- Output strings that callers and scripts rely on
- CSV export layout

NOTE: Exit codes live in ``tubepulse.exceptions`` next to the errors that
map to them.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Argument Bounds
# =============================================================================

MIN_RESULTS: Final[int] = 1
"""Smallest accepted ``MAX_RESULTS``."""

MAX_RESULTS: Final[int] = 50
"""
Largest accepted ``MAX_RESULTS``.

Matches the Data API's page size; results are never paginated.
"""

# =============================================================================
# Output
# =============================================================================

NO_RESULTS_MESSAGE: Final[str] = "최근 영상이 없습니다."
"""Printed when a report has no items; the command still succeeds."""

MISSING_VALUE: Final[str] = "-"
"""Placeholder for unknown counts in report lines."""

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
"""Format of diagnostic log lines written to stderr."""

LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# CSV Export
# =============================================================================

CSV_COLUMNS: Final[tuple[str, ...]] = (
    "id",
    "type",
    "views",
    "likes",
    "comments",
    "title",
)
"""Column order of ``--csv`` exports."""
