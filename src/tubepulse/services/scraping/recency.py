"""
Recency classification of relative publish-time text.

Channel listing pages only show coarse relative times such as
``"3 hours ago"`` or ``"5일 전"``; absolute dates are not reliably present.
This module decides whether such text falls inside a day window. Anything
that cannot be recognized is treated as outside the window.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import NamedTuple

logger = logging.getLogger(__name__)

LIVE_MARKERS: tuple[str, ...] = ("live now", "실시간", "라이브", "스트리밍 중")
"""Lower-case phrases marking an item as streaming right now."""


class TimeUnit(str, Enum):
    """Units of relative publish-time text."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


_KOREAN_UNITS: dict[str, TimeUnit] = {
    "초": TimeUnit.SECOND,
    "분": TimeUnit.MINUTE,
    "시간": TimeUnit.HOUR,
    "일": TimeUnit.DAY,
}

_ENGLISH_AGO_RE = re.compile(r"(\d+)\s+(second|minute|hour|day)s?\s+ago")
_KOREAN_AGO_RE = re.compile(r"(\d+)\s*(초|분|시간|일)\s*전")


class RelativeAge(NamedTuple):
    """
    Parsed relative publish time.

    Attributes
    ----------
    value : int
        Number of units ago; zero for live items.
    unit : TimeUnit | None
        Unit of ``value``; ``None`` when the item is live.
    """

    value: int
    unit: TimeUnit | None

    @property
    def is_live(self) -> bool:
        """Whether the text marked the item as currently live."""
        return self.unit is None


def clamp_window(window_days: int) -> int:
    """Clamp a day window to a minimum of one day."""
    return max(1, window_days)


def parse_relative_age(text: str | None) -> RelativeAge | None:
    """
    Parse English or Korean relative-time text.

    Parameters
    ----------
    text : str | None
        Text such as ``"3 hours ago"``, ``"5일 전"`` or ``"실시간 스트리밍 중"``.

    Returns
    -------
    RelativeAge | None
        The parsed age, or ``None`` when no known pattern matches.

    Examples
    --------
    >>> parse_relative_age("3 hours ago")
    RelativeAge(value=3, unit=<TimeUnit.HOUR: 'hour'>)
    >>> parse_relative_age("2024. 5. 1.") is None
    True
    """
    if text is None or not text.strip():
        return None

    lowered = text.strip().lower()

    if any(marker in lowered for marker in LIVE_MARKERS):
        return RelativeAge(0, None)

    match = _ENGLISH_AGO_RE.search(lowered)
    if match:
        return RelativeAge(int(match.group(1)), TimeUnit(match.group(2)))

    match = _KOREAN_AGO_RE.search(lowered)
    if match:
        return RelativeAge(int(match.group(1)), _KOREAN_UNITS[match.group(2)])

    return None


def is_within_window(text: str | None, window_days: int) -> bool:
    """
    Decide whether relative-time text falls inside a day window.

    Live items and second/minute ages are always inside. Hour ages are
    inside when fewer than ``window_days * 24``; day ages when fewer than
    ``window_days``. Missing or unrecognized text is outside.

    Parameters
    ----------
    text : str | None
        Relative publish-time text from a listing or watch page.
    window_days : int
        Window size in days, clamped to at least 1.

    Returns
    -------
    bool
        True when the item is recent enough to report.

    Examples
    --------
    >>> is_within_window("3 hours ago", 1)
    True
    >>> is_within_window("3 days ago", 1)
    False
    """
    age = parse_relative_age(text)
    if age is None:
        if text and text.strip():
            logger.debug("Unrecognized relative time text: %r", text)
        return False

    if age.unit is None:
        return True

    window = clamp_window(window_days)
    if age.unit in (TimeUnit.SECOND, TimeUnit.MINUTE):
        return True
    if age.unit is TimeUnit.HOUR:
        return age.value < window * 24
    return age.value < window
