"""
Normalization of human-readable count text into integers.

YouTube pages render counts for people, not machines: ``"구독자 1.2만명"``,
``"1.5M subscribers"``, ``"좋아요 3,204개"``, ``"조회수 12,345회"``. The
functions here turn that text into plain integers, returning ``None`` when
no count can be recognized. A missing count is an ordinary outcome (hidden
subscriber counts, disabled likes) and never raises.

Functions
---------
parse_scaled_number
    Parse a count that may carry a Korean or Latin magnitude unit.
parse_first_number
    Parse the first digit run of a list-page view count.
format_count
    Render an optional count for display.
"""

from __future__ import annotations

import logging
import math
import re

logger = logging.getLogger(__name__)

MAX_COUNT = 2**63 - 1
"""Largest count accepted (signed 64-bit range)."""

MAX_COUNT_DIGITS = len(str(MAX_COUNT))

UNIT_SCALES: dict[str, int] = {
    "천": 1_000,
    "만": 10_000,
    "억": 100_000_000,
    "k": 1_000,
    "m": 1_000_000,
    "b": 1_000_000_000,
}
"""Magnitude units recognized after a numeral (lower-case)."""

# Label words removed before matching, longest first so "subscribers"
# is not left with a dangling "s".
_LABEL_WORDS = ("subscribers", "subscriber", "구독자", "구독", "명")
_LABEL_RE = re.compile("|".join(re.escape(w) for w in _LABEL_WORDS), re.IGNORECASE)

# CJK units are whole words, so units are alternatives rather than a
# character class. Latin units must not run into another letter, which
# keeps "12 months" from reading as 12 million.
_SCALED_NUMBER_RE = re.compile(
    r"(\d+(?:[.,]\d+)*)\s*(?:(천|만|억)|([kmb])(?![a-z]))?",
    re.IGNORECASE,
)

_FIRST_NUMBER_RE = re.compile(r"[0-9][0-9,. ]*")


def _normalize_numeral(numeral: str) -> str:
    """
    Resolve thousands separators versus the decimal point.

    With both ``.`` and ``,`` present the comma is a thousands separator;
    a comma alone is also a thousands separator; otherwise the numeral is
    used as is.
    """
    if "." in numeral and "," in numeral:
        return numeral.replace(",", "")
    if "," in numeral:
        return numeral.replace(",", "")
    return numeral


def parse_scaled_number(text: str | None) -> int | None:
    """
    Parse a count that may carry a magnitude unit.

    Parameters
    ----------
    text : str | None
        Count text such as ``"구독자 1.2만명"``, ``"2.5K"``, ``"1,234"``.

    Returns
    -------
    int | None
        The count rounded to the nearest integer, or ``None`` when the text
        holds no numeral or the value falls outside the signed 64-bit range.

    Examples
    --------
    >>> parse_scaled_number("1.2만")
    12000
    >>> parse_scaled_number("1.5M subscribers")
    1500000
    >>> parse_scaled_number("구독자 1,234명")
    1234
    >>> parse_scaled_number("No subscribers") is None
    True
    """
    if text is None or not text.strip():
        return None

    cleaned = _LABEL_RE.sub("", text.strip().lower()).strip()

    match = _SCALED_NUMBER_RE.search(cleaned)
    if not match:
        return None

    numeral = _normalize_numeral(match.group(1))
    unit = (match.group(2) or match.group(3) or "").lower()

    try:
        value = float(numeral)
    except ValueError:
        logger.debug("Unparseable numeral %r in count text %r", numeral, text)
        return None

    scaled = value * UNIT_SCALES.get(unit, 1)
    if not math.isfinite(scaled) or not 0 <= scaled <= MAX_COUNT:
        return None
    result = round(scaled)
    if result > MAX_COUNT:
        return None
    return result


def parse_first_number(text: str | None) -> int | None:
    """
    Parse the first run of digits in list-page view count text.

    Separators (commas, periods, spaces) inside the run are dropped. Unit
    suffixes are not interpreted.

    Examples
    --------
    >>> parse_first_number("조회수 12,345회")
    12345
    >>> parse_first_number("No views") is None
    True
    """
    if text is None or not text.strip():
        return None

    match = _FIRST_NUMBER_RE.search(text)
    if not match:
        return None

    digits = "".join(ch for ch in match.group(0) if ch.isdigit())
    if not digits:
        return None
    digits = digits.lstrip("0") or "0"
    # Longer runs cannot fit in 64 bits.
    if len(digits) > MAX_COUNT_DIGITS:
        return None

    value = int(digits)
    if value > MAX_COUNT:
        return None
    return value


def format_count(value: int | None, missing: str = "-") -> str:
    """
    Render a count for report output, or ``missing`` when unknown.

    Examples
    --------
    >>> format_count(12345)
    '12345'
    >>> format_count(None)
    '-'
    """
    if value is None:
        return missing
    return str(value)
