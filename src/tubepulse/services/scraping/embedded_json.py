"""
Extraction of JSON object literals embedded in YouTube HTML.

YouTube pages carry their data model as JavaScript assignments such as
``var ytInitialData = {...};``. The extractor finds the variable name and
returns the balanced ``{...}`` that follows it without running an HTML or
JavaScript parser.

The scan counts braces lexically. Braces inside JSON string values are
counted too, so a string containing an unbalanced ``}`` ends the block
early; the resulting text then fails to parse and callers treat that as a
soft failure.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

YT_INITIAL_DATA = "ytInitialData"
YT_INITIAL_PLAYER_RESPONSE = "ytInitialPlayerResponse"


def extract_json_block(html: str, marker: str) -> str | None:
    """
    Extract the balanced JSON object that follows a marker.

    Parameters
    ----------
    html : str
        Raw HTML source.
    marker : str
        Literal text to locate, typically a JavaScript variable name.

    Returns
    -------
    str | None
        Text from the first ``{`` after the first occurrence of ``marker``
        through the ``}`` that closes it, or ``None`` when the marker, the
        opening brace or the closing brace is missing.
    """
    idx = html.find(marker)
    if idx < 0:
        return None

    start = html.find("{", idx)
    if start < 0:
        return None

    depth = 0
    for i in range(start, len(html)):
        ch = html[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return html[start : i + 1]

    return None


def load_embedded_json(html: str, marker: str) -> Any | None:
    """
    Extract and parse the JSON object that follows a marker.

    Returns ``None`` when the block is missing or is not valid JSON.
    """
    json_str = extract_json_block(html, marker)
    if json_str is None:
        logger.debug("No %s block found in page", marker)
        return None

    try:
        return json.loads(json_str)
    except (json.JSONDecodeError, ValueError):
        logger.debug("Malformed %s JSON (%d chars)", marker, len(json_str))
        return None
