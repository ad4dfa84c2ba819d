"""
Custom validated types for YouTube identifiers.

Provides strongly-typed wrappers for YouTube IDs and handles that enforce
format constraints at the type level.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BeforeValidator

CHANNEL_ID_PREFIX = "UC"

_CHANNEL_ID_RE = re.compile(r"^UC[A-Za-z0-9_-]+$")


def is_channel_id(v: object) -> bool:
    """Check whether a value follows the ``UC`` channel identifier convention."""
    return isinstance(v, str) and _CHANNEL_ID_RE.match(v) is not None


def validate_channel_id(v: str) -> str:
    """Validate YouTube Channel ID format."""
    if not isinstance(v, str):
        raise TypeError("ChannelId must be a string")

    # Check prefix
    if not v.startswith(CHANNEL_ID_PREFIX):
        raise ValueError(f'ChannelId must start with "UC", got: {v}')

    # Check valid characters (alphanumeric, hyphens, underscores)
    if not _CHANNEL_ID_RE.match(v):
        raise ValueError(f"ChannelId contains invalid characters: {v}")

    return v


def validate_video_id(v: str) -> str:
    """Validate that a video ID is a non-blank string."""
    if not isinstance(v, str):
        raise TypeError("VideoId must be a string")

    if not v.strip():
        raise ValueError("VideoId cannot be empty")

    return v


def normalize_handle(v: str) -> str:
    """
    Normalize a channel handle to its ``@name`` form.

    Examples
    --------
    >>> normalize_handle("GoogleDevelopers")
    '@GoogleDevelopers'
    >>> normalize_handle(" @GoogleDevelopers ")
    '@GoogleDevelopers'
    """
    if not isinstance(v, str):
        raise TypeError("Handle must be a string")

    handle = v.strip()
    if not handle or handle == "@":
        raise ValueError("Handle cannot be empty")

    if not handle.startswith("@"):
        handle = "@" + handle

    return handle


ChannelId = Annotated[str, BeforeValidator(validate_channel_id)]
VideoId = Annotated[str, BeforeValidator(validate_video_id)]
