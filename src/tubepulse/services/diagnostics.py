"""
Per-invocation diagnostics context.

A ``Diagnostics`` instance is created by the CLI for each report and handed
to the HTTP fetcher and the video providers. It counts the bytes received
over the wire and routes progress messages to the logging system, so no
module keeps global debug state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class Diagnostics:
    """
    Transport byte counter and diagnostic message sink.

    Parameters
    ----------
    trace_ids : Iterable[str], optional
        Video IDs whose recency decisions are always reported, even when
        verbose logging is off. Matching is case-insensitive.
    log : logging.Logger, optional
        Logger that receives messages (default: this module's logger).

    Examples
    --------
    >>> diagnostics = Diagnostics(trace_ids=["m7kqGRW4rGw"])
    >>> diagnostics.record(2048)
    >>> diagnostics.traffic_bytes
    2048
    """

    def __init__(
        self,
        trace_ids: Iterable[str] = (),
        log: logging.Logger | None = None,
    ) -> None:
        self._traffic_bytes = 0
        self._trace_ids = frozenset(vid.lower() for vid in trace_ids)
        self._logger = log or logger

    @property
    def traffic_bytes(self) -> int:
        """Total response bytes recorded so far."""
        return self._traffic_bytes

    def record(self, num_bytes: int) -> None:
        """Add received bytes to the traffic counter; non-positive sizes are ignored."""
        if num_bytes > 0:
            self._traffic_bytes += num_bytes

    def log(self, message: str, *args: object) -> None:
        """Emit a verbose-only diagnostic message."""
        self._logger.debug(message, *args)

    def should_trace(self, video_id: str | None) -> bool:
        """Whether recency decisions for ``video_id`` are always reported."""
        if not video_id or not video_id.strip():
            return False
        return video_id.lower() in self._trace_ids

    def trace(self, video_id: str, message: str, *args: object) -> None:
        """Report a decision for a traced video, or log it verbosely otherwise."""
        if self.should_trace(video_id):
            self._logger.info(message, *args)
        else:
            self._logger.debug(message, *args)
