"""
Abstract Base Class for video providers.

This interface defines the contract shared by the Data API provider and the
web scraping provider, enabling:
- Provider selection at runtime without the CLI knowing which is in use
- Testability via mock implementations
- Clear API boundaries for IDE support and type checking
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from tubepulse.models.video import ChannelInfo, VideoRecord


class VideoProviderInterface(ABC):
    """
    Abstract interface for retrieving a channel's recent activity.

    Implementations return uniform ``VideoRecord`` lists regardless of the
    data source, and expose the channel details they resolved along the
    way through ``channel_info``.

    Examples
    --------
    >>> class MockVideoProvider(VideoProviderInterface):
    ...     async def get_recent_videos(self, handle, max_results, window_days):
    ...         return []  # Mock implementation
    """

    channel_info: Optional[ChannelInfo] = None

    @abstractmethod
    async def get_recent_videos(
        self, handle: str, max_results: int, window_days: int
    ) -> List[VideoRecord]:
        """
        Get a channel's recent videos, live streams and shorts.

        Parameters
        ----------
        handle : str
            Channel handle including the leading ``@``.
        max_results : int
            Maximum number of records to return.
        window_days : int
            Only items published within this many days are returned;
            values below 1 are treated as 1.

        Returns
        -------
        List[VideoRecord]
            Records unique by video ID. An empty list when the channel
            cannot be resolved or has no recent activity.

        Raises
        ------
        NetworkError
            If a request the report cannot do without fails.
        """
        pass
