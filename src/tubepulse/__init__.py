"""
tubepulse - Recent YouTube channel activity reporter.

A CLI-first application that lists a channel's recent videos, live streams
and shorts with their engagement metrics, using the YouTube Data API when a
key is configured and falling back to parsing public YouTube pages otherwise.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "tubepulse"
__email__ = "noreply@tubepulse.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
