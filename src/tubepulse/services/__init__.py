"""
Services module for tubepulse.

Contains the two video providers (YouTube Data API and public page
scraping) and the per-report diagnostics context they share.
"""

from __future__ import annotations

from tubepulse.services.api_provider import ApiVideoProvider
from tubepulse.services.diagnostics import Diagnostics
from tubepulse.services.scraping.orchestrator import WebVideoProvider

__all__: list[str] = ["ApiVideoProvider", "Diagnostics", "WebVideoProvider"]
