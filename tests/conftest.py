"""
Pytest configuration and fixtures for tubepulse tests.
"""

from __future__ import annotations

import pytest

from tubepulse.config.settings import Settings
from tubepulse.services.diagnostics import Diagnostics


@pytest.fixture
def mock_settings() -> Settings:
    """Settings isolated from the environment and any ``.env`` file."""
    return Settings(
        _env_file=None,
        youtube_api_key="",
        log_level="WARNING",
        trace_video_ids="",
    )


@pytest.fixture
def diagnostics() -> Diagnostics:
    """Fresh diagnostics context."""
    return Diagnostics()
