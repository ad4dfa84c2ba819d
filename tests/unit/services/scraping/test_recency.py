"""
Tests for relative publish-time classification.
"""

from __future__ import annotations

import pytest

from tubepulse.services.scraping.recency import (
    RelativeAge,
    TimeUnit,
    clamp_window,
    is_within_window,
    parse_relative_age,
)


class TestParseRelativeAge:
    """Test parsing of English and Korean relative times."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("3 hours ago", RelativeAge(3, TimeUnit.HOUR)),
            ("1 hour ago", RelativeAge(1, TimeUnit.HOUR)),
            ("45 seconds ago", RelativeAge(45, TimeUnit.SECOND)),
            ("Streamed 2 days ago", RelativeAge(2, TimeUnit.DAY)),
            ("5일 전", RelativeAge(5, TimeUnit.DAY)),
            ("10분 전", RelativeAge(10, TimeUnit.MINUTE)),
            ("스트리밍 시간: 3시간 전", RelativeAge(3, TimeUnit.HOUR)),
            ("30초 전", RelativeAge(30, TimeUnit.SECOND)),
        ],
    )
    def test_parses_ages(self, text: str, expected: RelativeAge) -> None:
        assert parse_relative_age(text) == expected

    @pytest.mark.parametrize("text", ["LIVE NOW", "실시간", "라이브", "스트리밍 중"])
    def test_live_markers(self, text: str) -> None:
        """Live markers parse as live regardless of case."""
        age = parse_relative_age(text)
        assert age is not None
        assert age.is_live

    @pytest.mark.parametrize("text", [None, "", "2 weeks ago", "1개월 전", "2024. 5. 1.", "2024-05-01"])
    def test_unrecognized_text(self, text: str | None) -> None:
        assert parse_relative_age(text) is None


class TestIsWithinWindow:
    """Test the recency window decision."""

    def test_hours_inside_one_day(self) -> None:
        assert is_within_window("3 hours ago", 1) is True
        assert is_within_window("23 hours ago", 1) is True

    def test_hours_at_window_boundary(self) -> None:
        """Hour ages must be strictly below the window."""
        assert is_within_window("24 hours ago", 1) is False
        assert is_within_window("24 hours ago", 2) is True

    def test_days(self) -> None:
        assert is_within_window("3 days ago", 1) is False
        assert is_within_window("3 days ago", 4) is True
        assert is_within_window("3일 전", 3) is False

    def test_seconds_and_minutes_always_inside(self) -> None:
        assert is_within_window("59 minutes ago", 1) is True
        assert is_within_window("30초 전", 1) is True

    def test_live_always_inside(self) -> None:
        assert is_within_window("실시간 스트리밍 중", 1) is True

    @pytest.mark.parametrize("text", [None, "", "2 weeks ago", "2024-05-01"])
    def test_unknown_text_is_outside(self, text: str | None) -> None:
        assert is_within_window(text, 30) is False

    @pytest.mark.parametrize("window", [0, -5])
    def test_window_is_clamped_to_one_day(self, window: int) -> None:
        assert is_within_window("3 hours ago", window) is True
        assert is_within_window("1 day ago", window) is False

    @pytest.mark.parametrize("text", ["5 hours ago", "2 days ago", "3일 전", "40 hours ago"])
    def test_monotonic_in_window(self, text: str) -> None:
        """Once inside a window, text stays inside every larger window."""
        decisions = [is_within_window(text, window) for window in range(1, 10)]
        first_inside = decisions.index(True)
        assert all(decisions[first_inside:])

    def test_clamp_window(self) -> None:
        assert clamp_window(0) == 1
        assert clamp_window(30) == 30
