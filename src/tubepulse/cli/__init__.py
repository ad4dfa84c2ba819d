"""
CLI interface module for tubepulse.

Provides the Typer-based ``tubepulse`` command that prints a channel's
recent activity report.
"""

from __future__ import annotations

__all__: list[str] = []
