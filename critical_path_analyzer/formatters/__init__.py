"""Formatting utilities for critical path output."""

from .time_formatter import format_time, format_duration_us

__all__ = ["format_time", "format_duration_us"]
