"""
Shared types used across the schedule scraping pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class RawScheduleEntry:
    """Program row as read from the guide page, times still as 'HH:MM' text."""
    channel: str
    title: str
    raw_start_time: str
    raw_end_time: str


@dataclass(slots=True)
class NormalizedScheduleEntry:
    """Program row anchored to absolute, timezone-aware instants."""
    channel: str
    title: str
    start_time: datetime
    end_time: datetime


class ScrapeError(Exception):
    """Base class for pipeline-level scrape failures."""


class GuideParseError(ScrapeError):
    """Raised when the guide document cannot be parsed at all."""


class NoScheduleDataError(ScrapeError):
    """Raised when the guide page yields no program entries."""


__all__ = [
    "RawScheduleEntry",
    "NormalizedScheduleEntry",
    "ScrapeError",
    "GuideParseError",
    "NoScheduleDataError",
]
