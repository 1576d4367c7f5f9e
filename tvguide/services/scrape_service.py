"""
Schedule Scrape Service

Coordinates fetching, normalization, and persistence of the guide schedule.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone

import httpx

from tvguide.config import CustomSettings, settings
from tvguide.schemas import dump_schedule
from tvguide.services.guide_fetch_service import collect_raw_entries
from tvguide.services.normalizer_service import normalize_schedule
from tvguide.services.schedule_types import NoScheduleDataError
from tvguide.utils.file_operations import write_json_file
from tvguide.utils.logging_helpers import (
    log_normalize_summary,
    log_scrape_end,
    log_scrape_start,
    log_section_end,
    log_section_start,
)
from tvguide.utils.timezone import get_zone, reference_day_for


logger = logging.getLogger(__name__)

# Global lock to prevent concurrent scrape operations
_scrape_lock = asyncio.Lock()


async def scrape_and_save(
    config: CustomSettings = settings,
    *,
    reference_day: date | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """
    Main entry point for a scrape cycle with concurrency protection.

    Args:
        config: Settings to use (defaults to the global settings)
        reference_day: Day the guide represents (defaults to today in the guide's timezone)
        transport: Optional httpx transport

    Returns:
        Dictionary with scrape statistics, or a skip message if a scrape is running

    Raises:
        NoScheduleDataError: If the page yields no program entries
        GuideParseError: If the page cannot be parsed
        httpx.HTTPError: If the page cannot be downloaded
    """
    if _scrape_lock.locked():
        logger.warning("Schedule scrape already in progress, skipping this request")
        return {
            "status": "skipped",
            "message": "Schedule scrape already in progress",
        }

    async with _scrape_lock:
        log_scrape_start(logger)
        try:
            return await _run_scrape(config, reference_day, transport)
        finally:
            log_scrape_end(logger)


async def _run_scrape(
    config: CustomSettings,
    reference_day: date | None,
    transport: httpx.AsyncBaseTransport | None,
) -> dict:
    started_at = datetime.now(timezone.utc)
    tz = get_zone(config.schedule_timezone)
    day = reference_day or reference_day_for(tz, started_at)
    logger.info("Reference day: %s (%s)", day.isoformat(), config.schedule_timezone)

    log_section_start(logger, "guide download")
    raw_entries = await collect_raw_entries(config, transport)
    log_section_end(logger, "guide download")

    if not raw_entries:
        raise NoScheduleDataError("No data extracted! The page might not have loaded correctly.")

    log_section_start(logger, "normalization")
    programs = normalize_schedule(raw_entries, day, tz)
    log_normalize_summary(logger, len(raw_entries), len(programs))
    log_section_end(logger, "normalization")

    output_path = await write_json_file(config.output_path, dump_schedule(programs))
    logger.info("Successfully saved to %s", output_path)

    return {
        "status": "success",
        "reference_day": day.isoformat(),
        "timezone": config.schedule_timezone,
        "channels": list(config.channels),
        "programs_extracted": len(raw_entries),
        "programs_saved": len(programs),
        "programs_skipped": len(raw_entries) - len(programs),
        "output_path": str(output_path),
        "started_at": started_at.isoformat(),
        "completed_at": datetime.now(timezone.utc).isoformat(),
    }
