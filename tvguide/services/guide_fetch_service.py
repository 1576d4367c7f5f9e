"""
Guide Fetch Service

Downloads the guide page and extracts raw program entries from it.
Separated from normalization and persistence for better testability.
"""
import asyncio
import logging

import httpx

from tvguide.config import CustomSettings, settings
from tvguide.services.guide_parser_service import parse_guide_async
from tvguide.services.schedule_types import RawScheduleEntry
from tvguide.utils.file_operations import download_page


logger = logging.getLogger(__name__)


def build_client(
    config: CustomSettings = settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the HTTP client used for one scrape session"""
    return httpx.AsyncClient(
        timeout=config.request_timeout_sec,
        follow_redirects=True,
        headers={
            "User-Agent": config.user_agent,
            "Accept-Language": config.accept_language,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
        transport=transport,
    )


async def fetch_guide_page(
    config: CustomSettings = settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    Fetch the guide page within a single cookie session

    The home page is visited first so the guide request carries the
    session cookies it sets.

    Args:
        config: Settings to use (defaults to the global settings)
        transport: Optional httpx transport, e.g. a MockTransport in tests

    Returns:
        Guide page response

    Raises:
        httpx.HTTPError: If either request fails
    """
    async with build_client(config, transport) as client:
        logger.info(f"Navigating to home page ({config.base_url}) to establish session...")
        await download_page(config.base_url, client)

        if config.warmup_delay_sec:
            logger.info(f"Waiting {config.warmup_delay_sec:g} seconds...")
            await asyncio.sleep(config.warmup_delay_sec)

        logger.info(f"Navigating to TV guide ({config.guide_url})...")
        return await download_page(config.guide_url, client)


async def collect_raw_entries(
    config: CustomSettings = settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RawScheduleEntry]:
    """
    Download and parse the guide page

    Args:
        config: Settings to use (defaults to the global settings)
        transport: Optional httpx transport

    Returns:
        Raw entries for the configured channels
    """
    response = await fetch_guide_page(config, transport)

    logger.info("Page loaded. Extracting data...")
    entries = await parse_guide_async(
        response.content,
        config.channels,
        encoding=response.charset_encoding,
        parse_timeout_seconds=config.parse_timeout_sec,
    )
    logger.info(f"Extracted {len(entries)} raw programs.")
    logger.debug(
        "  Channels with programs: %s",
        ", ".join(sorted({entry.channel for entry in entries})) or "none",
    )
    return entries
