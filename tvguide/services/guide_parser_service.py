from collections.abc import Collection
from typing import Optional
import asyncio
import logging

from lxml import etree  # type: ignore
from lxml import html as lxml_html  # type: ignore

from tvguide.services.schedule_types import GuideParseError, RawScheduleEntry

logger = logging.getLogger(__name__)

CHANNEL_CLASS = "scheduleChannel"
CHANNEL_NUMBER_CLASS = "scheduleChannel_num"
ITEM_CLASS = "scheduleChannel_item"


def parse_guide_html(
    html: str | bytes,
    channels: Collection[str],
    encoding: str | None = None,
) -> list[RawScheduleEntry]:
    """
    Extract raw program entries for the given channels from a guide page

    Args:
        html: Guide page markup
        channels: Channel numbers to keep
        encoding: Charset of byte input; None lets lxml use the declared one

    Returns:
        List of raw entries in document order

    Raises:
        GuideParseError: If the markup cannot be parsed at all
    """
    if isinstance(html, str):
        # lxml refuses str input that carries an XML encoding declaration
        html, encoding = html.encode("utf-8"), "utf-8"
    parser = lxml_html.HTMLParser(encoding=encoding) if encoding else None

    try:
        root = lxml_html.fromstring(html, parser=parser)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        raise GuideParseError(f"Could not parse guide page: {e}") from e

    wanted = set(channels)
    entries: list[RawScheduleEntry] = []
    seen_channels = 0

    for container in root.xpath(f"//*[{_has_class(CHANNEL_CLASS)}]"):
        channel = _get_channel_number(container)
        if channel is None:
            logger.debug("Skipping channel container without a number")
            continue
        seen_channels += 1
        if channel not in wanted:
            continue

        channel_entries = _parse_channel_items(container, channel)
        logger.debug(f"  Channel {channel}: {len(channel_entries)} programs")
        entries.extend(channel_entries)

    logger.info(f"Guide parsing complete: {seen_channels} channels on page, {len(entries)} programs kept")
    return entries


def _parse_channel_items(container: etree._Element, channel: str) -> list[RawScheduleEntry]:
    """Extract program entries from a single channel container"""
    entries = []

    for item in container.xpath(f".//*[{_has_class(ITEM_CLASS)}]"):
        entry = _parse_single_item(item, channel)
        if entry:
            entries.append(entry)

    return entries


def _parse_single_item(item: etree._Element, channel: str) -> Optional[RawScheduleEntry]:
    """Parse single program item, None when title or time range is unusable"""
    title = _get_text(item, ".//span")
    time_range = _get_text(item, ".//strong")

    if title is None or time_range is None:
        logger.debug(f"Skipping item without title or time on channel {channel}")
        return None

    times = [part.strip() for part in time_range.split("-")]
    if len(times) != 2:
        logger.debug(f"Skipping item with unexpected time range '{time_range}' on channel {channel}")
        return None

    return RawScheduleEntry(
        channel=channel,
        title=title,
        raw_start_time=times[0],
        raw_end_time=times[1],
    )


def _get_channel_number(container: etree._Element) -> Optional[str]:
    """Channel number is the bold text inside the number cell"""
    return _get_text(container, f".//*[{_has_class(CHANNEL_NUMBER_CLASS)}]//b")


def _has_class(name: str) -> str:
    """XPath predicate matching a whole class token"""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def _get_text(element: etree._Element, path: str) -> Optional[str]:
    """Trimmed text of the first match, None if there is no match"""
    found = element.xpath(path)
    if not found:
        return None
    return found[0].text_content().strip()


async def parse_guide_async(
    html: str | bytes,
    channels: Collection[str],
    *,
    encoding: str | None = None,
    parse_timeout_seconds: int | None = None
) -> list[RawScheduleEntry]:
    """
    Parse the guide page in a worker thread with timeout protection.

    Args:
        html: Guide page markup
        channels: Channel numbers to keep

    Keyword Args:
        encoding: Charset of byte input, usually the response header charset
        parse_timeout_seconds: Timeout in seconds for parsing (0/None disables timeout)

    Raises:
        GuideParseError: If parsing fails or times out
    """
    effective_timeout = parse_timeout_seconds if parse_timeout_seconds and parse_timeout_seconds > 0 else None
    timeout_display = f"{effective_timeout}s" if effective_timeout else "disabled"

    loop = asyncio.get_running_loop()
    logger.debug("Offloading guide parsing to thread pool executor (timeout: %s)...", timeout_display)
    parse_task = loop.run_in_executor(None, parse_guide_html, html, channels, encoding)

    try:
        if effective_timeout:
            return await asyncio.wait_for(parse_task, timeout=effective_timeout)
        return await parse_task
    except asyncio.TimeoutError as e:
        logger.error("Guide parsing timed out after %s", timeout_display)
        raise GuideParseError("Guide parsing timed out - page may be too large or malformed") from e
