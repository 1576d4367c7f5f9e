"""
Schedule Normalizer

Turns date-less 'HH:MM' ranges scraped from the guide into absolute instants
anchored to a reference day.
"""
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, timezone, tzinfo
import logging

from tvguide.services.schedule_types import NormalizedScheduleEntry, RawScheduleEntry
from tvguide.utils.timezone import TimeFormatError, parse_time_of_day


logger = logging.getLogger(__name__)

# Programs starting before this hour belong to the night after the reference day
EARLY_MORNING_CUTOFF_HOUR = 6

_ONE_DAY = timedelta(days=1)


def normalize_schedule(
    raw_entries: Sequence[RawScheduleEntry],
    reference_day: date,
    tz: tzinfo = timezone.utc,
) -> list[NormalizedScheduleEntry]:
    """
    Resolve raw guide entries to absolute start/end instants.

    The guide lists a broadcast day that runs past midnight, so a program whose
    end reads earlier than its start crosses midnight, and a program starting
    before EARLY_MORNING_CUTOFF_HOUR is shifted to the following calendar day.
    Entries that cannot be parsed are logged and skipped; the order of the
    remaining entries is preserved.

    Args:
        raw_entries: Entries as extracted from the guide page
        reference_day: Calendar day the guide page represents
        tz: Timezone of the guide's wall clock

    Returns:
        List of normalized entries, each with end_time > start_time
    """
    normalized: list[NormalizedScheduleEntry] = []

    for entry in raw_entries:
        program = _normalize_entry(entry, reference_day, tz)
        if program is not None:
            normalized.append(program)

    skipped = len(raw_entries) - len(normalized)
    if skipped:
        logger.info("Normalized %s entries, skipped %s", len(normalized), skipped)
    else:
        logger.debug("Normalized %s entries", len(normalized))

    return normalized


def _normalize_entry(
    entry: RawScheduleEntry,
    reference_day: date,
    tz: tzinfo,
) -> NormalizedScheduleEntry | None:
    """Normalize a single entry, returning None when it must be skipped"""
    try:
        start_hour, start_minute = parse_time_of_day(entry.raw_start_time)
        end_hour, end_minute = parse_time_of_day(entry.raw_end_time)
    except TimeFormatError as exc:
        logger.warning("Skipping invalid item %r: %s", entry, exc)
        return None

    # Wall-clock arithmetic first, localized once at the end
    start_time = datetime.combine(reference_day, time(start_hour, start_minute))
    end_time = datetime.combine(reference_day, time(end_hour, end_minute))

    if end_time < start_time:
        end_time += _ONE_DAY

    if start_hour < EARLY_MORNING_CUTOFF_HOUR:
        start_time += _ONE_DAY
        end_time += _ONE_DAY

    start_time = start_time.replace(tzinfo=tz)
    end_time = end_time.replace(tzinfo=tz)

    # Compare as UTC instants; same-zone comparison would use wall time
    if end_time.astimezone(timezone.utc) <= start_time.astimezone(timezone.utc):
        logger.warning(
            "Skipping item with non-positive duration %r (%s -> %s)",
            entry,
            start_time.isoformat(),
            end_time.isoformat(),
        )
        return None

    return NormalizedScheduleEntry(
        channel=entry.channel,
        title=entry.title,
        start_time=start_time,
        end_time=end_time,
    )
