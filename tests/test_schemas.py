import json
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from tvguide.schemas import ScheduleEntry, dump_schedule
from tvguide.services.normalizer_service import normalize_schedule
from tvguide.services.schedule_types import NormalizedScheduleEntry


def test_dump_uses_camel_case_keys_and_utc_timestamps():
    entry = NormalizedScheduleEntry(
        channel="12",
        title="News at 10",
        start_time=datetime(2024, 6, 1, 22, 0, tzinfo=timezone.utc),
        end_time=datetime(2024, 6, 1, 23, 0, tzinfo=timezone.utc),
    )

    assert dump_schedule([entry]) == [
        {
            "channel": "12",
            "title": "News at 10",
            "startTime": "2024-06-01T22:00:00.000Z",
            "endTime": "2024-06-01T23:00:00.000Z",
        }
    ]


def test_local_times_are_serialized_as_utc(make_raw):
    tz = ZoneInfo("Asia/Jerusalem")
    programs = normalize_schedule([make_raw("23:30", "00:15")], date(2024, 6, 1), tz)

    [item] = dump_schedule(programs)

    assert item["startTime"] == "2024-06-01T20:30:00.000Z"
    assert item["endTime"] == "2024-06-01T21:15:00.000Z"


def test_json_round_trip_keeps_timestamps_identical(make_raw, reference_day):
    tz = ZoneInfo("Asia/Jerusalem")
    raw = [make_raw("20:00", "21:00"), make_raw("23:30", "00:15"), make_raw("01:00", "05:30")]
    first = dump_schedule(normalize_schedule(raw, reference_day, tz))

    reparsed = [ScheduleEntry.model_validate(item) for item in json.loads(json.dumps(first))]
    second = [item.model_dump(mode="json", by_alias=True) for item in reparsed]

    assert second == first


def test_schedule_entry_rejects_inverted_range():
    with pytest.raises(ValidationError):
        ScheduleEntry(
            channel="12",
            title="Backwards",
            startTime="2024-06-01T23:00:00.000Z",
            endTime="2024-06-01T22:00:00.000Z",
        )


def test_schedule_entry_rejects_naive_timestamps():
    with pytest.raises(ValidationError):
        ScheduleEntry(
            channel="12",
            title="Naive",
            startTime="2024-06-01T22:00:00",
            endTime="2024-06-01T23:00:00",
        )
