from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from tvguide.services.schedule_types import NormalizedScheduleEntry
from tvguide.utils.timezone import format_iso8601_utc


class ScheduleEntry(BaseModel):
    """Persisted program entry"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    channel: str = Field(..., description="Channel number")
    title: str = Field(..., description="Program title")
    start_time: datetime = Field(..., alias="startTime", description="ISO8601 UTC start time")
    end_time: datetime = Field(..., alias="endTime", description="ISO8601 UTC end time")

    @model_validator(mode='after')
    def validate_time_range(self):
        """Validate that start_time is before end_time"""
        if self.start_time.tzinfo is None or self.end_time.tzinfo is None:
            raise ValueError("startTime and endTime must carry a timezone")
        if self.start_time >= self.end_time:
            raise ValueError(f"startTime ({self.start_time}) must be before endTime ({self.end_time})")
        return self

    @field_serializer('start_time', 'end_time')
    def serialize_time(self, value: datetime) -> str:
        return format_iso8601_utc(value)

    @classmethod
    def from_payload(cls, entry: NormalizedScheduleEntry) -> "ScheduleEntry":
        return cls(
            channel=entry.channel,
            title=entry.title,
            start_time=entry.start_time,
            end_time=entry.end_time,
        )


def dump_schedule(entries: list[NormalizedScheduleEntry]) -> list[dict]:
    """Convert normalized entries to the JSON-ready output array"""
    return [
        ScheduleEntry.from_payload(entry).model_dump(mode="json", by_alias=True)
        for entry in entries
    ]
