# src/gcal_client/event.py
import datetime
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from gcal_client.errors import ValidationError
from gcal_client.timezone_utils import UTC, as_utc, convert_to_timezone


@dataclass
class EventDateTime:
    """One end of an event as the API sends it: an encoded instant plus its zone."""
    date_time: Optional[str] = None
    time_zone: Optional[str] = None
    date: Optional[str] = None  # all-day events only

    @classmethod
    def from_instant(cls, dt: datetime.datetime, timezone: str) -> "EventDateTime":
        return cls(date_time=convert_to_timezone(dt, timezone), time_zone=timezone)

    def to_dict(self) -> dict:
        out = {}
        if self.date_time is not None:
            out["dateTime"] = self.date_time
        if self.time_zone is not None:
            out["timeZone"] = self.time_zone
        if self.date is not None:
            out["date"] = self.date
        return out

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["EventDateTime"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            date_time=data.get("dateTime"),
            time_zone=data.get("timeZone"),
            date=data.get("date"),
        )


@dataclass
class Event:
    summary: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start: Optional[EventDateTime] = None
    end: Optional[EventDateTime] = None
    id: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def new(cls, summary, start, end, description=None, location=None, timezone=None) -> "Event":
        """
        Build an event from two UTC instants.

        timezone is a designator ("UTC", "Asia/Tokyo", "GMT+09:00"); UTC when omitted.
        Raises InvalidTimezone for a bad designator, ValidationError if end is before start.
        """
        tz = UTC if timezone is None else timezone
        if as_utc(end) < as_utc(start):
            raise ValidationError("Event end must not be before its start")
        return cls(
            summary=summary,
            description=description,
            location=location,
            start=EventDateTime.from_instant(start, tz),
            end=EventDateTime.from_instant(end, tz),
        )

    def validate(self):
        if not self.summary:
            raise ValidationError("Event title (summary) is required")

    def to_dict(self) -> dict:
        out = {}
        if self.id is not None:
            out["id"] = self.id
        if self.status is not None:
            out["status"] = self.status
        out["summary"] = self.summary
        out["description"] = self.description
        out["location"] = self.location
        if self.start is not None:
            out["start"] = self.start.to_dict()
        if self.end is not None:
            out["end"] = self.end.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            summary=data.get("summary"),
            description=data.get("description"),
            location=data.get("location"),
            start=EventDateTime.from_dict(data.get("start")),
            end=EventDateTime.from_dict(data.get("end")),
        )
