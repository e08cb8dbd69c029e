# src/gcal_client/calendar_client.py
import json
import logging
from urllib.parse import quote

from gcal_client.errors import ApiError
from gcal_client.event import Event
from gcal_client.http_client import HttpClient

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="@")


def _parse_event(raw: str) -> Event:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ApiError(200, raw, "Calendar API returned a non-JSON body") from e
    if not isinstance(data, dict):
        raise ApiError(200, raw, "Calendar API returned JSON that is not an event object")
    return Event.from_dict(data)


class CalendarClient:
    def __init__(self, http_client: HttpClient):
        self.http_client = http_client

    def create_event(self, calendar_id: str, event: Event) -> Event:
        """Insert `event` into the calendar and return the event the API created."""
        event.validate()

        path = f"calendars/{_segment(calendar_id)}/events"
        logger.debug("Creating event %r in %s", event.summary, calendar_id)
        resp = self.http_client.post(path, event.to_dict())
        return _parse_event(resp)

    def get_event(self, calendar_id: str, event_id: str) -> Event:
        path = f"calendars/{_segment(calendar_id)}/events/{_segment(event_id)}"
        resp = self.http_client.get(path)
        return _parse_event(resp)
