import datetime
import json

import pytest

from gcal_client.calendar_client import CalendarClient
from gcal_client.config import GCalConfig
from gcal_client.errors import ApiError, ValidationError
from gcal_client.event import Event
from gcal_client.http_client import HttpClient
from gcal_client.transport import TransportResponse

CALENDAR_ID = "team@group.calendar.google.com"
START = datetime.datetime(2024, 1, 1, 0, 0, 0, tzinfo=datetime.timezone.utc)


def _echo_created(event, event_id="evt123"):
    body = dict(event.to_dict(), id=event_id, status="confirmed")
    return TransportResponse(200, json.dumps(body))


@pytest.fixture
def make_client(credential, fake_transport):
    def _make(with_credentials=True):
        config = GCalConfig(credentials=credential if with_credentials else None)
        return CalendarClient(HttpClient(config, fake_transport))
    return _make


def test_create_event(make_client, fake_transport):
    client = make_client()
    event = Event.new("Tokyo sync", START, START + datetime.timedelta(hours=1),
                      description="weekly", location="Tokyo", timezone="Asia/Tokyo")
    fake_transport.responses.append(_echo_created(event))

    created = client.create_event(CALENDAR_ID, event)

    assert created.id == "evt123"
    assert created.summary == "Tokyo sync"
    assert created.location == "Tokyo"
    assert created.start.time_zone == "Asia/Tokyo"

    (req,) = fake_transport.api_requests()
    assert req["method"] == "POST"
    assert req["url"] == f"https://www.googleapis.com/calendar/v3/calendars/{CALENDAR_ID}/events"
    assert req["headers"]["Authorization"] == "Bearer ya29.test-token"
    sent = json.loads(req["body"])
    assert sent["start"] == {"dateTime": "2024-01-01T00:00:00", "timeZone": "Asia/Tokyo"}
    assert "id" not in sent


def test_create_event_without_credentials_sends_no_auth(make_client, fake_transport):
    client = make_client(with_credentials=False)
    event = Event.new("Standup", START, START)
    fake_transport.responses.append(_echo_created(event))

    client.create_event("primary", event)

    assert fake_transport.token_requests() == []
    assert "Authorization" not in fake_transport.requests[0]["headers"]


def test_create_event_validation_error_sends_nothing(make_client, fake_transport):
    client = make_client()

    with pytest.raises(ValidationError):
        client.create_event(CALENDAR_ID, Event())

    assert fake_transport.requests == []


def test_get_event(make_client, fake_transport):
    client = make_client()
    fake_transport.responses.append(TransportResponse(200, json.dumps({
        "id": "evt 1",
        "status": "confirmed",
        "summary": "Review",
        "description": "quarterly",
        "start": {"dateTime": "2024-01-01T00:00:00Z", "timeZone": "UTC"},
        "end": {"dateTime": "2024-01-01T01:00:00Z", "timeZone": "UTC"},
    })))

    event = client.get_event(CALENDAR_ID, "evt 1")

    assert event.summary == "Review"
    assert event.end.date_time == "2024-01-01T01:00:00Z"
    (req,) = fake_transport.api_requests()
    assert req["method"] == "GET"
    assert req["url"].endswith(f"/calendars/{CALENDAR_ID}/events/evt%201")


def test_get_event_not_found(make_client, fake_transport):
    client = make_client()
    fake_transport.responses.append(TransportResponse(404, '{"error": {"code": 404}}'))

    with pytest.raises(ApiError) as exc_info:
        client.get_event(CALENDAR_ID, "missing")
    assert exc_info.value.status == 404


def test_non_json_response_raises_api_error(make_client, fake_transport):
    client = make_client()
    fake_transport.responses.append(TransportResponse(200, "<html></html>"))

    with pytest.raises(ApiError):
        client.get_event(CALENDAR_ID, "evt")
