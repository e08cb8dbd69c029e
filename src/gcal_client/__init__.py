from gcal_client.calendar_client import CalendarClient
from gcal_client.config import GCalConfig
from gcal_client.errors import (
    ApiError,
    AuthError,
    ConfigError,
    ConversionError,
    GCalError,
    InvalidTimezone,
    RequestError,
    TimezoneError,
    ValidationError,
)
from gcal_client.event import Event, EventDateTime
from gcal_client.google_auth_helpers import (
    ServiceAccountCredential,
    build_assertion,
    fetch_access_token,
)
from gcal_client.http_client import HttpClient
from gcal_client.timezone_utils import (
    TimezonePolicy,
    convert_to_timezone,
    validate_timezone,
)
from gcal_client.transport import RequestsTransport, Transport, TransportResponse

__version__ = "0.1.0"
