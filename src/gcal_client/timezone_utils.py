# src/gcal_client/timezone_utils.py
"""
Timezone designators accepted by the Calendar API and how instants are encoded for them.

Three designator forms are understood:
  - "UTC"
  - "Region/City" (e.g. "Asia/Tokyo"), optionally restricted to a set of regions
  - "GMT+HH:MM" / "GMT-HH:MM" fixed offsets
"""
import datetime
import re
from dataclasses import dataclass
from typing import Optional

from gcal_client.errors import ConversionError, InvalidTimezone

UTC = "UTC"

DEFAULT_REGIONS = frozenset({
    "Asia",
    "America",
    "Europe",
    "Africa",
    "Australia",
    "Pacific",
    "Atlantic",
    "Indian",
})

_GMT_OFFSET_RE = re.compile(r"GMT([+-])(\d{2}):(\d{2})", re.ASCII)


@dataclass(frozen=True)
class TimezonePolicy:
    """
    Which Region/City designators validate.

    An empty allowed_regions accepts any pair of non-empty segments.
    """
    allowed_regions: frozenset = DEFAULT_REGIONS

    @classmethod
    def open(cls) -> "TimezonePolicy":
        return cls(allowed_regions=frozenset())

    def accepts_region(self, region: str) -> bool:
        return not self.allowed_regions or region in self.allowed_regions


DEFAULT_POLICY = TimezonePolicy()


def parse_gmt_offset(tz: str) -> Optional[datetime.timedelta]:
    """Return the signed offset of a valid "GMT±HH:MM" designator, None for anything else."""
    match = _GMT_OFFSET_RE.fullmatch(tz)
    if not match:
        return None
    sign, hours, minutes = match.group(1), int(match.group(2)), int(match.group(3))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    offset = datetime.timedelta(hours=hours, minutes=minutes)
    return -offset if sign == "-" else offset


def _split_region_city(tz: str):
    parts = tz.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


def validate_timezone(tz: str, policy: TimezonePolicy = DEFAULT_POLICY) -> bool:
    if tz == UTC:
        return True

    if "/" in tz:
        pair = _split_region_city(tz)
        return pair is not None and policy.accepts_region(pair[0])

    if tz.startswith("GMT"):
        return parse_gmt_offset(tz) is not None

    return False


def as_utc(dt: datetime.datetime) -> datetime.datetime:
    # naive datetimes are taken to already be UTC
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def _wall_clock(dt: datetime.datetime) -> str:
    return dt.replace(microsecond=0).isoformat()


def convert_to_timezone(dt: datetime.datetime, tz: str, policy: TimezonePolicy = DEFAULT_POLICY) -> str:
    """
    Encode a UTC instant for the given designator.

    - "UTC"        -> 2024-01-01T00:00:00Z
    - "GMT+09:00"  -> 2024-01-01T09:00:00+09:00 (wall clock shifted by the offset)
    - "Asia/Tokyo" -> 2024-01-01T00:00:00 (no suffix, the zone is sent as timeZone)

    Raises InvalidTimezone if the designator does not validate and ConversionError
    if shifting by the offset leaves the supported datetime range.
    """
    if not validate_timezone(tz, policy):
        raise InvalidTimezone(tz)

    utc_dt = as_utc(dt)

    if tz == UTC:
        return _wall_clock(utc_dt) + "Z"

    offset = parse_gmt_offset(tz)
    if offset is not None:
        try:
            local_dt = utc_dt + offset
        except OverflowError as e:
            raise ConversionError(f"{utc_dt.isoformat()} shifted by {tz} is out of range") from e
        # keep the designator's own suffix so "GMT-00:00" stays "-00:00"
        return _wall_clock(local_dt) + tz[len("GMT"):]

    return _wall_clock(utc_dt)
