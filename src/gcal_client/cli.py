# src/gcal_client/cli.py
import argparse
import datetime
import json
import logging
import sys

from gcal_client.calendar_client import CalendarClient
from gcal_client.config import DEFAULT_CREDENTIALS_ENV, GCalConfig
from gcal_client.errors import GCalError
from gcal_client.event import Event
from gcal_client.http_client import HttpClient


def build_parser():
    parser = argparse.ArgumentParser(description="Create or fetch Google Calendar events with a service account")
    parser.add_argument("--credentials-env", default=DEFAULT_CREDENTIALS_ENV,
                        help=f"Env var holding the service account JSON (default {DEFAULT_CREDENTIALS_ENV})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an event")
    create.add_argument("--calendar-id", "-c", required=True)
    create.add_argument("--summary", "-s", required=True)
    create.add_argument("--timezone", "-t", default=None,
                        help='"UTC" (default), "Region/City" such as Asia/Tokyo, or "GMT+09:00"')
    create.add_argument("--start", help="Start as ISO datetime in UTC. If omitted, one hour from now.")
    create.add_argument("--duration-minutes", "-d", type=int, default=60)
    create.add_argument("--description")
    create.add_argument("--location")

    get = sub.add_parser("get", help="Fetch one event")
    get.add_argument("--calendar-id", "-c", required=True)
    get.add_argument("--event-id", "-e", required=True)
    return parser


def parse_start(value):
    if not value:
        return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0) + datetime.timedelta(hours=1)
    return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))


def run(args, client: CalendarClient, start=None) -> Event:
    if args.command == "create":
        end = start + datetime.timedelta(minutes=args.duration_minutes)
        event = Event.new(
            args.summary,
            start,
            end,
            description=args.description,
            location=args.location,
            timezone=args.timezone,
        )
        return client.create_event(args.calendar_id, event)
    return client.get_event(args.calendar_id, args.event_id)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    start = None
    if args.command == "create":
        try:
            start = parse_start(args.start)
        except ValueError as e:
            parser.error(f"invalid --start value: {e}")

    try:
        config = GCalConfig.from_env(args.credentials_env)
        with HttpClient(config) as http_client:
            result = run(args, CalendarClient(http_client), start)
    except GCalError as e:
        print("Error:", e, file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
