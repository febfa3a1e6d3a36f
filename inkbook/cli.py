import argparse
import json
import sys
from typing import List, Optional

from inkbook.config import configure_logging
from inkbook.models import BOOKING_STATUSES
from inkbook.store import BookingStore, get_store


def format_row(booking: dict) -> str:
    return "  ".join(
        [
            str(booking.get("id", ""))[:12].ljust(12),
            f"{booking.get('date', '?')} {booking.get('time', '')}".ljust(17),
            str(booking.get("status") or "pending").ljust(9),
            str(booking.get("name", "")),
            str(booking.get("phone", "")),
        ]
    )


def list_command(args, store: BookingStore) -> int:
    bookings = store.list_bookings(status=args.status, date=args.date)
    if args.json:
        print(json.dumps(bookings, indent=2, ensure_ascii=False))
        return 0
    if not bookings:
        print("No bookings")
        return 0
    for booking in bookings:
        print(format_row(booking))
    return 0


def delete_command(args, store: BookingStore) -> int:
    if not store.delete_booking(args.booking_id):
        print(f"Booking not found: {args.booking_id}", file=sys.stderr)
        return 1
    print(f"Deleted {args.booking_id}")
    return 0


def clear_command(args, store: BookingStore) -> int:
    if not args.yes:
        print("Refusing to delete every booking without --yes", file=sys.stderr)
        return 1
    print(f"Deleted {store.clear()} bookings")
    return 0


def serve_command(args, store: Optional[BookingStore]) -> int:
    from inkbook.main import run

    run(host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="inkbook", description="Tattoo studio booking API")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(handler=serve_command, needs_store=False)

    list_parser = commands.add_parser("list", help="Print stored bookings")
    list_parser.add_argument("--status", choices=BOOKING_STATUSES)
    list_parser.add_argument("--date", help="Only bookings on this date (YYYY-MM-DD)")
    list_parser.add_argument("--json", action="store_true", help="Print raw JSON")
    list_parser.set_defaults(handler=list_command)

    delete = commands.add_parser("delete", help="Delete one booking")
    delete.add_argument("booking_id")
    delete.set_defaults(handler=delete_command)

    clear = commands.add_parser("clear", help="Delete every booking")
    clear.add_argument("--yes", action="store_true", help="Confirm deleting everything")
    clear.set_defaults(handler=clear_command)

    return parser


def main(argv: Optional[List[str]] = None, store: Optional[BookingStore] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    if getattr(args, "needs_store", True) and store is None:
        store = get_store()
    return args.handler(args, store)


if __name__ == "__main__":
    sys.exit(main())
