"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    commubot parse "<request>"
    commubot match "5 people, environmental cleanup, next Friday"
    commubot show <opportunity_id>
    commubot book <opportunity_id> --text "<request>"
    commubot bookings
    commubot export <opportunity_id> <file.ics>
    commubot fetch-catalog <url>
    commubot interactive

Note:
- The interactive UI lives in commubot/interactive.py
- This CLI is intentionally simple and prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Sequence

import requests

from commubot.catalog import Catalog, CatalogError, fetch_catalog, get_opportunity, load_catalog
from commubot.export_ics import export_opportunities_to_ics
from commubot.extract import extract
from commubot.match import match
from commubot.model import Opportunity, VolunteerIntent
from commubot.storage import JsonBookingStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_intent(intent: VolunteerIntent) -> str:
    return (
        f"Team size: {intent.group_size} "
        f"{'person' if intent.group_size == 1 else 'people'}\n"
        f"Activity:  {intent.activity_category}\n"
        f"When:      {intent.timing}"
    )


def format_opportunity_line(opp: Opportunity) -> str:
    """
    One-line summary: id, title, organization, place, slot, capacity.
    """
    return (
        f"[{opp.id}] {opp.title} - {opp.organization_name} | "
        f"{opp.location} | {opp.time_slot} | max {opp.max_participants}"
    )


def format_opportunity_details(opp: Opportunity) -> str:
    return "\n".join(
        [
            f"{opp.title} (#{opp.id})",
            f"Organization: {opp.organization_name}",
            f"Activity:     {opp.activity_category.capitalize()}",
            f"Location:     {opp.location}",
            f"Date & time:  {opp.available_date or 'TBD'} ({opp.time_slot})",
            f"Capacity:     up to {opp.max_participants} volunteers",
            f"Contact:      {opp.contact_email}",
            "",
            opp.description,
        ]
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Print the intent extracted from a request text.
    """
    intent = extract(args.text)
    if args.json:
        print(json.dumps(intent.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_intent(intent))
    return 0


def _cmd_match(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Extract intent and list matching opportunities.
    """
    text = (args.text or "").strip()
    if not text:
        print("Please describe what you would like to do, e.g. '5 people, beach cleanup, Saturday'.")
        return 1

    intent = extract(text)
    logger.debug("Parsed request: %s", intent)
    matches = match(intent, catalog)

    if args.json:
        payload: dict[str, Any] = {
            "intent": intent.to_dict(),
            "matches": [opp.to_dict() for opp in matches],
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    print(format_intent(intent))
    print()
    if not matches:
        print("No opportunities can fit a group of this size.")
        return 0

    print(f"Found {len(matches)} matching opportunities:")
    for opp in matches:
        print(f"- {format_opportunity_line(opp)}")
    return 0


def _cmd_show(args: argparse.Namespace, catalog: Catalog) -> int:
    opp = get_opportunity(catalog, args.opportunity_id)
    if opp is None:
        print(f"Unknown opportunity: {args.opportunity_id}")
        return 1

    print(format_opportunity_details(opp))
    return 0


def _cmd_book(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Record a booking for an opportunity in the booking store.
    """
    opp = get_opportunity(catalog, args.opportunity_id)
    if opp is None:
        print(f"Sorry, opportunity {args.opportunity_id} is not available.")
        return 1

    intent = extract(args.text)
    if intent.group_size > opp.max_participants:
        print(f"{opp.title} takes at most {opp.max_participants} volunteers (requested {intent.group_size}).")
        return 1

    store = JsonBookingStore(args.store)
    booking = store.add(args.user, opp.id, intent)

    print(f"Booked: {opp.title} (booking #{booking.booking_id})")
    print(f"Date & time: {opp.available_date or 'TBD'} ({opp.time_slot}) @ {opp.location}")
    print(f"The organization will contact you via {opp.contact_email}.")
    return 0


def _cmd_bookings(args: argparse.Namespace, catalog: Catalog) -> int:
    store = JsonBookingStore(args.store)
    bookings = store.list_bookings(args.user)
    if not bookings:
        print("No bookings yet.")
        return 0

    for b in bookings:
        opp = get_opportunity(catalog, b.opportunity_id)
        title = opp.title if opp else "(no longer in catalog)"
        print(f"#{b.booking_id} {b.created_at} | {b.user_id} | [{b.opportunity_id}] {title} | {b.group_size} people | {b.status}")
    return 0


def _cmd_export(args: argparse.Namespace, catalog: Catalog) -> int:
    """
    Export one opportunity into an iCalendar (.ics) file.
    """
    opp = get_opportunity(catalog, args.opportunity_id)
    if opp is None:
        print(f"Unknown opportunity: {args.opportunity_id}")
        return 1

    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    n = export_opportunities_to_ics([opp], out_path)
    if n == 0:
        print(f"Could not read a date and time from '{opp.time_slot}'.")
        return 1

    print(f"Exported {opp.title} to: {out_path}")
    return 0


def _cmd_fetch_catalog(args: argparse.Namespace) -> int:
    try:
        n = fetch_catalog(args.url, args.out)
    except requests.RequestException as exc:
        print(f"Download failed: {exc}")
        return 1
    except CatalogError as exc:
        print(f"Invalid catalog: {exc}")
        return 1

    print(f"Saved {n} opportunities.")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="commubot", description="CommuBot volunteer matcher")
    parser.add_argument("--catalog", type=str, default=None, help="Catalog JSON file (default: packaged seed)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Show the intent extracted from a request")
    p_parse.add_argument("text", type=str, help="Request text")
    p_parse.add_argument("--json", action="store_true", help="Print JSON")

    p_match = sub.add_parser("match", help="Find opportunities for a request")
    p_match.add_argument("text", type=str, help="Request text (e.g. '5 people, beach cleanup, Saturday')")
    p_match.add_argument("--json", action="store_true", help="Print JSON")

    p_show = sub.add_parser("show", help="Show one opportunity")
    p_show.add_argument("opportunity_id", type=int, help="Opportunity id")

    p_book = sub.add_parser("book", help="Book an opportunity")
    p_book.add_argument("opportunity_id", type=int, help="Opportunity id")
    p_book.add_argument("--text", type=str, default="", help="Original request text")
    p_book.add_argument("--user", type=str, default="local", help="User id")
    p_book.add_argument("--store", type=str, default=None, help="Bookings JSON file")

    p_bookings = sub.add_parser("bookings", help="List bookings")
    p_bookings.add_argument("--user", type=str, default=None, help="Only this user")
    p_bookings.add_argument("--store", type=str, default=None, help="Bookings JSON file")

    p_export = sub.add_parser("export", help="Export an opportunity to .ics")
    p_export.add_argument("opportunity_id", type=int, help="Opportunity id")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    p_fetch = sub.add_parser("fetch-catalog", help="Download a catalog JSON")
    p_fetch.add_argument("url", type=str, help="Catalog URL")
    p_fetch.add_argument("--out", type=str, default=None, help="Where to save (default: packaged catalog)")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "parse":
        raise SystemExit(_cmd_parse(args))
    if args.command == "fetch-catalog":
        raise SystemExit(_cmd_fetch_catalog(args))

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as exc:
        print(f"Cannot load catalog: {exc}")
        raise SystemExit(1)

    if args.command == "match":
        raise SystemExit(_cmd_match(args, catalog))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, catalog))
    if args.command == "book":
        raise SystemExit(_cmd_book(args, catalog))
    if args.command == "bookings":
        raise SystemExit(_cmd_bookings(args, catalog))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, catalog))

    if args.command == "interactive":
        from commubot.interactive import run_interactive

        run_interactive(catalog, store=JsonBookingStore())
        raise SystemExit(0)

    raise SystemExit(2)
