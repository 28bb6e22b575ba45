from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from commubot.catalog import Catalog, get_opportunity
from commubot.cli import format_intent, format_opportunity_details
from commubot.export_ics import export_opportunities_to_ics
from commubot.extract import extract
from commubot.match import match
from commubot.model import Opportunity, VolunteerIntent
from commubot.storage import BookingStore


def _matches_table(matches: list[Opportunity]) -> Table:
    table = Table(title=f"Found {len(matches)} matching opportunities", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Opportunity")
    table.add_column("Organization", style="magenta")
    table.add_column("When", style="green")
    table.add_column("Max", justify="right", style="yellow")
    for i, opp in enumerate(matches, start=1):
        table.add_row(str(i), f"[bold cyan]{opp.title}[/]", opp.organization_name, opp.time_slot, str(opp.max_participants))
    return table


def run_interactive(catalog: Catalog, store: BookingStore, console: Optional[Console] = None) -> None:
    """
    Interactive menu loop: describe a request, pick a match, book it.
    """
    console = console or Console()

    while True:
        console.print("\n=== CommuBot (interactive) ===")
        console.print(f"Opportunities in catalog: {len(catalog)} | Bookings: {len(store.list_bookings())}")

        choice = console.input(
            "\n[1] Find opportunities\n"
            "[2] View bookings\n"
            "[3] Export a booking to .ics\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            console.print("Bye.")
            return

        if choice == "1":
            _flow_find_and_book(console, catalog, store)
        elif choice == "2":
            _flow_view_bookings(console, catalog, store)
        elif choice == "3":
            _flow_export(console, catalog, store)
        else:
            console.print("Invalid choice.")


def _flow_find_and_book(console: Console, catalog: Catalog, store: BookingStore) -> None:
    text = console.input("Describe your request (e.g. '5 people, beach cleanup, Saturday') [blank = back]: ").strip()
    if not text:
        return

    intent = extract(text)
    matches = match(intent, catalog)

    console.print(format_intent(intent))
    if not matches:
        console.print("[red]No opportunities can fit a group of this size.[/]")
        return

    console.print(_matches_table(matches))

    pick = console.input("Enter number to book [blank = back]: ").strip()
    if not pick:
        return
    if not pick.isdigit() or not (1 <= int(pick) <= len(matches)):
        console.print("Out of range.")
        return

    _book(console, store, matches[int(pick) - 1], intent)


def _book(console: Console, store: BookingStore, opp: Opportunity, intent: VolunteerIntent) -> None:
    booking = store.add("local", opp.id, intent)
    console.print(f"\n[bold green]Opportunity booked successfully![/] (booking #{booking.booking_id})")
    console.print(format_opportunity_details(opp))


def _flow_view_bookings(console: Console, catalog: Catalog, store: BookingStore) -> None:
    bookings = store.list_bookings()
    if not bookings:
        console.print("No bookings yet.")
        return

    table = Table(title="Bookings", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Opportunity")
    table.add_column("When", style="green")
    table.add_column("People", justify="right")
    table.add_column("Status")
    for b in bookings:
        opp = get_opportunity(catalog, b.opportunity_id)
        title = opp.title if opp else "(no longer in catalog)"
        when = opp.time_slot if opp else ""
        table.add_row(str(b.booking_id), title, when, str(b.group_size), b.status)
    console.print(table)


def _flow_export(console: Console, catalog: Catalog, store: BookingStore) -> None:
    raw = console.input("Booking number to export [blank = back]: ").strip()
    if not raw:
        return
    if not raw.isdigit():
        console.print("Not a number.")
        return

    booking = store.get(int(raw))
    if booking is None:
        console.print("Unknown booking.")
        return

    opp = get_opportunity(catalog, booking.opportunity_id)
    if opp is None:
        console.print("This opportunity is no longer available.")
        return

    out = console.input("Output file [commubot.ics]: ").strip() or "commubot.ics"
    n = export_opportunities_to_ics([opp], Path(out))
    if n:
        console.print(f"Exported to: {out}")
    else:
        console.print(f"Could not read a date and time from '{opp.time_slot}'.")
