"""
Persistent storage for bookings.

This module manages the file:

    data/bookings.json

Design rationale:
- catalog.json holds the static list of opportunities
- bookings.json stores only what users booked, keyed by opportunity id

The matching engine never touches this state. Callers talk to the
BookingStore interface so the JSON file can be swapped for another
key-value store without changing the CLI.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from commubot.config import BOOKINGS_PATH
from commubot.model import Booking, VolunteerIntent

BOOKED = "booked"


class BookingStore(ABC):
    """
    Key-value store for bookings (booking_id -> Booking).
    """

    @abstractmethod
    def add(self, user_id: str, opportunity_id: int, intent: VolunteerIntent, status: str = BOOKED) -> Booking:
        """Record a booking and return it with its assigned id."""

    @abstractmethod
    def get(self, booking_id: int) -> Optional[Booking]:
        """Return one booking or None."""

    @abstractmethod
    def list_bookings(self, user_id: Optional[str] = None) -> list[Booking]:
        """Return bookings (optionally for one user), oldest first."""


def _booking_from_dict(data: dict[str, Any]) -> Optional[Booking]:
    try:
        return Booking(
            booking_id=int(data["booking_id"]),
            user_id=str(data["user_id"]),
            opportunity_id=int(data["opportunity_id"]),
            group_size=int(data.get("group_size", 1)),
            activity_category=str(data.get("activity_category", "")),
            timing=str(data.get("timing", "")),
            status=str(data.get("status", BOOKED)),
            created_at=str(data.get("created_at", "")),
        )
    except (KeyError, TypeError, ValueError):
        return None


class JsonBookingStore(BookingStore):
    """
    BookingStore backed by a single JSON file:

        {"bookings": [ {...}, ... ]}
    """

    def __init__(self, path: str | Path | None = None) -> None:
        # Custom path mainly for tests, otherwise the package location
        self.path = Path(path) if path is not None else BOOKINGS_PATH

    def _load(self) -> list[Booking]:
        """
        Returns an empty list if the file does not exist or is invalid.
        Broken entries are skipped.
        """
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            raw = data.get("bookings", [])
        except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
            return []

        if not isinstance(raw, list):
            return []

        out: list[Booking] = []
        for item in raw:
            if isinstance(item, dict):
                b = _booking_from_dict(item)
                if b is not None:
                    out.append(b)
        return out

    def _save(self, bookings: list[Booking]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"bookings": [b.to_dict() for b in bookings]}
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    def add(self, user_id: str, opportunity_id: int, intent: VolunteerIntent, status: str = BOOKED) -> Booking:
        bookings = self._load()
        next_id = max((b.booking_id for b in bookings), default=0) + 1

        booking = Booking(
            booking_id=next_id,
            user_id=user_id.strip(),
            opportunity_id=int(opportunity_id),
            group_size=intent.group_size,
            activity_category=intent.activity_category,
            timing=intent.timing,
            status=status,
            created_at=datetime.now().isoformat(timespec="seconds"),
        )
        bookings.append(booking)
        self._save(bookings)
        return booking

    def get(self, booking_id: int) -> Optional[Booking]:
        for b in self._load():
            if b.booking_id == booking_id:
                return b
        return None

    def list_bookings(self, user_id: Optional[str] = None) -> list[Booking]:
        bookings = self._load()
        if user_id is None:
            return bookings
        uid = user_id.strip()
        return [b for b in bookings if b.user_id == uid]
