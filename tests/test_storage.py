"""
Unit tests for the JSON booking store.

Storage contract:
- Missing/invalid file -> no bookings
- Booking ids are assigned sequentially
- JSON schema: {"bookings": [ ... ]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from commubot.extract import extract
from commubot.storage import BookingStore, JsonBookingStore


class TestStorage(unittest.TestCase):
    def test_is_a_booking_store(self) -> None:
        self.assertIsInstance(JsonBookingStore("unused.json"), BookingStore)

    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            store = JsonBookingStore(Path(d) / "missing.json")
            self.assertEqual(store.list_bookings(), [])
            self.assertIsNone(store.get(1))

    def test_corrupt_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bookings.json"
            p.write_text("not json", encoding="utf-8")
            self.assertEqual(JsonBookingStore(p).list_bookings(), [])

    def test_add_and_reload(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "bookings.json"
            store = JsonBookingStore(p)

            first = store.add("U123", 11, extract("5 people, environmental cleanup, next Friday"))
            second = store.add(" U456 ", 2, extract("food bank"))

            self.assertEqual((first.booking_id, second.booking_id), (1, 2))
            self.assertEqual(second.user_id, "U456")

            reloaded = JsonBookingStore(p)
            self.assertEqual(reloaded.list_bookings(), [first, second])
            self.assertEqual(reloaded.get(1), first)

            b = reloaded.list_bookings("U123")[0]
            self.assertEqual((b.opportunity_id, b.group_size, b.timing), (11, 5, "next friday"))
            self.assertEqual(b.status, "booked")

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertIn("bookings", data)
            self.assertEqual(len(data["bookings"]), 2)

    def test_broken_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "bookings.json"
            p.write_text(
                json.dumps({"bookings": [{"booking_id": 4, "user_id": "U1", "opportunity_id": 3}, {"user_id": "x"}, 5]}),
                encoding="utf-8",
            )
            store = JsonBookingStore(p)
            self.assertEqual([b.booking_id for b in store.list_bookings()], [4])
            # numbering continues after the highest id
            self.assertEqual(store.add("U1", 1, extract("")).booking_id, 5)


if __name__ == "__main__":
    unittest.main()
