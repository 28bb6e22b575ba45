import tempfile
import unittest
from pathlib import Path

from commubot.catalog import get_opportunity, load_catalog
from commubot.export_ics import export_opportunities_to_ics, parse_time_slot
from commubot.model import Opportunity


class TestParseTimeSlot(unittest.TestCase):
    def test_seed_catalog_formats(self) -> None:
        self.assertEqual(parse_time_slot("Saturday 9am-12pm"), ("09:00", "12:00"))
        self.assertEqual(parse_time_slot("Saturday 2-5pm"), ("14:00", "17:00"))
        self.assertEqual(parse_time_slot("Sunday 12-6pm"), ("12:00", "18:00"))
        self.assertEqual(parse_time_slot("Saturday 8am-1pm"), ("08:00", "13:00"))
        self.assertEqual(parse_time_slot("Monday 6-9pm"), ("18:00", "21:00"))

    def test_start_without_suffix_before_noon(self) -> None:
        self.assertEqual(parse_time_slot("Thursday 10-2pm"), ("10:00", "14:00"))

    def test_minutes(self) -> None:
        self.assertEqual(parse_time_slot("Friday 10:30am - 1:15pm"), ("10:30", "13:15"))

    def test_unparseable(self) -> None:
        self.assertIsNone(parse_time_slot("Saturday morning"))
        self.assertIsNone(parse_time_slot(""))
        self.assertIsNone(parse_time_slot("Monday 25-30pm"))


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        opp = get_opportunity(load_catalog(), 1)
        assert opp is not None

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_opportunities_to_ics([opp], out)
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertIn("BEGIN:VEVENT", text)
            self.assertIn("DTSTART:20240115T090000", text)
            self.assertIn("DTEND:20240115T120000", text)
            self.assertIn("SUMMARY:Beach Cleanup (Ocean Conservation Society)", text)
            self.assertIn("volunteer@oceanconservation.org", text)

    def test_skips_opportunities_without_times(self) -> None:
        opp = Opportunity(
            id=99,
            title="Whenever",
            organization_name="Org",
            activity_category="general volunteering",
            location="",
            available_date="2024-02-01",
            time_slot="Flexible",
            max_participants=5,
            contact_email="",
            description="",
        )
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            self.assertEqual(export_opportunities_to_ics([opp], out), 0)
            self.assertNotIn("BEGIN:VEVENT", out.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
