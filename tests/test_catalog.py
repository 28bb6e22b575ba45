"""
Unit tests for catalog loading, validation, lookup and download.

HTTP is mocked, no network access happens here.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from commubot.catalog import CatalogError, build_catalog, fetch_catalog, get_opportunity, load_catalog


def _record(id: int, **overrides) -> dict:
    record = {
        "id": id,
        "title": "Beach Cleanup",
        "ngo_name": "Ocean Conservation Society",
        "activity_type": "environmental cleanup",
        "location": "Santa Monica Beach",
        "date_available": "2024-01-15",
        "time_slot": "Saturday 9am-12pm",
        "max_participants": 25,
        "contact_email": "volunteer@oceanconservation.org",
        "description": "Help clean up plastic waste",
    }
    record.update(overrides)
    return record


class TestLoadCatalog(unittest.TestCase):
    def test_seed_catalog_ids_unique(self) -> None:
        catalog = load_catalog()
        self.assertIsInstance(catalog, tuple)
        ids = [o.id for o in catalog]
        self.assertEqual(ids, list(range(1, 16)))

    def test_load_from_custom_path(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "catalog.json"
            p.write_text(json.dumps([_record(7)]), encoding="utf-8")
            catalog = load_catalog(p)
            self.assertEqual(len(catalog), 1)
            self.assertEqual(catalog[0].organization_name, "Ocean Conservation Society")
            self.assertEqual(catalog[0].activity_category, "environmental cleanup")

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(CatalogError):
                load_catalog(Path(d) / "missing.json")

    def test_broken_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "catalog.json"
            p.write_text("[{", encoding="utf-8")
            with self.assertRaises(CatalogError):
                load_catalog(p)


class TestBuildCatalog(unittest.TestCase):
    def test_rejects_non_list(self) -> None:
        with self.assertRaises(CatalogError):
            build_catalog({"id": 1})

    def test_rejects_duplicate_ids(self) -> None:
        with self.assertRaises(CatalogError):
            build_catalog([_record(1), _record(1)])

    def test_rejects_missing_field(self) -> None:
        record = _record(1)
        del record["time_slot"]
        with self.assertRaisesRegex(CatalogError, "time_slot"):
            build_catalog([record])

    def test_rejects_unknown_category(self) -> None:
        with self.assertRaises(CatalogError):
            build_catalog([_record(1, activity_type="knitting")])

    def test_rejects_non_positive_capacity(self) -> None:
        with self.assertRaises(CatalogError):
            build_catalog([_record(1, max_participants=0)])

    def test_rejects_bad_number(self) -> None:
        with self.assertRaises(CatalogError):
            build_catalog([_record(1, max_participants="many")])

    def test_category_is_normalized(self) -> None:
        catalog = build_catalog([_record(1, activity_type="Food Bank")])
        self.assertEqual(catalog[0].activity_category, "food bank")


class TestGetOpportunity(unittest.TestCase):
    def test_found_and_missing(self) -> None:
        catalog = load_catalog()
        opp = get_opportunity(catalog, 13)
        self.assertIsNotNone(opp)
        assert opp is not None
        self.assertEqual(opp.title, "Pet Adoption Event")
        self.assertIsNone(get_opportunity(catalog, 999))


class TestFetchCatalog(unittest.TestCase):
    def _response(self, payload) -> mock.Mock:
        resp = mock.Mock()
        resp.raise_for_status.return_value = None
        resp.json.return_value = payload
        return resp

    def test_fetch_writes_validated_catalog(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "sub" / "catalog.json"
            with mock.patch("commubot.catalog.requests.get", return_value=self._response([_record(1), _record(2)])) as get:
                n = fetch_catalog("https://example.org/catalog.json", out)

            self.assertEqual(n, 2)
            get.assert_called_once()
            self.assertEqual([o.id for o in load_catalog(out)], [1, 2])

    def test_invalid_payload_keeps_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "catalog.json"
            out.write_text(json.dumps([_record(1)]), encoding="utf-8")
            with mock.patch("commubot.catalog.requests.get", return_value=self._response({"oops": True})):
                with self.assertRaises(CatalogError):
                    fetch_catalog("https://example.org/catalog.json", out)

            self.assertEqual(len(load_catalog(out)), 1)

    def test_http_error_propagates(self) -> None:
        resp = mock.Mock()
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        with tempfile.TemporaryDirectory() as d:
            with mock.patch("commubot.catalog.requests.get", return_value=resp):
                with self.assertRaises(requests.RequestException):
                    fetch_catalog("https://example.org/missing.json", Path(d) / "catalog.json")


if __name__ == "__main__":
    unittest.main()
