"""
Opportunity catalog (JSON -> immutable tuple of Opportunity).

- Loads the packaged seed catalog (data/catalog.json) or any other file
- Validates every record before anything is matched against it
- Fetches a fresh catalog over HTTP and caches it as JSON

The catalog is loaded once at startup and never modified afterwards.
Opportunity ids are unique and stable, bookings refer to them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import requests

from commubot.config import CATALOG_PATH, FETCH_TIMEOUT_S
from commubot.model import ACTIVITY_CATEGORIES, Opportunity

logger = logging.getLogger(__name__)

Catalog = Tuple[Opportunity, ...]


class CatalogError(ValueError):
    """Raised when a catalog file or payload is unusable."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _parse_record(record: Any, position: int) -> Opportunity:
    """
    Turn one JSON record into an Opportunity or raise CatalogError.
    """
    if not isinstance(record, dict):
        raise CatalogError(f"Record #{position} is not an object")

    try:
        opp = Opportunity.from_dict(record)
    except KeyError as exc:
        raise CatalogError(f"Record #{position} is missing field {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Record #{position} has an invalid number: {exc}") from exc

    if opp.activity_category not in ACTIVITY_CATEGORIES:
        raise CatalogError(f"Record #{position} has unknown activity type {opp.activity_category!r}")
    if opp.max_participants < 1:
        raise CatalogError(f"Record #{position} must allow at least one participant")

    return opp


def build_catalog(records: Any) -> Catalog:
    """
    Validate a list of catalog records and return them as a tuple.
    """
    if not isinstance(records, list):
        raise CatalogError("Catalog must be a JSON list of records")

    out: List[Opportunity] = []
    seen: set[int] = set()
    for i, record in enumerate(records):
        opp = _parse_record(record, i)
        if opp.id in seen:
            raise CatalogError(f"Duplicate opportunity id {opp.id}")
        seen.add(opp.id)
        out.append(opp)

    return tuple(out)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Load and validate a catalog file (default: the packaged seed catalog).
    """
    catalog_path = Path(path) if path is not None else CATALOG_PATH

    try:
        records = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogError(f"Cannot read catalog {catalog_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog {catalog_path} is not valid JSON: {exc}") from exc

    catalog = build_catalog(records)
    logger.debug("Loaded %d opportunities from %s", len(catalog), catalog_path)
    return catalog


def get_opportunity(catalog: Iterable[Opportunity], opportunity_id: int) -> Optional[Opportunity]:
    """
    Find an opportunity by id. Returns None if it is not in the catalog.
    """
    for opp in catalog:
        if opp.id == opportunity_id:
            return opp
    return None


def fetch_catalog(
    url: str,
    out_path: str | Path | None = None,
    timeout: float = FETCH_TIMEOUT_S,
) -> int:
    """
    Download a catalog JSON, validate it and write it to out_path.

    Returns the number of opportunities written.
    HTTP errors propagate as requests.RequestException.
    """
    target = Path(out_path) if out_path is not None else CATALOG_PATH

    logger.info("Fetching catalog from %s", url)
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()

    try:
        records = resp.json()
    except ValueError as exc:
        raise CatalogError(f"Response from {url} is not valid JSON") from exc

    # Validate before overwriting the local copy
    catalog = build_catalog(records)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps([opp.to_dict() for opp in catalog], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info("Wrote %d opportunities to %s", len(catalog), target)
    return len(catalog)
