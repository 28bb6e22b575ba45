"""
Configuration constants shared across the project.

Paths point into the package so the tool works without any setup;
every function that touches a file also accepts an explicit path.
"""

from __future__ import annotations

from pathlib import Path


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

# Seed catalog shipped with the package (15 opportunities)
CATALOG_PATH = DATA_DIR / "catalog.json"

# User state (bookings), kept apart from the catalog
BOOKINGS_PATH = DATA_DIR / "bookings.json"


# ---------------------------------------------------------------------------
# Matching limits
# ---------------------------------------------------------------------------

MAX_MATCHES = 5
MAX_FALLBACK_MATCHES = 3


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

FETCH_TIMEOUT_S = 30
