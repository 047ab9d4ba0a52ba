"""
Default file locations.

Everything lives in coursecart/data/ unless overridden through the
environment (COURSECART_LISTING, COURSECART_PRICES, COURSECART_SELECTION)
or the CLI flags.
"""

from __future__ import annotations

import os
from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

LISTING_FILENAME = "final_combined_course_data.csv"
PRICES_FILENAME = "Prices.xlsx"
SELECTION_FILENAME = "selected_sessions.json"


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name, "").strip()
    return Path(value) if value else default


def listing_path() -> Path:
    return _env_path("COURSECART_LISTING", DATA_DIR / LISTING_FILENAME)


def prices_path() -> Path:
    return _env_path("COURSECART_PRICES", DATA_DIR / PRICES_FILENAME)


def selection_path() -> Path:
    return _env_path("COURSECART_SELECTION", DATA_DIR / SELECTION_FILENAME)


def log_level() -> str:
    return os.getenv("COURSECART_LOG_LEVEL", "WARNING").upper()
