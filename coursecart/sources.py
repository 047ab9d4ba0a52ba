"""
Row sources (files -> list of row dicts).

- the course listing is a CSV export (one row per section x instructor)
- the price list is an Excel workbook with Course_ID / Average_Price columns

Both readers accept either format based on the file suffix. Only the first
sheet of a workbook is read and its first row is the header.
"""

from __future__ import annotations

import csv
import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from coursecart.catalog import build_catalog, build_price_map
from coursecart.model import Course

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class LoadError(RuntimeError):
    """
    A data file is missing or cannot be decoded.
    """


def _read_csv(path: Path) -> List[Row]:
    with path.open(newline="", encoding="utf-8-sig") as fh:
        reader = csv.DictReader(fh)
        return [
            {key: (value if value != "" else None) for key, value in row.items() if key}
            for row in reader
        ]


def _read_xlsx(path: Path) -> List[Row]:
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if not header:
            return []
        keys = [str(h).strip() if h is not None else "" for h in header]

        out: List[Row] = []
        for values in rows:
            if values is None or all(v is None or v == "" for v in values):
                continue
            out.append({k: v for k, v in zip(keys, values) if k})
        return out
    finally:
        wb.close()


def read_rows(path: str | Path) -> List[Row]:
    """
    Read a CSV or XLSX file into row dicts. Empty cells become None.

    Raises LoadError if the file is missing or unreadable.
    """
    p = Path(path)
    if not p.exists():
        raise LoadError(f"Data file not found: {p}")

    try:
        if p.suffix.lower() in (".xlsx", ".xlsm"):
            return _read_xlsx(p)
        return _read_csv(p)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise LoadError(f"Could not read {p}: {exc}") from exc
    except (InvalidFileException, zipfile.BadZipFile, KeyError, IndexError) as exc:
        raise LoadError(f"Could not read workbook {p}: {exc}") from exc


def read_listing_rows(path: str | Path) -> List[Row]:
    return read_rows(path)


def read_price_rows(path: str | Path) -> List[Row]:
    return read_rows(path)


def load_catalog(listing_path: str | Path, prices_path: str | Path) -> List[Course]:
    """
    Read both sources and build the catalog.

    Both files must load before anything is built; if either yields no rows
    the catalog is empty. Raises LoadError, never returns a partial catalog.
    """
    listing_rows = read_listing_rows(listing_path)
    price_rows = read_price_rows(prices_path)
    logger.info("Read %d listing rows and %d price rows", len(listing_rows), len(price_rows))

    if not listing_rows or not price_rows:
        logger.warning("Skipping catalog build: a data source is empty")
        return []

    courses = build_catalog(listing_rows, build_price_map(price_rows))
    logger.info("Built catalog with %d courses", len(courses))
    return courses
