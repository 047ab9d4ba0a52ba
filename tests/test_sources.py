"""
Tests for reading the listing / price files and the all-or-nothing load.
"""

import tempfile
import unittest
from pathlib import Path

from coursecart.sources import LoadError, load_catalog, read_rows
from tests.data_files import LISTING_COLUMNS, PRICE_COLUMNS, write_csv, write_xlsx
from tests.fixtures import LISTING_ROWS, PRICE_ROWS


class TestReadRows(unittest.TestCase):
    def test_csv_empty_cells_become_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = write_csv(Path(d) / "listing.csv", LISTING_COLUMNS, LISTING_ROWS)
            rows = read_rows(p)
            self.assertEqual(len(rows), len(LISTING_ROWS))
            self.assertEqual(rows[0]["Course_ID"], "ACCT 1010")
            self.assertEqual(rows[0]["CU"], "0.5")
            self.assertIsNone(rows[0]["Instructor_last"])

    def test_xlsx_first_row_is_header(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = write_xlsx(Path(d) / "Prices.xlsx", PRICE_COLUMNS, [{"Course_ID": "ACCT1010", "Average_Price": 1500}])
            rows = read_rows(p)
            self.assertEqual(rows, [{"Course_ID": "ACCT1010", "Average_Price": 1500}])

    def test_missing_file_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(LoadError):
                read_rows(Path(d) / "missing.csv")

    def test_broken_workbook_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "Prices.xlsx"
            p.write_text("not a workbook", encoding="utf-8")
            with self.assertRaises(LoadError):
                read_rows(p)


class TestLoadCatalog(unittest.TestCase):
    def test_csv_listing_with_xlsx_prices(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            listing = write_csv(Path(d) / "listing.csv", LISTING_COLUMNS, LISTING_ROWS)
            prices = write_xlsx(Path(d) / "Prices.xlsx", PRICE_COLUMNS, PRICE_ROWS)
            courses = load_catalog(listing, prices)

        self.assertEqual([c.code for c in courses], ["ACCT-1010", "FNCE-6110"])
        acct = courses[0]
        self.assertEqual(acct.average_price, 1234.5)
        self.assertEqual(acct.credits, "0.5")
        self.assertEqual(len(acct.sections[0].instructors), 2)

    def test_empty_source_gives_empty_catalog(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            listing = write_csv(Path(d) / "listing.csv", LISTING_COLUMNS, LISTING_ROWS)
            prices = write_csv(Path(d) / "prices.csv", PRICE_COLUMNS, [])
            self.assertEqual(load_catalog(listing, prices), [])

    def test_missing_source_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            listing = write_csv(Path(d) / "listing.csv", LISTING_COLUMNS, LISTING_ROWS)
            with self.assertRaises(LoadError):
                load_catalog(listing, Path(d) / "Prices.xlsx")


if __name__ == "__main__":
    unittest.main()
