"""
Tests for CLI entry points.

These tests run the commands against temporary data files so that the
packaged data and the user's real selection file are never touched.
"""

import logging
import tempfile
import unittest
from pathlib import Path

from coursecart.cli import main
from coursecart.storage import load_selection
from tests.data_files import LISTING_COLUMNS, PRICE_COLUMNS, write_csv, write_xlsx
from tests.fixtures import LISTING_ROWS, PRICE_ROWS, listing_row


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        d = Path(self._tmp.name)
        self.listing = write_csv(d / "listing.csv", LISTING_COLUMNS, LISTING_ROWS)
        self.prices = write_xlsx(d / "Prices.xlsx", PRICE_COLUMNS, PRICE_ROWS)
        self.selection = d / "selected_sessions.json"
        self.dir = d

    def run_cli(self, *args: str) -> int:
        argv = ["--listing", str(self.listing), "--prices", str(self.prices), "--selection", str(self.selection)]
        with self.assertRaises(SystemExit) as ctx:
            main(argv + list(args))
        return ctx.exception.code

    def test_search_and_options(self) -> None:
        self.assertEqual(self.run_cli("search"), 0)
        self.assertEqual(self.run_cli("search", "acct", "--term", "Q2", "--sort", "title", "--desc"), 0)
        self.assertEqual(self.run_cli("options"), 0)

    def test_sections_unknown_course(self) -> None:
        self.assertEqual(self.run_cli("sections", "acct 1010"), 0)
        self.assertNotEqual(self.run_cli("sections", "ZZZZ-9999"), 0)

    def test_add_and_remove_roundtrip(self) -> None:
        self.assertEqual(self.run_cli("add", "ACCT1010001"), 0)
        self.assertEqual(load_selection(self.selection), {"ACCT1010001": True})

        self.assertEqual(self.run_cli("selected"), 0)
        self.assertEqual(self.run_cli("calendar", "--scope", "Q1"), 0)

        self.assertEqual(self.run_cli("remove", "ACCT1010001"), 0)
        self.assertEqual(load_selection(self.selection), {})

    def test_export(self) -> None:
        self.run_cli("add", "ACCT1010002")
        out = self.dir / "schedule.ics"
        self.assertEqual(self.run_cli("export", str(out), "--week-of", "2026-02-18"), 0)
        text = out.read_text(encoding="utf-8")
        self.assertEqual(text.count("BEGIN:VEVENT"), 2)
        self.assertIn("DTSTART:20260217T134500", text)

    def test_export_bad_date(self) -> None:
        self.run_cli("add", "ACCT1010002")
        self.assertNotEqual(self.run_cli("export", str(self.dir / "x.ics"), "--week-of", "18.02.2026"), 0)

    def test_missing_data_files_fail(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            main(["--listing", str(self.dir / "nope.csv"), "--prices", str(self.prices), "selected"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_unknown_log_level_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            main(["--log-level", "loud", "--listing", str(self.listing), "--prices", str(self.prices), "options"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_log_level_is_case_insensitive(self) -> None:
        root = logging.getLogger()
        self.addCleanup(root.setLevel, root.level)
        self.addCleanup(setattr, root, "handlers", list(root.handlers))
        self.assertEqual(self.run_cli("--log-level", "error", "options"), 0)
        self.assertEqual(root.level, logging.ERROR)

    def test_bracketed_values_print_literally(self) -> None:
        rows = LISTING_ROWS + [
            listing_row("MKTG 6110", "MKTG[/]001", title="Brand [/]", time="[bold]TBA", term="Q[1]"),
        ]
        write_csv(self.listing, LISTING_COLUMNS, rows)

        self.assertEqual(self.run_cli("add", "MKTG[/]001"), 0)
        self.assertEqual(self.run_cli("add", "MKTG[/]001"), 0)
        self.assertEqual(self.run_cli("add", "[red]nowhere"), 0)
        self.assertEqual(self.run_cli("search", "mktg"), 0)
        self.assertEqual(self.run_cli("options"), 0)
        self.assertEqual(self.run_cli("sections", "MKTG 6110"), 0)
        self.assertEqual(self.run_cli("selected"), 0)
        self.assertEqual(self.run_cli("remove", "MKTG[/]001"), 0)
        self.assertEqual(self.run_cli("remove", "MKTG[/]001"), 0)
        self.assertNotIn("MKTG[/]001", load_selection(self.selection))


if __name__ == "__main__":
    unittest.main()
