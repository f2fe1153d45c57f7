"""Size label formatting used by the header's file-info line."""

from __future__ import annotations

import unittest

from ftree.sizes import format_size


class FormatSizeTests(unittest.TestCase):
    def test_bytes_have_no_decimals(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(100), "100 B")
        self.assertEqual(format_size(1023), "1023 B")

    def test_first_division_has_no_decimals(self) -> None:
        self.assertEqual(format_size(1024), "1 KiB")
        self.assertEqual(format_size(10 * 1024), "10 KiB")

    def test_second_division_onward_keeps_two_decimals(self) -> None:
        self.assertEqual(format_size(1024 * 1024 * 1.5), "1.50 MiB")
        self.assertEqual(format_size(1024**3), "1.00 GiB")
        self.assertEqual(format_size(5 * 1024**4), "5.00 TiB")

    def test_last_unit_absorbs_overflow(self) -> None:
        self.assertEqual(format_size(2048 * 1024**6), "2048.00 EiB")

    def test_custom_base(self) -> None:
        self.assertEqual(format_size(1000, base=1000), "1 KiB")
        self.assertEqual(format_size(2_500_000, base=1000), "2.50 MiB")


if __name__ == "__main__":
    unittest.main()
