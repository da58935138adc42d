from __future__ import annotations

import unittest
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from sheet_viewer.normalize import (
    BLANK,
    BOOLEAN,
    DATETIME,
    DURATION,
    NUMBER,
    OTHER,
    TEXT,
    cell_to_text,
    classify_value,
    format_duration,
    format_number,
)


class ClassifyValueTests(unittest.TestCase):
    def test_python_values_map_to_cell_types(self):
        self.assertEqual(classify_value(None), BLANK)
        self.assertEqual(classify_value(float("nan")), BLANK)
        self.assertEqual(classify_value("x"), TEXT)
        self.assertEqual(classify_value(3), NUMBER)
        self.assertEqual(classify_value(3.5), NUMBER)
        self.assertEqual(classify_value(Decimal("1.5")), NUMBER)
        self.assertEqual(classify_value(True), BOOLEAN)
        self.assertEqual(classify_value(datetime(2024, 1, 2, 3, 4)), DATETIME)
        self.assertEqual(classify_value(date(2024, 1, 2)), DATETIME)
        self.assertEqual(classify_value(timedelta(hours=1)), DURATION)
        self.assertEqual(classify_value(time(1, 2, 3)), DURATION)
        self.assertEqual(classify_value(object()), OTHER)

    def test_error_cells_are_other_even_though_value_is_text(self):
        self.assertEqual(classify_value("#DIV/0!", "e"), OTHER)


class FormatNumberTests(unittest.TestCase):
    def test_trailing_zeros_and_point_are_dropped(self):
        self.assertEqual(format_number(1500.0), "1500")
        self.assertEqual(format_number(1500.125), "1500.125")

    def test_rounds_to_eight_fractional_digits(self):
        self.assertEqual(format_number(1500.123456789), "1500.12345679")
        self.assertEqual(format_number(0.1 + 0.2), "0.3")

    def test_integers_and_negative_zero(self):
        self.assertEqual(format_number(42), "42")
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(-0.000000001), "0")
        self.assertEqual(format_number(-2.5), "-2.5")

    def test_no_grouping_separator_for_large_values(self):
        self.assertEqual(format_number(1234567.5), "1234567.5")

    def test_non_finite_values_fall_back_to_str(self):
        self.assertEqual(format_number(float("inf")), "inf")


class FormatDurationTests(unittest.TestCase):
    def test_hours_minutes_seconds(self):
        self.assertEqual(format_duration(timedelta(hours=2, minutes=3, seconds=4)), "02:03:04")

    def test_day_component_only_when_present(self):
        self.assertEqual(format_duration(timedelta(days=1, hours=2, minutes=3, seconds=4)), "1.02:03:04")

    def test_fraction_uses_seven_digits(self):
        self.assertEqual(format_duration(timedelta(seconds=1, microseconds=500000)), "00:00:01.5000000")

    def test_negative_span(self):
        self.assertEqual(format_duration(timedelta(minutes=-90)), "-01:30:00")

    def test_time_of_day_is_span_since_midnight(self):
        self.assertEqual(format_duration(time(8, 30)), "08:30:00")


class CellToTextTests(unittest.TestCase):
    def test_blank_is_empty_string(self):
        self.assertEqual(cell_to_text(None), "")

    def test_text_is_unmodified(self):
        self.assertEqual(cell_to_text("  padded  "), "  padded  ")

    def test_booleans_are_lowercase(self):
        self.assertEqual(cell_to_text(True), "true")
        self.assertEqual(cell_to_text(False), "false")

    def test_datetime_uses_fixed_format(self):
        self.assertEqual(cell_to_text(datetime(2024, 3, 5, 14, 30, 59)), "2024-03-05 14:30")
        self.assertEqual(cell_to_text(date(2024, 3, 5)), "2024-03-05 00:00")

    def test_numbers_and_durations(self):
        self.assertEqual(cell_to_text(1500.0), "1500")
        self.assertEqual(cell_to_text(timedelta(hours=26)), "1.02:00:00")

    def test_unrecognized_falls_back_to_display_string(self):
        self.assertEqual(cell_to_text("#N/A", "e"), "#N/A")

        class Custom:
            def __str__(self):
                return "custom"

        self.assertEqual(cell_to_text(Custom()), "custom")


if __name__ == "__main__":
    unittest.main()
