import unittest

from guard_board.utils.date_helper import (
    is_date_key,
    leading_blank_cells,
    month_bounds,
    next_month,
    prev_month,
)


class MonthBoundsTests(unittest.TestCase):
    def test_leap_february(self) -> None:
        bounds = month_bounds(2024, 2)
        self.assertEqual(len(bounds.days), 29)
        self.assertEqual(bounds.days[0], "2024-02-01")
        self.assertEqual(bounds.days[-1], "2024-02-29")
        # 2024-02-01 is a Thursday
        self.assertEqual(bounds.first_weekday_index, 4)

    def test_non_leap_february(self) -> None:
        bounds = month_bounds(2023, 2)
        self.assertEqual(len(bounds.days), 28)

    def test_sunday_start_is_zero(self) -> None:
        # 2024-09-01 is a Sunday
        self.assertEqual(month_bounds(2024, 9).first_weekday_index, 0)
        self.assertEqual(leading_blank_cells(2024, 9), 0)
        # 2024-06-01 is a Saturday
        self.assertEqual(leading_blank_cells(2024, 6), 6)

    def test_out_of_range_month_is_normalized(self) -> None:
        self.assertEqual(month_bounds(2024, 13).days[0], "2025-01-01")
        self.assertEqual(month_bounds(2024, 0).days[-1], "2023-12-31")

    def test_days_are_sorted_lexically(self) -> None:
        days = month_bounds(2024, 10).days
        self.assertEqual(days, sorted(days))


class MonthNavigationTests(unittest.TestCase):
    def test_next_wraps_year(self) -> None:
        self.assertEqual(next_month(2024, 12), (2025, 1))
        self.assertEqual(next_month(2024, 1), (2024, 2))

    def test_prev_wraps_year(self) -> None:
        self.assertEqual(prev_month(2025, 1), (2024, 12))
        self.assertEqual(prev_month(2024, 3), (2024, 2))


class DateKeyTests(unittest.TestCase):
    def test_is_date_key(self) -> None:
        self.assertTrue(is_date_key("2024-02-29"))
        self.assertFalse(is_date_key("2023-02-29"))
        self.assertFalse(is_date_key("2024-2-1"))
        self.assertFalse(is_date_key(""))


if __name__ == "__main__":
    unittest.main()
