import unittest

from guard_board.data.store import IdSource, RecordStore
from guard_board.logic.projection import overlapping_holidays, project_day, project_month
from guard_board.models.records import Guard, Holiday


class ProjectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = RecordStore(id_source=IdSource(clock=lambda: 1))
        self.store.merge(
            [Guard(1, "2024-05-03", "Kim"), Guard(2, "2024-05-10", "Lee")],
            [Holiday(1, "2024-05-01", "2024-05-05", "Spring")],
        )

    def test_holiday_overrides_guard(self) -> None:
        cell = project_day(self.store, "2024-05-03")
        self.assertEqual(cell.kind, "holiday")
        self.assertEqual(cell.guard_name, "Kim")
        self.assertEqual(cell.holiday_name, "Spring")

    def test_guard_only(self) -> None:
        cell = project_day(self.store, "2024-05-10")
        self.assertEqual(cell.kind, "shift")
        self.assertIsNone(cell.holiday)

    def test_range_is_inclusive(self) -> None:
        self.assertEqual(project_day(self.store, "2024-05-01").kind, "holiday")
        self.assertEqual(project_day(self.store, "2024-05-05").kind, "holiday")
        self.assertEqual(project_day(self.store, "2024-05-06").kind, "")

    def test_first_matching_holiday_wins(self) -> None:
        self.store.merge([], [Holiday(2, "2024-05-04", "2024-05-08", "Later")])
        self.assertEqual(project_day(self.store, "2024-05-04").holiday_name, "Spring")
        self.assertEqual(overlapping_holidays(self.store), [(1, 2)])

    def test_project_month(self) -> None:
        view = project_month(self.store, 2024, 5)
        self.assertEqual((view.year, view.month), (2024, 5))
        self.assertEqual(view.first_weekday_index, 3)  # 2024-05-01 is a Wednesday
        self.assertEqual(len(view.cells), 31)
        kinds = [c.kind for c in view.cells]
        self.assertEqual(kinds[:6], ["holiday"] * 5 + [""])
        self.assertEqual(view.cells[9].kind, "shift")
        self.assertEqual(view.cells[9].day, 10)


if __name__ == "__main__":
    unittest.main()
