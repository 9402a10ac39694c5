import unittest

from guard_board.data.data_manager import MemoryBlobStore, Persistence
from guard_board.data.store import IdSource, RecordStore
from guard_board.exceptions import ValidationError
from guard_board.models.records import Guard, Holiday


def make_store(blobs: MemoryBlobStore | None = None) -> RecordStore:
    return RecordStore(Persistence(blobs or MemoryBlobStore()), IdSource(clock=lambda: 1000))


class IdSourceTests(unittest.TestCase):
    def test_rapid_calls_are_unique(self) -> None:
        source = IdSource(clock=lambda: 5)
        ids = [source.next() for _ in range(5)]
        self.assertEqual(ids, [5, 6, 7, 8, 9])

    def test_skips_live_ids(self) -> None:
        source = IdSource(clock=lambda: 10)
        self.assertEqual(source.next(taken=[10, 11]), 12)


class GuardTests(unittest.TestCase):
    def test_add_guard_appends_and_persists(self) -> None:
        blobs = MemoryBlobStore()
        store = make_store(blobs)
        guard = store.add_guard("Kim", "2024-05-01")
        self.assertEqual(store.guards, [guard])
        self.assertIn('"name": "Kim"', blobs.get("shifts"))

    def test_add_guard_requires_fields(self) -> None:
        store = make_store()
        with self.assertRaises(ValidationError):
            store.add_guard("", "2024-05-01")
        with self.assertRaises(ValidationError):
            store.add_guard("Kim", "   ")
        self.assertEqual(store.guards, [])

    def test_delete_missing_is_noop(self) -> None:
        store = make_store()
        store.add_guard("Kim", "2024-05-01")
        self.assertFalse(store.delete_guard(42))
        self.assertEqual(len(store.guards), 1)

    def test_pop_for_edit_then_readd_gets_new_id(self) -> None:
        store = make_store()
        original = store.add_guard("Kim", "2024-05-01")
        popped = store.pop_guard(original.id)
        self.assertEqual((popped.name, popped.date), ("Kim", "2024-05-01"))
        self.assertEqual(store.guards, [])
        readded = store.add_guard(popped.name, popped.date)
        self.assertNotEqual(readded.id, original.id)

    def test_delete_guard_is_persisted(self) -> None:
        blobs = MemoryBlobStore()
        store = make_store(blobs)
        keep = store.add_guard("Kim", "2024-05-01")
        gone = store.add_guard("Lee", "2024-05-02")
        self.assertTrue(store.delete_guard(gone.id))
        self.assertEqual(Persistence(blobs).load()[0], [keep])

    def test_pop_missing_returns_none(self) -> None:
        store = make_store()
        self.assertIsNone(store.pop_guard(1))


class HolidayTests(unittest.TestCase):
    def test_start_after_end_rejected(self) -> None:
        store = make_store()
        with self.assertRaises(ValidationError):
            store.add_holiday("X", "2024-05-10", "2024-05-01")
        self.assertEqual(store.holidays, [])

    def test_date_order_checked_before_missing_name(self) -> None:
        store = make_store()
        with self.assertRaises(ValidationError) as ctx:
            store.add_holiday("", "2024-05-10", "2024-05-01")
        self.assertIn("종료일", str(ctx.exception))

    def test_missing_field_rejected(self) -> None:
        store = make_store()
        with self.assertRaises(ValidationError):
            store.add_holiday("X", "2024-05-01", "")

    def test_single_day_holiday_allowed(self) -> None:
        store = make_store()
        holiday = store.add_holiday("X", "2024-05-01", "2024-05-01")
        self.assertEqual(store.holidays, [holiday])

    def test_delete_holiday_missing_is_noop(self) -> None:
        blobs = MemoryBlobStore()
        store = make_store(blobs)
        store.add_holiday("X", "2024-05-01", "2024-05-02")
        saved = blobs.get("holidays")
        self.assertFalse(store.delete_holiday(42))
        self.assertEqual(len(store.holidays), 1)
        self.assertEqual(blobs.get("holidays"), saved)

    def test_delete_holiday_is_persisted(self) -> None:
        blobs = MemoryBlobStore()
        store = make_store(blobs)
        keep = store.add_holiday("Keep", "2024-05-01", "2024-05-02")
        gone = store.add_holiday("Gone", "2024-06-01", "2024-06-02")
        self.assertTrue(store.delete_holiday(gone.id))
        self.assertEqual(store.holidays, [keep])
        self.assertEqual(Persistence(blobs).load()[1], [keep])

    def test_pop_missing_holiday_returns_none(self) -> None:
        store = make_store()
        store.add_holiday("X", "2024-05-01", "2024-05-02")
        self.assertIsNone(store.pop_holiday(42))
        self.assertEqual(len(store.holidays), 1)

    def test_guard_and_holiday_ids_are_separate(self) -> None:
        store = make_store()
        guard = store.add_guard("Kim", "2024-05-01")
        store.merge([], [Holiday(guard.id, "2024-05-01", "2024-05-02", "Same id")])
        self.assertEqual(store.holidays[0].id, guard.id)


class MergeTests(unittest.TestCase):
    def test_merge_skips_existing_and_batch_duplicates(self) -> None:
        store = make_store()
        store.merge([Guard(1, "2024-01-01", "A")], [])
        added, _, dups = store.merge(
            [Guard(1, "2024-01-02", "B"), Guard(2, "2024-01-03", "C"), Guard(2, "2024-01-04", "D")], []
        )
        self.assertEqual([g.name for g in added], ["C"])
        self.assertEqual([d.record_id for d in dups], [1, 2])
        self.assertEqual([g.name for g in store.guards], ["A", "C"])

    def test_clear(self) -> None:
        store = make_store()
        store.add_guard("Kim", "2024-05-01")
        store.clear()
        self.assertEqual(store.guards, [])


if __name__ == "__main__":
    unittest.main()
