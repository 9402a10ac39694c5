# data/store.py
from __future__ import annotations

import logging
import time
from typing import Iterable, List, Optional, Tuple

from guard_board.data.data_manager import Persistence
from guard_board.exceptions import DuplicateId, ValidationError
from guard_board.models.records import Guard, Holiday

logger = logging.getLogger(__name__)

MSG_FILL_ALL = "모든 항목을 입력해주세요."
MSG_START_AFTER_END = "시작일이 종료일보다 늦을 수 없습니다."


class IdSource:
    """
    밀리초 타임스탬프로 시작하는 단조 증가 카운터.
    같은 밀리초에 여러 번 불려도 항상 이전 값보다 크다.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0

    def next(self, taken: Iterable[int] = ()) -> int:
        taken = set(taken)
        candidate = max(self._clock(), self._last + 1)
        while candidate in taken:
            candidate += 1
        self._last = candidate
        return candidate


class RecordStore:
    """
    근무(Guard)와 휴가(Holiday) 컬렉션을 소유한다.
    변경 메서드는 끝에서 항상 save()를 직접 호출한다.
    """

    def __init__(self, persistence: Optional[Persistence] = None, id_source: Optional[IdSource] = None):
        self.persistence = persistence
        self.id_source = id_source or IdSource()
        self.guards: List[Guard] = []
        self.holidays: List[Holiday] = []

    # --- 저장/로드 ---
    def load(self) -> "RecordStore":
        if self.persistence is not None:
            self.guards, self.holidays = self.persistence.load()
        return self

    def save(self) -> None:
        if self.persistence is not None:
            self.persistence.save(self.guards, self.holidays)

    # --- 조회 ---
    def find_guard(self, guard_id: int) -> Optional[Guard]:
        return next((g for g in self.guards if g.id == guard_id), None)

    def find_holiday(self, holiday_id: int) -> Optional[Holiday]:
        return next((h for h in self.holidays if h.id == holiday_id), None)

    def new_guard_id(self) -> int:
        return self.id_source.next(g.id for g in self.guards)

    def new_holiday_id(self) -> int:
        return self.id_source.next(h.id for h in self.holidays)

    # --- Guards ---
    def add_guard(self, name: str, date: str) -> Guard:
        name, date = (name or "").strip(), (date or "").strip()
        if not name or not date:
            raise ValidationError(MSG_FILL_ALL)
        guard = Guard(id=self.new_guard_id(), date=date, name=name)
        self.guards.append(guard)
        self.save()
        logger.info("added guard %s (%s, %s)", guard.id, guard.name, guard.date)
        return guard

    def delete_guard(self, guard_id: int) -> bool:
        before = len(self.guards)
        self.guards = [g for g in self.guards if g.id != guard_id]
        if len(self.guards) == before:
            return False
        self.save()
        logger.info("deleted guard %s", guard_id)
        return True

    def pop_guard(self, guard_id: int) -> Optional[Guard]:
        """편집 시작: 레코드를 꺼내면서 바로 컬렉션에서 지운다."""
        guard = self.find_guard(guard_id)
        if guard is None:
            return None
        self.delete_guard(guard_id)
        return guard

    # --- Holidays ---
    def add_holiday(self, name: str, start_date: str, end_date: str) -> Holiday:
        name = (name or "").strip()
        start_date, end_date = (start_date or "").strip(), (end_date or "").strip()
        # 날짜 순서 검사가 먼저
        if start_date and end_date and start_date > end_date:
            raise ValidationError(MSG_START_AFTER_END)
        if not name or not start_date or not end_date:
            raise ValidationError(MSG_FILL_ALL)
        holiday = Holiday(id=self.new_holiday_id(), start_date=start_date, end_date=end_date, name=name)
        self.holidays.append(holiday)
        self.save()
        logger.info("added holiday %s (%s, %s ~ %s)", holiday.id, holiday.name, start_date, end_date)
        return holiday

    def delete_holiday(self, holiday_id: int) -> bool:
        before = len(self.holidays)
        self.holidays = [h for h in self.holidays if h.id != holiday_id]
        if len(self.holidays) == before:
            return False
        self.save()
        logger.info("deleted holiday %s", holiday_id)
        return True

    def pop_holiday(self, holiday_id: int) -> Optional[Holiday]:
        holiday = self.find_holiday(holiday_id)
        if holiday is None:
            return None
        self.delete_holiday(holiday_id)
        return holiday

    # --- 병합 (CSV 가져오기) ---
    def merge(self, guards: Iterable[Guard], holidays: Iterable[Holiday]) -> Tuple[List[Guard], List[Holiday], List[DuplicateId]]:
        """
        추가만 한다. 같은 id가 이미 있으면(같은 배치 안의 중복 포함) 건너뛴다.
        return: (추가된 guards, 추가된 holidays, 건너뛴 중복들)
        """
        duplicates: List[DuplicateId] = []

        def _take(candidates, live, kind):
            seen = {r.id for r in live}
            added = []
            for rec in candidates:
                if rec.id in seen:
                    duplicates.append(DuplicateId(kind, rec.id))
                    continue
                seen.add(rec.id)
                added.append(rec)
            return added

        new_guards = _take(guards, self.guards, "shift")
        new_holidays = _take(holidays, self.holidays, "holiday")
        if new_guards or new_holidays:
            self.guards = self.guards + new_guards
            self.holidays = self.holidays + new_holidays
            self.save()
        for dup in duplicates:
            logger.debug("merge skipped: %s", dup)
        logger.info(
            "merged %d guards, %d holidays (%d duplicates skipped)",
            len(new_guards), len(new_holidays), len(duplicates),
        )
        return new_guards, new_holidays, duplicates

    def clear(self) -> None:
        self.guards = []
        self.holidays = []
        self.save()
        logger.info("store cleared")
