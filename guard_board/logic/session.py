# logic/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from guard_board.data.store import RecordStore
from guard_board.exceptions import ImportInProgress
from guard_board.logic.csv_codec import ImportReport, export_csv, import_csv
from guard_board.logic.projection import MonthView, project_month
from guard_board.models.records import Guard, Holiday
from guard_board.utils import date_helper

logger = logging.getLogger(__name__)


@dataclass
class GuardDraft:
    name: str = ""
    date: str = ""


@dataclass
class HolidayDraft:
    name: str = ""
    start_date: str = ""
    end_date: str = ""


class BoardSession:
    """
    화면 한 장의 상태: 보고 있는 달 + 근무/휴가 입력 버퍼.
    레코드 자체는 RecordStore가 가진다.
    """

    def __init__(self, store: RecordStore, year: Optional[int] = None, month: Optional[int] = None):
        today = date.today()
        self.store = store
        self.year, self.month = date_helper.normalize_month(
            today.year if year is None else year,
            today.month if month is None else month,
        )
        self.guard_draft = GuardDraft()
        self.holiday_draft = HolidayDraft()
        self._importing = False

    # ---------------- 달 이동 ----------------
    def next_month(self) -> None:
        self.year, self.month = date_helper.next_month(self.year, self.month)

    def prev_month(self) -> None:
        self.year, self.month = date_helper.prev_month(self.year, self.month)

    def month_view(self) -> MonthView:
        return project_month(self.store, self.year, self.month)

    # ---------------- 근무 ----------------
    def save_guard(self) -> Guard:
        """실패하면 ValidationError, 버퍼는 그대로 남는다."""
        d = self.guard_draft
        guard = self.store.add_guard(d.name, d.date)
        self.guard_draft = GuardDraft()
        return guard

    def edit_guard(self, guard_id: int) -> bool:
        guard = self.store.pop_guard(guard_id)
        if guard is None:
            return False
        self.guard_draft = GuardDraft(name=guard.name, date=guard.date)
        logger.info("guard %s popped for editing", guard_id)
        return True

    def delete_guard(self, guard_id: int) -> bool:
        return self.store.delete_guard(guard_id)

    # ---------------- 휴가 ----------------
    def save_holiday(self) -> Holiday:
        d = self.holiday_draft
        holiday = self.store.add_holiday(d.name, d.start_date, d.end_date)
        self.holiday_draft = HolidayDraft()
        return holiday

    def edit_holiday(self, holiday_id: int) -> bool:
        holiday = self.store.pop_holiday(holiday_id)
        if holiday is None:
            return False
        self.holiday_draft = HolidayDraft(
            name=holiday.name, start_date=holiday.start_date, end_date=holiday.end_date
        )
        logger.info("holiday %s popped for editing", holiday_id)
        return True

    def delete_holiday(self, holiday_id: int) -> bool:
        return self.store.delete_holiday(holiday_id)

    # ---------------- CSV ----------------
    def export_text(self) -> str:
        return export_csv(self.store)

    @property
    def importing(self) -> bool:
        return self._importing

    def begin_import(self) -> None:
        """파일 선택/읽기 시작 시 호출. 이미 진행 중이면 ImportInProgress."""
        if self._importing:
            raise ImportInProgress("이미 가져오기가 진행 중입니다.")
        self._importing = True

    def finish_import(self, text: Optional[str]) -> Optional[ImportReport]:
        """읽기 완료 콜백. text가 None이면(취소/실패) 병합 없이 잠금만 푼다."""
        try:
            if text is None:
                return None
            return import_csv(self.store, text)
        finally:
            self._importing = False

    def import_text(self, text: str) -> Optional[ImportReport]:
        self.begin_import()
        return self.finish_import(text)
