# logic/projection.py
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from guard_board.data.store import RecordStore
from guard_board.models.records import Guard, Holiday
from guard_board.utils.date_helper import month_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayCell:
    date: str
    guard: Optional[Guard] = None
    holiday: Optional[Holiday] = None

    @property
    def kind(self) -> str:
        # 휴가가 근무보다 우선
        if self.holiday is not None:
            return "holiday"
        if self.guard is not None:
            return "shift"
        return ""

    @property
    def guard_name(self) -> Optional[str]:
        return self.guard.name if self.guard else None

    @property
    def holiday_name(self) -> Optional[str]:
        return self.holiday.name if self.holiday else None

    @property
    def day(self) -> int:
        return int(self.date[8:10])


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    first_weekday_index: int
    cells: List[DayCell]


def project_day(store: RecordStore, day: str) -> DayCell:
    """날짜 하나에 걸리는 근무/휴가를 찾는다. 겹치면 각각 첫 번째 것."""
    guard = next((g for g in store.guards if g.date == day), None)
    holiday = next((h for h in store.holidays if h.covers(day)), None)
    return DayCell(date=day, guard=guard, holiday=holiday)


def project_month(store: RecordStore, year: int, month: int) -> MonthView:
    bounds = month_bounds(year, month)
    cells = [project_day(store, d) for d in bounds.days]
    first = bounds.days[0]
    return MonthView(int(first[:4]), int(first[5:7]), bounds.first_weekday_index, cells)


def overlapping_holidays(store: RecordStore) -> List[Tuple[int, int]]:
    """기간이 겹치는 휴가 id 쌍. 검증에서 막지는 않고 경고만 남긴다."""
    pairs = []
    hs = store.holidays
    for i, a in enumerate(hs):
        for b in hs[i + 1:]:
            if a.overlaps(b):
                pairs.append((a.id, b.id))
    if pairs:
        logger.warning("overlapping holidays: %s", pairs)
    return pairs
