# utils/date_helper.py
import calendar
from datetime import date, datetime, timedelta
from typing import NamedTuple


class MonthBounds(NamedTuple):
    first_weekday_index: int      # 일요일=0 ... 토요일=6
    days: list[str]               # 해당 월의 모든 날짜 "YYYY-MM-DD"


def date_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def is_date_key(text: str) -> bool:
    """'2024-02-29' 같은 엄격한 YYYY-MM-DD 문자열인지."""
    if len(text) != 10:
        return False
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """
    범위 밖의 월을 날짜 연산으로 보정한다.
    - (2024, 13) -> (2025, 1)
    - (2024, 0)  -> (2023, 12)
    """
    y, m = divmod((year * 12) + (month - 1), 12)
    return y, m + 1


def month_bounds(year: int, month: int) -> MonthBounds:
    """
    해당 월의 첫날 요일(일요일 시작)과 모든 날짜 문자열을 돌려준다.
    예: 2024-02 -> (4, ['2024-02-01', ..., '2024-02-29'])
    """
    year, month = normalize_month(year, month)
    first = date(year, month, 1)
    # date.weekday(): 월=0 ... 일=6  →  일=0 ... 토=6
    first_weekday_index = (first.weekday() + 1) % 7
    n_days = calendar.monthrange(year, month)[1]
    days = [date_key(year, month, d) for d in range(1, n_days + 1)]
    return MonthBounds(first_weekday_index, days)


def leading_blank_cells(year: int, month: int) -> int:
    """일요일 시작 달력에서 1일 앞에 들어갈 빈 칸 수."""
    return month_bounds(year, month).first_weekday_index


def next_month(year: int, month: int) -> tuple[int, int]:
    year, month = normalize_month(year, month)
    # 말일 + 1일 = 다음 달 1일
    last = date(year, month, calendar.monthrange(year, month)[1])
    nxt = last + timedelta(days=1)
    return nxt.year, nxt.month


def prev_month(year: int, month: int) -> tuple[int, int]:
    year, month = normalize_month(year, month)
    prv = date(year, month, 1) - timedelta(days=1)
    return prv.year, prv.month
