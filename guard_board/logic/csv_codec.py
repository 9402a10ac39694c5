# logic/csv_codec.py
"""
CSV 내보내기/가져오기.

형식 (UTF-8, 줄바꿈 "\\n", MIME text/csv;charset=utf-8;):
    type,id,name,date,startDate,endDate
    shift,{id},{name},{date},,
    holiday,{id},{name},,{startDate},{endDate}

이름에 쉼표/따옴표/줄바꿈이 없으면 예전 형식과 바이트 단위로 같다.
있으면 그 필드만 큰따옴표로 감싼다 (csv 모듈 QUOTE_MINIMAL).
"""
from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from guard_board.data.store import RecordStore
from guard_board.exceptions import DuplicateId, MalformedRow
from guard_board.models.records import Guard, Holiday

logger = logging.getLogger(__name__)

CSV_HEADER = "type,id,name,date,startDate,endDate"
EXPORT_FILENAME = "schedule.csv"
N_FIELDS = 6


@dataclass
class ParsedRows:
    guards: List[Guard] = field(default_factory=list)
    holidays: List[Holiday] = field(default_factory=list)
    malformed: List[MalformedRow] = field(default_factory=list)


@dataclass
class ImportReport:
    added_guards: List[Guard] = field(default_factory=list)
    added_holidays: List[Holiday] = field(default_factory=list)
    duplicates: List[DuplicateId] = field(default_factory=list)
    malformed: List[MalformedRow] = field(default_factory=list)

    @property
    def added(self) -> int:
        return len(self.added_guards) + len(self.added_holidays)

    def summary(self) -> str:
        return (f"근무 {len(self.added_guards)}건, 휴가 {len(self.added_holidays)}건 추가 "
                f"(중복 {len(self.duplicates)}건, 오류 행 {len(self.malformed)}건 건너뜀)")


# ---------- 내보내기 ----------
def export_csv(store: RecordStore) -> str:
    buf = io.StringIO()
    buf.write(CSV_HEADER + "\n")
    writer = csv.writer(buf, lineterminator="\n")
    for g in store.guards:
        writer.writerow(["shift", g.id, g.name, g.date, "", ""])
    for h in store.holidays:
        writer.writerow(["holiday", h.id, h.name, "", h.start_date, h.end_date])
    return buf.getvalue()


def write_csv_file(store: RecordStore, path: Path | str) -> Path:
    path = Path(path)
    if path.is_dir():
        path = path / EXPORT_FILENAME
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(export_csv(store))
    logger.info("exported %d guards, %d holidays to %s", len(store.guards), len(store.holidays), path)
    return path


# ---------- 가져오기 ----------
def _parse_row(line_no: int, row: List[str]):
    if len(row) != N_FIELDS:
        raise MalformedRow(line_no, f"expected {N_FIELDS} fields, got {len(row)}")
    type_, id_, name, date, start_date, end_date = row
    if type_ not in ("shift", "holiday"):
        raise MalformedRow(line_no, f"unknown type {type_!r}")
    try:
        record_id = int(id_.strip())
    except ValueError:
        raise MalformedRow(line_no, f"bad id {id_!r}") from None
    if type_ == "shift":
        return Guard(id=record_id, date=date, name=name)
    return Holiday(id=record_id, start_date=start_date, end_date=end_date, name=name)


def _is_blank(row: List[str]) -> bool:
    return all(not f.strip() for f in row)


def _split_line(line_no: int, line: str) -> List[str]:
    try:
        return next(csv.reader([line]), [])
    except csv.Error as exc:
        raise MalformedRow(line_no, str(exc)) from None


def _rows(text: str):
    """
    (줄 번호, 필드들 | MalformedRow) 를 차례로 낸다.
    닫히지 않은 따옴표가 뒤 줄들을 삼키면 그 구간을 물리적 줄 단위로 다시 읽는다.
    """
    lines = io.StringIO(text, newline="").readlines()
    reader = csv.reader(lines)
    start = 0
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            yield reader.line_num, MalformedRow(reader.line_num, str(exc))
            start = reader.line_num
            continue
        end = reader.line_num
        if end - start > 1 and len(row) != N_FIELDS:
            for offset, line in enumerate(lines[start:end]):
                line_no = start + offset + 1
                try:
                    yield line_no, _split_line(line_no, line)
                except MalformedRow as exc:
                    yield line_no, exc
        else:
            yield end, row
        start = end


def parse_csv(text: str) -> ParsedRows:
    """첫 줄(헤더)은 내용과 상관없이 건너뛴다. 빈 줄도 건너뛴다."""
    parsed = ParsedRows()
    first = True
    for line_no, row in _rows(text):
        if first:
            first = False
            continue
        try:
            if isinstance(row, MalformedRow):
                raise row
            if _is_blank(row):
                continue
            rec = _parse_row(line_no, row)
        except MalformedRow as exc:
            logger.debug("skipping row: %s", exc)
            parsed.malformed.append(exc)
            continue
        if isinstance(rec, Guard):
            parsed.guards.append(rec)
        else:
            parsed.holidays.append(rec)
    return parsed


def import_csv(store: RecordStore, text: str) -> ImportReport:
    """파싱 후 store에 추가 병합. 기존 레코드는 지우거나 바꾸지 않는다."""
    parsed = parse_csv(text)
    added_guards, added_holidays, duplicates = store.merge(parsed.guards, parsed.holidays)
    report = ImportReport(added_guards, added_holidays, duplicates, parsed.malformed)
    logger.info("import: %s", report.summary())
    return report


def read_csv_file(path: Path | str) -> str:
    # 엑셀 저장본의 BOM 허용
    return Path(path).read_text(encoding="utf-8-sig")
