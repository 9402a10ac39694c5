# data/data_manager.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from guard_board.config import STORE_FILE
from guard_board.models.records import Guard, Holiday

logger = logging.getLogger(__name__)

SHIFTS_KEY = "shifts"
HOLIDAYS_KEY = "holidays"


class BlobStore(Protocol):
    """문자열 키 → 문자열 값. 동기 get/set만 있으면 된다."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def set_many(self, values: Dict[str, str]) -> None: ...


class MemoryBlobStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def set_many(self, values: Dict[str, str]) -> None:
        self.data.update(values)


def _safe_json_load(path: Path, default):
    if not path.exists():
        return default
    try:
        raw = path.read_text(encoding="utf-8").strip()
        if not raw:
            return default
        return json.loads(raw)
    except (OSError, ValueError) as exc:
        logger.warning("could not read %s: %s", path, exc)
        return default


def _safe_json_save(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(path)


class JsonFileBlobStore:
    """
    파일 하나에 {키: 문자열} 을 저장하는 blob store.
    set / set_many 할 때마다 파일 전체를 원자적으로(tmp → replace) 다시 쓴다.
    """

    def __init__(self, path: Path | str = STORE_FILE):
        self.path = Path(path)
        data = _safe_json_load(self.path, default={})
        if not isinstance(data, dict):
            logger.warning("%s is not a JSON object, starting empty", self.path)
            data = {}
        self._cache: Dict[str, str] = {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    def set(self, key: str, value: str) -> None:
        self._cache[key] = value
        _safe_json_save(self.path, self._cache)

    def set_many(self, values: Dict[str, str]) -> None:
        # 키 여러 개를 파일 한 번 쓰기로
        self._cache.update(values)
        _safe_json_save(self.path, self._cache)


def _decode(blob: Optional[str], key: str, factory) -> list:
    if blob is None:
        return []
    try:
        rows = json.loads(blob)
    except ValueError as exc:
        logger.warning("stored %r is not valid JSON (%s), treating as empty", key, exc)
        return []
    if not isinstance(rows, list):
        logger.warning("stored %r is not a list, treating as empty", key)
        return []
    out = []
    for row in rows:
        try:
            out.append(factory(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("skipping unreadable %s row %r: %s", key, row, exc)
    return out


class Persistence:
    """레코드 두 컬렉션을 blob store 의 "shifts" / "holidays" 키로 통째로 읽고 쓴다."""

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    def load(self) -> Tuple[List[Guard], List[Holiday]]:
        guards = _decode(self.blob_store.get(SHIFTS_KEY), SHIFTS_KEY, Guard.from_dict)
        holidays = _decode(self.blob_store.get(HOLIDAYS_KEY), HOLIDAYS_KEY, Holiday.from_dict)
        logger.info("loaded %d guards, %d holidays", len(guards), len(holidays))
        return guards, holidays

    def save(self, guards: List[Guard], holidays: List[Holiday]) -> None:
        self.blob_store.set_many({
            SHIFTS_KEY: json.dumps([g.to_dict() for g in guards], ensure_ascii=False),
            HOLIDAYS_KEY: json.dumps([h.to_dict() for h in holidays], ensure_ascii=False),
        })
