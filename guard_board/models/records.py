# models/records.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Guard:
    id: int
    date: str                                  # "YYYY-MM-DD"
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "date": self.date, "name": self.name}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Guard":
        return Guard(id=int(data["id"]), date=str(data["date"]), name=str(data["name"]))


@dataclass(frozen=True)
class Holiday:
    id: int
    start_date: str                            # "YYYY-MM-DD", 포함
    end_date: str                              # "YYYY-MM-DD", 포함
    name: str

    def covers(self, day: str) -> bool:
        # YYYY-MM-DD 고정폭이라 문자열 비교 == 날짜 비교
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "Holiday") -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "name": self.name,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Holiday":
        return Holiday(
            id=int(data["id"]),
            start_date=str(data["startDate"]),
            end_date=str(data["endDate"]),
            name=str(data["name"]),
        )
