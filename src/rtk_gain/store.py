from __future__ import annotations

import dataclasses
import datetime as dt
import json
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from .models import CommandRow, DayStats, MonthStats, RecentRecord, Summary, WeekStats

T = TypeVar("T")


class StoreError(RuntimeError):
    pass


class TrackingStore(Protocol):
    def get_summary(self) -> Summary: ...

    def get_recent(self, n: int) -> list[RecentRecord]: ...

    def get_all_days(self) -> list[DayStats]: ...

    def get_by_week(self) -> list[WeekStats]: ...

    def get_by_month(self) -> list[MonthStats]: ...


@dataclasses.dataclass
class MemoryStore:
    summary: Summary = dataclasses.field(default_factory=Summary)
    recent: list[RecentRecord] = dataclasses.field(default_factory=list)
    days: list[DayStats] = dataclasses.field(default_factory=list)
    weeks: list[WeekStats] = dataclasses.field(default_factory=list)
    months: list[MonthStats] = dataclasses.field(default_factory=list)

    def get_summary(self) -> Summary:
        return self.summary

    def get_recent(self, n: int) -> list[RecentRecord]:
        return list(self.recent[: max(0, n)])

    def get_all_days(self) -> list[DayStats]:
        return list(self.days)

    def get_by_week(self) -> list[WeekStats]:
        return list(self.weeks)

    def get_by_month(self) -> list[MonthStats]:
        return list(self.months)


def _counters(raw: dict[str, Any]) -> dict[str, Any]:
    return {
        "commands": int(raw.get("commands", 0)),
        "input_tokens": int(raw.get("input_tokens", 0)),
        "output_tokens": int(raw.get("output_tokens", 0)),
        "saved_tokens": int(raw.get("saved_tokens", 0)),
        "savings_pct": float(raw.get("savings_pct", 0.0)),
        "total_time_ms": int(raw.get("total_time_ms", 0)),
        "avg_time_ms": int(raw.get("avg_time_ms", 0)),
    }


def parse_day(raw: dict[str, Any]) -> DayStats:
    return DayStats(date=str(raw["date"]), **_counters(raw))


def parse_week(raw: dict[str, Any]) -> WeekStats:
    return WeekStats(week_start=str(raw["week_start"]), week_end=str(raw["week_end"]), **_counters(raw))


def parse_month(raw: dict[str, Any]) -> MonthStats:
    return MonthStats(month=str(raw["month"]), **_counters(raw))


def parse_command_row(raw: dict[str, Any]) -> CommandRow:
    return CommandRow(
        command=str(raw["command"]),
        count=int(raw.get("count", 0)),
        saved=int(raw.get("saved", 0)),
        avg_savings_pct=float(raw.get("avg_savings_pct", 0.0)),
        avg_time_ms=int(raw.get("avg_time_ms", 0)),
    )


def parse_summary(raw: dict[str, Any]) -> Summary:
    by_day: list[tuple[str, int]] = []
    for item in raw.get("by_day") or []:
        if isinstance(item, dict):
            by_day.append((str(item["date"]), int(item.get("saved_tokens", 0))))
        else:
            date, value = item
            by_day.append((str(date), int(value)))
    return Summary(
        total_commands=int(raw.get("total_commands", 0)),
        total_input=int(raw.get("total_input", 0)),
        total_output=int(raw.get("total_output", 0)),
        total_saved=int(raw.get("total_saved", 0)),
        avg_savings_pct=float(raw.get("avg_savings_pct", 0.0)),
        total_time_ms=int(raw.get("total_time_ms", 0)),
        avg_time_ms=int(raw.get("avg_time_ms", 0)),
        by_command=[parse_command_row(r) for r in raw.get("by_command") or []],
        by_day=by_day,
    )


def parse_recent(raw: dict[str, Any]) -> RecentRecord:
    return RecentRecord(
        timestamp=dt.datetime.fromisoformat(str(raw["timestamp"])),
        command=str(raw["command"]),
        savings_pct=float(raw.get("savings_pct", 0.0)),
        saved_tokens=int(raw.get("saved_tokens", 0)),
    )


class SnapshotStore:
    """
    Read-only view over a JSON snapshot written by the tracker.

    The snapshot holds rows the tracker has already summarized:
      {"summary": {...}, "recent": [...], "daily": [...], "weekly": [...], "monthly": [...]}
    The file is read on first query and cached for the rest of the run.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._doc: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._doc is None:
            try:
                doc = json.loads(self.path.read_text(encoding="utf-8"))
            except OSError as e:
                raise StoreError(f"cannot read snapshot {self.path}: {e.strerror or e}") from e
            except ValueError as e:
                raise StoreError(f"snapshot {self.path} is not valid JSON: {e}") from e
            if not isinstance(doc, dict):
                raise StoreError(f"snapshot {self.path} must contain a JSON object")
            self._doc = doc
        return self._doc

    def _section(self, key: str, parse: Callable[[Any], T], default: Any) -> T:
        raw = self._load().get(key)
        if raw is None:
            raw = default
        try:
            return parse(raw)
        except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
            raise StoreError(f"malformed '{key}' section in {self.path}: {e!r}") from e

    def get_summary(self) -> Summary:
        return self._section("summary", parse_summary, {})

    def get_recent(self, n: int) -> list[RecentRecord]:
        records = self._section("recent", lambda raw: [parse_recent(r) for r in raw], [])
        return records[: max(0, n)]

    def get_all_days(self) -> list[DayStats]:
        return self._section("daily", lambda raw: [parse_day(r) for r in raw], [])

    def get_by_week(self) -> list[WeekStats]:
        return self._section("weekly", lambda raw: [parse_week(r) for r in raw], [])

    def get_by_month(self) -> list[MonthStats]:
        return self._section("monthly", lambda raw: [parse_month(r) for r in raw], [])
