from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest

from rtk_gain.models import CommandRow, DayStats, MonthStats, WeekStats
from rtk_gain.store import MemoryStore, SnapshotStore, StoreError


def _write(path: Path, doc: object) -> Path:
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


def test_snapshot_store_reads_all_sections(tmp_path: Path) -> None:
    p = _write(
        tmp_path / "snap.json",
        {
            "summary": {
                "total_commands": 2,
                "total_input": 100,
                "total_output": 20,
                "total_saved": 80,
                "avg_savings_pct": 80.0,
                "total_time_ms": 30,
                "avg_time_ms": 15,
                "by_command": [{"command": "rtk read", "count": 2, "saved": 80, "avg_savings_pct": 80.0, "avg_time_ms": 15}],
                "by_day": [["2026-01-01", 80], {"date": "2026-01-02", "saved_tokens": 0}],
            },
            "recent": [
                {"timestamp": "2026-01-02T10:30:00", "command": "rtk read", "savings_pct": 90.0, "saved_tokens": 50},
                {"timestamp": "2026-01-01T09:00:00", "command": "rtk ls", "savings_pct": 70.0, "saved_tokens": 30},
            ],
            "daily": [{"date": "2026-01-01", "commands": 2, "input_tokens": 100, "saved_tokens": 80, "extra": "ignored"}],
            "weekly": [{"week_start": "2025-12-29", "week_end": "2026-01-04", "commands": 2}],
            "monthly": [{"month": "2026-01", "commands": 2}],
        },
    )
    store = SnapshotStore(p)
    summary = store.get_summary()
    assert summary.total_commands == 2
    assert summary.by_command == [CommandRow("rtk read", 2, 80, 80.0, 15)]
    assert summary.by_day == [("2026-01-01", 80), ("2026-01-02", 0)]

    recent = store.get_recent(1)
    assert len(recent) == 1
    assert recent[0].timestamp == dt.datetime(2026, 1, 2, 10, 30)
    assert recent[0].command == "rtk read"

    assert store.get_all_days() == [DayStats("2026-01-01", commands=2, input_tokens=100, saved_tokens=80)]
    assert store.get_by_week() == [WeekStats("2025-12-29", "2026-01-04", commands=2)]
    assert store.get_by_month() == [MonthStats("2026-01", commands=2)]


def test_snapshot_store_missing_sections_are_empty(tmp_path: Path) -> None:
    store = SnapshotStore(_write(tmp_path / "snap.json", {}))
    assert store.get_summary().total_commands == 0
    assert store.get_recent(10) == []
    assert store.get_all_days() == []
    assert store.get_by_week() == []
    assert store.get_by_month() == []


def test_snapshot_store_missing_file(tmp_path: Path) -> None:
    store = SnapshotStore(tmp_path / "nope.json")
    with pytest.raises(StoreError, match="cannot read snapshot"):
        store.get_summary()


def test_snapshot_store_invalid_json(tmp_path: Path) -> None:
    p = tmp_path / "snap.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError, match="not valid JSON"):
        SnapshotStore(p).get_all_days()


def test_snapshot_store_malformed_section(tmp_path: Path) -> None:
    store = SnapshotStore(_write(tmp_path / "snap.json", {"weekly": [{"commands": 3}], "recent": [{"command": "x"}]}))
    with pytest.raises(StoreError, match="'weekly'"):
        store.get_by_week()
    with pytest.raises(StoreError, match="'recent'"):
        store.get_recent(5)


def test_snapshot_store_non_object(tmp_path: Path) -> None:
    with pytest.raises(StoreError, match="JSON object"):
        SnapshotStore(_write(tmp_path / "snap.json", [1, 2])).get_summary()


def test_memory_store_recent_limit() -> None:
    store = MemoryStore()
    assert store.get_recent(3) == []
    assert store.get_recent(-1) == []


@pytest.mark.parametrize(
    ("section", "rows"),
    [
        ("daily", [{"date": "2026-01-01", "commands": None}]),
        ("daily", [{"date": "2026-01-01", "savings_pct": "most"}]),
        ("weekly", [{"week_start": "2025-12-29", "week_end": "2026-01-04", "saved_tokens": [1]}]),
        ("monthly", [{"month": "2026-01", "avg_time_ms": {"ms": 3}}]),
    ],
)
def test_snapshot_store_rejects_mistyped_rollup_fields(tmp_path: Path, section: str, rows: list[dict[str, object]]) -> None:
    store = SnapshotStore(_write(tmp_path / "snap.json", {section: rows}))
    getter = {"daily": store.get_all_days, "weekly": store.get_by_week, "monthly": store.get_by_month}[section]
    with pytest.raises(StoreError, match=f"'{section}'"):
        getter()


def test_snapshot_store_coerces_numeric_strings(tmp_path: Path) -> None:
    store = SnapshotStore(_write(tmp_path / "snap.json", {"daily": [{"date": "2026-01-01", "commands": "3", "savings_pct": "80.0"}]}))
    day = store.get_all_days()[0]
    assert day.commands == 3
    assert day.savings_pct == 80.0


def test_snapshot_store_infinite_counter(tmp_path: Path) -> None:
    p = tmp_path / "snap.json"
    p.write_text('{"summary": {"total_commands": Infinity}}', encoding="utf-8")
    with pytest.raises(StoreError, match="'summary'"):
        SnapshotStore(p).get_summary()
