from __future__ import annotations

import csv
import dataclasses
import io
import json
from pathlib import Path
from typing import Sequence

from .models import DayStats, MonthStats, PeriodStats, Summary, WeekStats

COUNTER_COLUMNS = [
    "commands",
    "input_tokens",
    "output_tokens",
    "saved_tokens",
    "savings_pct",
    "total_time_ms",
    "avg_time_ms",
]

DAILY_HEADER = ["date", *COUNTER_COLUMNS]
WEEKLY_HEADER = ["week_start", "week_end", *COUNTER_COLUMNS]
MONTHLY_HEADER = ["month", *COUNTER_COLUMNS]


def summary_to_dict(summary: Summary) -> dict[str, object]:
    return {
        "total_commands": summary.total_commands,
        "total_input": summary.total_input,
        "total_output": summary.total_output,
        "total_saved": summary.total_saved,
        "avg_savings_pct": summary.avg_savings_pct,
        "total_time_ms": summary.total_time_ms,
        "avg_time_ms": summary.avg_time_ms,
    }


def build_export(
    summary: Summary,
    *,
    daily: Sequence[DayStats] | None = None,
    weekly: Sequence[WeekStats] | None = None,
    monthly: Sequence[MonthStats] | None = None,
) -> dict[str, object]:
    """Unselected granularities are left out of the document entirely, never written as null."""
    out: dict[str, object] = {"summary": summary_to_dict(summary)}
    if daily is not None:
        out["daily"] = [dataclasses.asdict(d) for d in daily]
    if weekly is not None:
        out["weekly"] = [dataclasses.asdict(w) for w in weekly]
    if monthly is not None:
        out["monthly"] = [dataclasses.asdict(m) for m in monthly]
    return out


def export_json(
    summary: Summary,
    *,
    daily: Sequence[DayStats] | None = None,
    weekly: Sequence[WeekStats] | None = None,
    monthly: Sequence[MonthStats] | None = None,
) -> str:
    data = build_export(summary, daily=daily, weekly=weekly, monthly=monthly)
    return json.dumps(data, indent=2, sort_keys=False, ensure_ascii=False) + "\n"


def _csv_section(title: str, header: list[str], rows: Sequence[PeriodStats]) -> str:
    buf = io.StringIO()
    buf.write(f"# {title}\n")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    for r in rows:
        writer.writerow(
            [
                *r.csv_key(),
                r.commands,
                r.input_tokens,
                r.output_tokens,
                r.saved_tokens,
                f"{r.savings_pct:.2f}",
                r.total_time_ms,
                r.avg_time_ms,
            ]
        )
    return buf.getvalue()


def export_csv(
    *,
    daily: Sequence[DayStats] | None = None,
    weekly: Sequence[WeekStats] | None = None,
    monthly: Sequence[MonthStats] | None = None,
) -> str:
    sections: list[str] = []
    if daily is not None:
        sections.append(_csv_section("Daily Data", DAILY_HEADER, daily))
    if weekly is not None:
        sections.append(_csv_section("Weekly Data", WEEKLY_HEADER, weekly))
    if monthly is not None:
        sections.append(_csv_section("Monthly Data", MONTHLY_HEADER, monthly))
    return "\n".join(sections)


def write_output(text: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
