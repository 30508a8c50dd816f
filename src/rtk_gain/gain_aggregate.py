from __future__ import annotations

import dataclasses
from typing import Iterable, Sequence

from .gain_canonical import canonicalize
from .models import CommandRow, PeriodStats


@dataclasses.dataclass
class _CommandAccumulator:
    count: int = 0
    saved: int = 0
    weighted_pct: float = 0.0
    weighted_time: float = 0.0

    def add(self, row: CommandRow) -> None:
        self.count += row.count
        self.saved += row.saved
        self.weighted_pct += row.avg_savings_pct * row.count
        self.weighted_time += row.avg_time_ms * row.count


def reaggregate(rows: Iterable[CommandRow]) -> list[CommandRow]:
    """
    Merge rows whose labels canonicalize to the same command.

    Averages are weighted by each row's command count. Output keeps the order in
    which each canonical label first appeared (the store sorts by saved desc).
    """
    order: list[str] = []
    merged: dict[str, _CommandAccumulator] = {}
    for row in rows:
        name = canonicalize(row.command)
        acc = merged.get(name)
        if acc is None:
            acc = _CommandAccumulator()
            merged[name] = acc
            order.append(name)
        acc.add(row)

    out: list[CommandRow] = []
    for name in order:
        acc = merged[name]
        if acc.count > 0:
            avg_pct = acc.weighted_pct / acc.count
            avg_time = int(acc.weighted_time / acc.count)
        else:
            avg_pct = 0.0
            avg_time = 0
        out.append(
            CommandRow(
                command=name,
                count=acc.count,
                saved=acc.saved,
                avg_savings_pct=avg_pct,
                avg_time_ms=avg_time,
            )
        )
    return out


@dataclasses.dataclass(frozen=True)
class PeriodTotals:
    commands: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    saved_tokens: int = 0
    savings_pct: float = 0.0
    total_time_ms: int = 0
    avg_time_ms: int = 0


def period_totals(rows: Sequence[PeriodStats]) -> PeriodTotals:
    commands = sum(r.commands for r in rows)
    input_tokens = sum(r.input_tokens for r in rows)
    output_tokens = sum(r.output_tokens for r in rows)
    saved_tokens = sum(r.saved_tokens for r in rows)
    total_time = sum(r.total_time_ms for r in rows)
    return PeriodTotals(
        commands=commands,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        saved_tokens=saved_tokens,
        savings_pct=(saved_tokens / input_tokens * 100.0) if input_tokens > 0 else 0.0,
        total_time_ms=total_time,
        avg_time_ms=(total_time // commands) if commands > 0 else 0,
    )
