from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class CommandRow:
    command: str
    count: int = 0
    saved: int = 0
    avg_savings_pct: float = 0.0
    avg_time_ms: int = 0


@dataclasses.dataclass(frozen=True)
class Summary:
    total_commands: int = 0
    total_input: int = 0
    total_output: int = 0
    total_saved: int = 0
    avg_savings_pct: float = 0.0
    total_time_ms: int = 0
    avg_time_ms: int = 0
    by_command: list[CommandRow] = dataclasses.field(default_factory=list)  # sorted by saved desc
    by_day: list[tuple[str, int]] = dataclasses.field(default_factory=list)  # (date, saved), chronological


@dataclasses.dataclass(frozen=True)
class DayStats:
    date: str
    commands: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    saved_tokens: int = 0
    savings_pct: float = 0.0
    total_time_ms: int = 0
    avg_time_ms: int = 0

    @property
    def period_label(self) -> str:
        return self.date

    def csv_key(self) -> list[str]:
        return [self.date]


@dataclasses.dataclass(frozen=True)
class WeekStats:
    week_start: str
    week_end: str
    commands: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    saved_tokens: int = 0
    savings_pct: float = 0.0
    total_time_ms: int = 0
    avg_time_ms: int = 0

    @property
    def period_label(self) -> str:
        return f"{self.week_start[5:]} → {self.week_end[5:]}"

    def csv_key(self) -> list[str]:
        return [self.week_start, self.week_end]


@dataclasses.dataclass(frozen=True)
class MonthStats:
    month: str
    commands: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    saved_tokens: int = 0
    savings_pct: float = 0.0
    total_time_ms: int = 0
    avg_time_ms: int = 0

    @property
    def period_label(self) -> str:
        return self.month

    def csv_key(self) -> list[str]:
        return [self.month]


PeriodStats = DayStats | WeekStats | MonthStats


@dataclasses.dataclass(frozen=True)
class RecentRecord:
    timestamp: dt.datetime
    command: str
    savings_pct: float = 0.0
    saved_tokens: int = 0


@dataclasses.dataclass(frozen=True)
class QuotaTier:
    key: str
    name: str
    multiplier: int


@dataclasses.dataclass(frozen=True)
class GainOptions:
    format: str = "text"
    graph: bool = False
    history: bool = False
    quota: bool = False
    daily: bool = False
    weekly: bool = False
    monthly: bool = False
    all: bool = False
    tier: str = "pro"
    history_limit: int = 10

    @property
    def want_daily(self) -> bool:
        return self.all or self.daily

    @property
    def want_weekly(self) -> bool:
        return self.all or self.weekly

    @property
    def want_monthly(self) -> bool:
        return self.all or self.monthly

    @property
    def wants_breakdown(self) -> bool:
        return self.want_daily or self.want_weekly or self.want_monthly
