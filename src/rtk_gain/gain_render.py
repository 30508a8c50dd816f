from __future__ import annotations

from typing import Sequence

from .gain_aggregate import period_totals, reaggregate
from .gain_canonical import canonicalize
from .gain_format import ascii_bar, format_duration, format_tokens, trunc
from .models import PeriodStats, QuotaTier, RecentRecord, Summary

RULE = "─" * 40
GRAPH_WIDTH = 40

# Pro baseline: ~44K tokens per 5h window, extrapolated to a month.
ESTIMATED_PRO_MONTHLY = 6_000_000

QUOTA_TIERS: tuple[QuotaTier, ...] = (
    QuotaTier(key="pro", name="Pro ($20/mo)", multiplier=1),
    QuotaTier(key="5x", name="Max 5x ($100/mo)", multiplier=5),
    QuotaTier(key="20x", name="Max 20x ($200/mo)", multiplier=20),
)

# kind -> (icon, title, unit, first column header, first column width)
PERIOD_KINDS: dict[str, tuple[str, str, str, str, int]] = {
    "daily": ("📅", "Daily Breakdown", "days", "Date", 12),
    "weekly": ("📊", "Weekly Breakdown", "weeks", "Week", 15),
    "monthly": ("📆", "Monthly Breakdown", "months", "Month", 10),
}


def resolve_tier(key: str | None) -> QuotaTier:
    k = (key or "").strip().lower()
    for tier in QUOTA_TIERS:
        if tier.key == k:
            return tier
    return QUOTA_TIERS[0]


def render_no_data() -> str:
    return "No tracking data yet.\nRun some rtk commands to start tracking savings.\n"


def render_header(summary: Summary) -> list[str]:
    return [
        "📊 RTK Token Savings",
        "═" * 40,
        "",
        f"Total commands:    {summary.total_commands}",
        f"Input tokens:      {format_tokens(summary.total_input)}",
        f"Output tokens:     {format_tokens(summary.total_output)}",
        f"Tokens saved:      {format_tokens(summary.total_saved)} ({summary.avg_savings_pct:.1f}%)",
        f"Total exec time:   {format_duration(summary.total_time_ms)} (avg {format_duration(summary.avg_time_ms)})",
        "",
    ]


def render_command_table(summary: Summary) -> list[str]:
    if not summary.by_command:
        return []
    lines = ["By Command:", RULE]
    lines.append(f"{'Command':<20} {'Count':>6} {'Saved':>10} {'Avg%':>8} {'Time':>8}")
    for row in reaggregate(summary.by_command):
        lines.append(
            f"{trunc(row.command, 18):<20} {row.count:>6} {format_tokens(row.saved):>10} "
            f"{row.avg_savings_pct:>7.1f}% {format_duration(row.avg_time_ms):>8}"
        )
    lines.append("")
    return lines


def render_ascii_graph(data: Sequence[tuple[str, int]], width: int = GRAPH_WIDTH) -> list[str]:
    if not data:
        return []
    max_val = max(int(v) for _, v in data)
    lines: list[str] = []
    for date, value in data:
        date_short = date[5:10] if len(date) >= 10 else date
        lines.append(f"{date_short} │{ascii_bar(int(value), max_val, width)} {format_tokens(value)}")
    return lines


def render_graph_section(summary: Summary) -> list[str]:
    if not summary.by_day:
        return []
    return ["Daily Savings (last 30 days):", RULE, *render_ascii_graph(summary.by_day), ""]


def render_history(recent: Sequence[RecentRecord]) -> list[str]:
    if not recent:
        return []
    lines = ["Recent Commands:", RULE]
    for rec in recent:
        when = rec.timestamp.strftime("%m-%d %H:%M")
        cmd = trunc(canonicalize(rec.command), 25)
        lines.append(f"{when} {cmd:<25} -{rec.savings_pct:.0f}% ({format_tokens(rec.saved_tokens)})")
    lines.append("")
    return lines


def render_quota(total_saved: int, tier: QuotaTier) -> list[str]:
    quota_tokens = ESTIMATED_PRO_MONTHLY * tier.multiplier
    quota_pct = (total_saved / quota_tokens) * 100.0
    return [
        "Monthly Quota Analysis:",
        RULE,
        f"Subscription tier:        {tier.name}",
        f"Estimated monthly quota:  {format_tokens(quota_tokens)}",
        f"Tokens saved (lifetime):  {format_tokens(total_saved)}",
        f"Quota preserved:          {quota_pct:.1f}%",
        "",
        "Note: Heuristic estimate based on ~44K tokens/5h (Pro baseline)",
        "      Actual limits use rolling 5-hour windows, not monthly caps.",
    ]


def render_report(
    summary: Summary,
    *,
    graph: bool = False,
    recent: Sequence[RecentRecord] | None = None,
    quota_tier: QuotaTier | None = None,
) -> str:
    if summary.total_commands == 0:
        return render_no_data()

    lines: list[str] = []
    lines.extend(render_header(summary))
    lines.extend(render_command_table(summary))
    if graph:
        lines.extend(render_graph_section(summary))
    if recent is not None:
        lines.extend(render_history(recent))
    if quota_tier is not None:
        lines.extend(render_quota(summary.total_saved, quota_tier))
    return "\n".join(lines) + "\n"


def render_period_table(rows: Sequence[PeriodStats], kind: str) -> str:
    icon, title, unit, first_col, w = PERIOD_KINDS[kind]
    if not rows:
        return f"No {kind} data available.\n"

    header = f"{first_col:<{w}} {'Cmds':>7} {'Input':>10} {'Output':>10} {'Saved':>10} {'Save%':>7} {'Time':>8}"
    rule = "─" * len(header)

    def line(label: str, commands: int, inp: int, outp: int, saved: int, pct: float, avg_ms: int) -> str:
        return (
            f"{label:<{w}} {commands:>7} {format_tokens(inp):>10} {format_tokens(outp):>10} "
            f"{format_tokens(saved):>10} {pct:>6.1f}% {format_duration(avg_ms):>8}"
        )

    lines = [f"{icon} {title} ({len(rows)} {unit})", "═" * len(header), header, rule]
    for r in rows:
        lines.append(
            line(r.period_label, r.commands, r.input_tokens, r.output_tokens, r.saved_tokens, r.savings_pct, r.avg_time_ms)
        )
    t = period_totals(rows)
    lines.append(rule)
    lines.append(line("TOTAL", t.commands, t.input_tokens, t.output_tokens, t.saved_tokens, t.savings_pct, t.avg_time_ms))
    return "\n".join(lines) + "\n"
