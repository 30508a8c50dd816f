from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, TextIO, TypeVar

from .gain_export import export_csv, export_json, write_output
from .gain_render import render_period_table, render_report, resolve_tier
from .models import GainOptions
from .store import StoreError, TrackingStore

T = TypeVar("T")


def _query(what: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except StoreError as e:
        raise StoreError(f"failed to load {what}: {e}") from e


def _emit(text: str, out: TextIO, output_path: Path | None) -> None:
    if output_path is not None:
        write_output(text, output_path)
        return
    out.write(text)


def run_export(store: TrackingStore, options: GainOptions, *, out: TextIO, output_path: Path | None = None) -> int:
    summary = _query("token savings summary", store.get_summary) if options.format == "json" else None
    daily = _query("daily stats", store.get_all_days) if options.want_daily else None
    weekly = _query("weekly stats", store.get_by_week) if options.want_weekly else None
    monthly = _query("monthly stats", store.get_by_month) if options.want_monthly else None

    if summary is not None:
        text = export_json(summary, daily=daily, weekly=weekly, monthly=monthly)
    else:
        text = export_csv(daily=daily, weekly=weekly, monthly=monthly)
    _emit(text, out, output_path)
    return 0


def run_text(store: TrackingStore, options: GainOptions, *, out: TextIO) -> int:
    summary = _query("token savings summary", store.get_summary)
    if summary.total_commands == 0:
        out.write(render_report(summary))
        return 0

    if not options.wants_breakdown:
        recent = None
        if options.history:
            recent = _query("recent commands", lambda: store.get_recent(options.history_limit))
        out.write(
            render_report(
                summary,
                graph=options.graph,
                recent=recent,
                quota_tier=resolve_tier(options.tier) if options.quota else None,
            )
        )
        return 0

    tables: list[str] = []
    if options.want_daily:
        tables.append(render_period_table(_query("daily stats", store.get_all_days), "daily"))
    if options.want_weekly:
        tables.append(render_period_table(_query("weekly stats", store.get_by_week), "weekly"))
    if options.want_monthly:
        tables.append(render_period_table(_query("monthly stats", store.get_by_month), "monthly"))
    out.write("\n".join(tables))
    return 0


def run_gain(
    store: TrackingStore,
    options: GainOptions,
    *,
    out: TextIO | None = None,
    output_path: Path | None = None,
) -> int:
    if out is None:
        out = sys.stdout
    if options.format in ("json", "csv"):
        return run_export(store, options, out=out, output_path=output_path)
    return run_text(store, options, out=out)
