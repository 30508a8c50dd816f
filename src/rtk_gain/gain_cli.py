from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import config_history_limit, config_tier, default_config_path, load_config, resolve_snapshot_path
from .gain_run import run_gain
from .models import GainOptions
from .store import SnapshotStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rtk-gain", description="Show token savings tracked by rtk.")
    parser.add_argument("--graph", action="store_true", help="Show an ASCII graph of daily savings.")
    parser.add_argument("--history", action="store_true", help="Show recent commands.")
    parser.add_argument("--quota", action="store_true", help="Show savings as a share of an estimated monthly quota.")
    parser.add_argument(
        "--tier",
        type=str,
        default=None,
        help="Subscription tier for --quota: pro, 5x or 20x (unknown values fall back to pro).",
    )
    parser.add_argument("--daily", action="store_true", help="Show (or export) the day-by-day breakdown.")
    parser.add_argument("--weekly", action="store_true", help="Show (or export) the weekly breakdown.")
    parser.add_argument("--monthly", action="store_true", help="Show (or export) the monthly breakdown.")
    parser.add_argument("--all", action="store_true", help="Same as --daily --weekly --monthly.")
    parser.add_argument("--format", choices=["text", "json", "csv"], default="text", help="Output format.")
    parser.add_argument("--snapshot", type=Path, default=None, help="Path to the tracker's JSON snapshot.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config JSON (default: ~/.config/rtk/gain.json).")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write json/csv exports to this file instead of stdout.")
    parser.add_argument("--history-limit", type=int, default=None, help="Number of recent commands for --history.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Print diagnostics to stderr.")
    return parser


def _options_from_args(args: argparse.Namespace, config: dict) -> GainOptions:
    tier = args.tier if args.tier is not None else config_tier(config)
    history_limit = args.history_limit if args.history_limit and args.history_limit > 0 else config_history_limit(config)
    return GainOptions(
        format=str(args.format),
        graph=bool(args.graph),
        history=bool(args.history),
        quota=bool(args.quota),
        daily=bool(args.daily),
        weekly=bool(args.weekly),
        monthly=bool(args.monthly),
        all=bool(args.all),
        tier=str(tier),
        history_limit=int(history_limit),
    )


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = args.config if args.config is not None else default_config_path()
    config = load_config(config_path)
    snapshot_path = resolve_snapshot_path(args.snapshot, config)
    options = _options_from_args(args, config)

    if args.verbose:
        print(f"Config: {config_path}{'' if config_path.exists() else ' (missing, using defaults)'}", file=sys.stderr)
        print(f"Snapshot: {snapshot_path}", file=sys.stderr)
    if args.output is not None and options.format == "text":
        print("Note: --output only applies to --format json/csv; printing to stdout.", file=sys.stderr)

    return run_gain(SnapshotStore(snapshot_path), options, output_path=args.output)
