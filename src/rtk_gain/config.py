from __future__ import annotations

import json
import os
from pathlib import Path

CONFIG_ENV = "RTK_GAIN_CONFIG"
SNAPSHOT_ENV = "RTK_GAIN_SNAPSHOT"
DEFAULT_HISTORY_LIMIT = 10


class ConfigError(ValueError):
    pass


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "rtk" / "gain.json"


def default_snapshot_path() -> Path:
    return Path.home() / ".local" / "share" / "rtk" / "gain_snapshot.json"


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Config must be a JSON object: {config_path}")
    return config


def resolve_snapshot_path(cli_value: Path | None, config: dict) -> Path:
    """
    Pick the snapshot to read, in order:
      --snapshot flag, $RTK_GAIN_SNAPSHOT, config `snapshot_path`, built-in default.
    """
    if cli_value is not None:
        return cli_value.expanduser()
    env = os.environ.get(SNAPSHOT_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    cfg = str(config.get("snapshot_path", "") or "").strip()
    if cfg:
        return Path(cfg).expanduser()
    return default_snapshot_path()


def config_tier(config: dict) -> str:
    return str(config.get("tier", "") or "pro").strip()


def config_history_limit(config: dict) -> int:
    try:
        n = int(config.get("history_limit", DEFAULT_HISTORY_LIMIT))
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_LIMIT
    return n if n > 0 else DEFAULT_HISTORY_LIMIT
