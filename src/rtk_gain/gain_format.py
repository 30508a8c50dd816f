from __future__ import annotations


def format_tokens(n: int) -> str:
    n = int(n)
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def format_duration(ms: int) -> str:
    ms = int(ms)
    if ms < 1_000:
        return f"{ms}ms"
    if ms < 60_000:
        return f"{ms / 1_000:.1f}s"
    minutes = ms // 60_000
    seconds = (ms % 60_000) // 1_000
    return f"{minutes}m{seconds}s"


def trunc(s: str, max_len: int, ellipsis: str = "...") -> str:
    if len(s) <= max_len:
        return s
    if max_len <= len(ellipsis):
        return s[:max_len]
    return s[: max_len - len(ellipsis)] + ellipsis


def ascii_bar(value: int, max_value: int, width: int = 40, fill: str = "█") -> str:
    if max_value <= 0:
        filled = 0
    else:
        filled = int((value / max_value) * width)
    filled = max(0, min(width, filled))
    return (fill * filled) + (" " * (width - filled))
