from __future__ import annotations

from typing import Callable

Matcher = Callable[[str], bool]
Rewrite = Callable[[str], str]


def _exact(label: str) -> Matcher:
    return lambda cmd: cmd == label


def _command_prefix(prefix: str) -> Matcher:
    # Matches the bare command or the command followed by arguments, never "rtk reader".
    return lambda cmd: cmd == prefix or cmd.startswith(prefix + " ")


def _replace_first(old: str, new: str) -> Rewrite:
    return lambda cmd: cmd.replace(old, new, 1)


# Ordered (matcher, rewrite) pairs, first match wins. Append renamed commands here.
CANONICAL_RULES: tuple[tuple[Matcher, Rewrite], ...] = (
    (_exact("rtk run-err"), lambda _cmd: "rtk err"),
    (_exact("rtk run-test"), lambda _cmd: "rtk test"),
    (_command_prefix("rtk read"), _replace_first("rtk read", "rtk cat")),
)


def canonicalize(label: str) -> str:
    """
    Map a stored command label to the name users actually type.

    Older tracking rows used internal names ("rtk run-err", "rtk read -") that
    were later renamed; reports show the current name so that old and new rows
    collapse onto one entry.
    """
    for matches, rewrite in CANONICAL_RULES:
        if matches(label):
            return rewrite(label)
    return label
