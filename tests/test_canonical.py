from __future__ import annotations

import pytest

from rtk_gain.gain_canonical import canonicalize


def test_canonicalize_renamed_commands() -> None:
    assert canonicalize("rtk run-err") == "rtk err"
    assert canonicalize("rtk run-test") == "rtk test"


def test_canonicalize_read_to_cat_keeps_suffix() -> None:
    assert canonicalize("rtk read") == "rtk cat"
    assert canonicalize("rtk read -") == "rtk cat -"
    assert canonicalize("rtk read src/main.rs") == "rtk cat src/main.rs"


def test_canonicalize_passthrough() -> None:
    assert canonicalize("rtk git status") == "rtk git status"
    assert canonicalize("rtk cargo test") == "rtk cargo test"
    assert canonicalize("rtk cat") == "rtk cat"
    assert canonicalize("rtk ls") == "rtk ls"
    assert canonicalize("rtk eslint .") == "rtk eslint ."
    assert canonicalize("") == ""


def test_canonicalize_only_matches_whole_command_words() -> None:
    assert canonicalize("rtk reader") == "rtk reader"
    assert canonicalize("rtk run-err --verbose") == "rtk run-err --verbose"
    assert canonicalize("xrtk read") == "xrtk read"


@pytest.mark.parametrize(
    "label",
    ["rtk run-err", "rtk run-test", "rtk read", "rtk read -", "rtk err", "rtk cat -", "rtk git log", "rtk read rtk read"],
)
def test_canonicalize_is_idempotent(label: str) -> None:
    once = canonicalize(label)
    assert canonicalize(once) == once
