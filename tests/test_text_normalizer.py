# tests/test_text_normalizer.py

from __future__ import annotations

import pytest

from farmland_linkage.core.exceptions import ContractViolation
from farmland_linkage.normalization import normalize_text


def test_katakana_variants_fold_to_canonical_form() -> None:
    assert normalize_text("高田ノ町") == "高田の町"
    assert normalize_text("緑ケ丘") == "緑ヶ丘"
    assert normalize_text("ハッ田") == "ハっ田"
    assert normalize_text("ヅ") == "づ"


def test_full_width_space_becomes_ascii_space() -> None:
    assert normalize_text("芳原　東") == "芳原 東"


def test_oaza_prefix_is_removed() -> None:
    assert normalize_text("春野町大字芳原") == "春野町芳原"
    assert normalize_text("大字芳原大字") == "芳原"


def test_oaza_prefix_formed_by_removal_is_removed_too() -> None:
    # "大" + "大字" + "字" collapses to "大字" after one pass
    assert normalize_text("大大字字芳原") == "芳原"


def test_empty_string_is_preserved() -> None:
    assert normalize_text("") == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "高知県高知市春野町大字芳原字東1234",
        "緑ケ丘ノ森",
        "大大字字",
        "　大字ヅッ",
        "123-4",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_none_is_a_contract_violation() -> None:
    with pytest.raises(ContractViolation):
        normalize_text(None)  # type: ignore[arg-type]

    # Also catchable as a TypeError
    with pytest.raises(TypeError):
        normalize_text(None)  # type: ignore[arg-type]
