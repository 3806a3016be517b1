"""Tests for category classification."""

import pytest

from nutripro.domain.catalog import FALLBACK_CATEGORY
from nutripro.services.classifier import classify_category


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("穀物類", "全穀雜糧"),
        ("澱粉類", "全穀雜糧"),
        ("麵條", "全穀雜糧"),
        ("肉類", "豆魚蛋肉"),
        ("蛋類", "豆魚蛋肉"),
        ("豆類", "豆魚蛋肉"),
        ("魚貝類", "海鮮"),
        ("蝦蟹", "海鮮"),
        ("蔬菜類", "蔬菜"),
        ("菇類", "蔬菜"),
        ("藻類", "蔬菜"),
        ("水果類", "水果"),
        ("乳品類", "乳品"),
        ("奶類", "乳品"),
    ],
)
def test_classify_category_keywords(label: str, expected: str) -> None:
    assert classify_category(label) == expected


def test_nuts_are_not_fruit() -> None:
    assert classify_category("堅果及種子類") == FALLBACK_CATEGORY


def test_earlier_rules_win() -> None:
    # "米" is checked before "豆".
    assert classify_category("米豆混合") == "全穀雜糧"
    # "豆" is checked before "菜".
    assert classify_category("豆菜") == "豆魚蛋肉"


@pytest.mark.parametrize("label", [None, "", 0, "調味料類", "油脂類"])
def test_unknown_or_missing_labels_fall_back(label: object) -> None:
    assert classify_category(label) == FALLBACK_CATEGORY
