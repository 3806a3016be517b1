"""Keyword classifier for raw food category labels."""

from nutripro.domain.catalog import FALLBACK_CATEGORY

# Checked in order; the first rule with a matching keyword wins.
_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("全穀雜糧", ("穀", "澱粉", "米", "麵")),
    ("豆魚蛋肉", ("肉", "蛋", "豆")),
    ("海鮮", ("魚", "貝", "蝦", "蟹")),
    ("蔬菜", ("菜", "菇", "藻")),
)
_FRUIT_KEYWORD = "果"
_NUT_KEYWORD = "堅果"
_DAIRY_KEYWORDS = ("乳", "奶")


def classify_category(raw_label: object) -> str:
    """Map a free-text category label to a canonical catalog category."""
    if not raw_label:
        return FALLBACK_CATEGORY
    label = str(raw_label)
    for category, keywords in _RULES:
        if any(keyword in label for keyword in keywords):
            return category
    if _FRUIT_KEYWORD in label and _NUT_KEYWORD not in label:
        return "水果"
    if any(keyword in label for keyword in _DAIRY_KEYWORDS):
        return "乳品"
    return FALLBACK_CATEGORY
