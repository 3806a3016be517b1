"""Food catalog normalization and lookup."""

import logging
import math
import re
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from nutripro.adapters.food_source import FoodRowSource
from nutripro.domain.catalog import (
    ALL_CATEGORIES,
    NUTRIENT_KEYS,
    CatalogPage,
    NutrientRecord,
)
from nutripro.services.classifier import classify_category

_logger = logging.getLogger(__name__)

NAME_FIELD = "name"
ALIAS_FIELD = "alias"
CATEGORY_FIELD = "cat"
TRANS_FAT_HEADER = "反式脂肪(mg)"

# Spreadsheet header -> record field, as used by the startup load and imports.
HEADER_MAP: dict[str, str] = {
    "樣品名稱": NAME_FIELD,
    "俗名": ALIAS_FIELD,
    "食品分類": CATEGORY_FIELD,
    "熱量(kcal)": "cal",
    "粗蛋白(g)": "p",
    "粗脂肪(g)": "f",
    "總碳水化合物(g)": "c",
    "膳食纖維(g)": "fiber",
    "糖質總量(g)": "sugar",
    "飽和脂肪(g)": "sat_fat",
    TRANS_FAT_HEADER: "trans_fat",
    "膽固醇(mg)": "cholesterol",
    "鈉(mg)": "sodium",
    "鉀(mg)": "k",
    "鈣(mg)": "ca",
    "鎂(mg)": "mg",
    "鐵(mg)": "fe",
    "鋅(mg)": "zn",
    "磷(mg)": "p_min",
    "銅(mg)": "cu",
    "錳(mg)": "mn",
    "視網醇當量(RE)(ug)": "vit_a",
    "維生素B1(mg)": "vit_b1",
    "維生素B2(mg)": "vit_b2",
    "維生素B6(mg)": "vit_b6",
    "維生素B12(ug)": "vit_b12",
    "維生素C(mg)": "vit_c",
    "α-維生素E當量(α-TE)(mg)": "vit_e",
    "葉酸(ug)": "folic_acid",
    "菸鹼素(mg)": "niacin",
}

# Full food composition database layout.
EXTENDED_HEADER_MAP: dict[str, str] = {
    "樣品名稱": NAME_FIELD,
    "俗名": ALIAS_FIELD,
    "食品分類": CATEGORY_FIELD,
    "熱量(kcal)": "cal",
    "水分(g)": "water",
    "粗蛋白(g)": "p",
    "粗脂肪(g)": "f",
    "飽和脂肪(g)": "sat_fat",
    "灰分(g)": "ash",
    "總碳水化合物(g)": "c",
    "膳食纖維(g)": "fiber",
    "糖質總量(g)": "sugar",
    "葡萄糖(g)": "glucose",
    "果糖(g)": "fructose",
    "半乳糖(g)": "galactose",
    "麥芽糖(g)": "maltose",
    "蔗糖(g)": "sucrose",
    "乳糖(g)": "lactose",
    TRANS_FAT_HEADER: "trans_fat",
    "膽固醇(mg)": "cholesterol",
    "鈉(mg)": "sodium",
    "鉀(mg)": "k",
    "鈣(mg)": "ca",
    "鎂(mg)": "mg",
    "鐵(mg)": "fe",
    "鋅(mg)": "zn",
    "磷(mg)": "p_min",
    "銅(mg)": "cu",
    "錳(mg)": "mn",
    "維生素A總量(IU)": "vit_a_iu",
    "視網醇當量(RE)(ug)": "vit_a",
    "視網醇(ug)": "retinol",
    "α-胡蘿蔔素(ug)": "alpha_carotene",
    "β-胡蘿蔔素(ug)": "beta_carotene",
    "維生素D總量(IU)": "vit_d_iu",
    "維生素D總量(ug)": "vit_d_ug",
    "維生素D2(ug)": "vit_d2",
    "維生素D3(ug)": "vit_d3",
    "維生素E總量(mg)": "vit_e_total",
    "α-維生素E當量(α-TE)(mg)": "vit_e",
    "α-生育酚(mg)": "alpha_tocopherol",
    "β-生育酚(mg)": "beta_tocopherol",
    "γ-生育酚(mg)": "gamma_tocopherol",
    "δ-生育酚(mg)": "delta_tocopherol",
    "維生素K1(ug)": "vit_k1",
    "維生素K2 (MK-4)(ug)": "vit_k2_mk4",
    "維生素K2 (MK-7)(ug)": "vit_k2_mk7",
    "維生素B1(mg)": "vit_b1",
    "維生素B2(mg)": "vit_b2",
    "菸鹼素(mg)": "niacin",
    "維生素B6(mg)": "vit_b6",
    "維生素B12(ug)": "vit_b12",
    "葉酸(ug)": "folic_acid",
    "維生素C(mg)": "vit_c",
    "脂肪酸S總量(mg)": "sfa_total",
    "酪酸(4:0)(mg)": "butyric_acid",
    "己酸(6:0)(mg)": "caproic_acid",
    "辛酸(8:0)(mg)": "caprylic_acid",
    "癸酸(10:0)(mg)": "capric_acid",
    "月桂酸(12:0)(mg)": "lauric_acid",
    "十三酸(13:0)(mg)": "tridecanoic_acid",
    "肉豆蔻酸(14:0)(mg)": "myristic_acid",
    "十五酸(15:0)(mg)": "pentadecanoic_acid",
    "棕櫚酸(16:0)(mg)": "palmitic_acid",
    "十七酸(17:0)(mg)": "heptadecanoic_acid",
    "硬脂酸(18:0)(mg)": "stearic_acid",
    "十九酸(19:0)(mg)": "nonadecanoic_acid",
    "花生酸(20:0)(mg)": "arachidic_acid",
    "山酸(22:0)(mg)": "behenic_acid",
    "廿四酸(24:0)(mg)": "lignoceric_acid",
    "脂肪酸M總量(mg)": "mufa_total",
    "肉豆蔻烯酸(14:1)(mg)": "myristoleic_acid",
    "棕櫚烯酸(16:1)(mg)": "palmitoleic_acid",
    "油酸(18:1)(mg)": "oleic_acid",
    "鱈烯酸(20:1)(mg)": "eicosenoic_acid",
    "芥子酸(22:1)(mg)": "erucic_acid",
    "脂肪酸P總量(mg)": "pufa_total",
    "亞麻油酸(18:2)(mg)": "linoleic_acid",
    "次亞麻油酸(18:3)(mg)": "linolenic_acid",
    "十八碳四烯酸(18:4)(mg)": "stearidonic_acid",
    "花生油酸(20:4)(mg)": "arachidonic_acid",
    "廿碳五烯酸(20:5)(mg)": "epa",
    "廿二碳五烯酸(22:5)(mg)": "dpa",
    "廿二碳六烯酸(22:6)(mg)": "dha",
    "其他脂肪酸(mg)": "other_fatty_acids",
    "P/M/S": "pms_ratio",
    "水解胺基酸總量(mg)": "total_amino_acids",
    "天門冬胺酸(Asp)(mg)": "aspartic_acid",
    "酥胺酸(Thr)(mg)": "threonine",
    "絲胺酸(Ser)(mg)": "serine",
    "麩胺酸(Glu)(mg)": "glutamic_acid",
    "脯胺酸(Pro)(mg)": "proline",
    "甘胺酸(Gly)(mg)": "glycine",
    "丙胺酸(Ala)(mg)": "alanine",
    "胱胺酸(Cys)(mg)": "cystine",
    "纈胺酸(Val)(mg)": "valine",
    "甲硫胺酸(Met)(mg)": "methionine",
    "異白胺酸(Ile)(mg)": "isoleucine",
    "白胺酸(Leu)(mg)": "leucine",
    "酪胺酸(Tyr)(mg)": "tyrosine",
    "苯丙胺酸(Phe)(mg)": "phenylalanine",
    "離胺酸(Lys)(mg)": "lysine",
    "組胺酸(His)(mg)": "histidine",
    "精胺酸(Arg)(mg)": "arginine",
    "色胺酸(Trp)(mg)": "tryptophan",
    "酒精含量(g)": "alcohol",
}

_MISSING_TOKENS = ("", "N/A", "-")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class CatalogLoadError(RuntimeError):
    """Raised when the food catalog cannot be loaded from its source."""


def normalize_rows(  # noqa: PLR0913
    rows: Iterable[Mapping[str, object]],
    *,
    id_prefix: str = "food_",
    id_start: int = 1,
    headers: Mapping[str, str] = HEADER_MAP,
    keep_unknown_numeric: bool = False,
) -> list[NutrientRecord]:
    """Convert raw spreadsheet rows into valid nutrient records.

    Rows without a name or with non-positive calories are skipped; they are
    expected noise in composition spreadsheets (header rows, notes).
    """
    records: list[NutrientRecord] = []
    for index, row in enumerate(rows):
        record = normalize_row(
            row,
            record_id=f"{id_prefix}{index + id_start}",
            headers=headers,
            keep_unknown_numeric=keep_unknown_numeric,
        )
        if record is not None:
            records.append(record)
    return records


def normalize_row(
    row: Mapping[str, object],
    *,
    record_id: str,
    headers: Mapping[str, str] = HEADER_MAP,
    keep_unknown_numeric: bool = False,
) -> NutrientRecord | None:
    """Normalize a single row, returning None when the row is not usable."""
    name = ""
    alias: str | None = None
    category = classify_category(None)
    values: dict[str, float] = {}
    extras: dict[str, float] = {}

    for header, target in headers.items():
        raw = row.get(header)
        value = _substitute_missing(raw)
        if target == NAME_FIELD:
            if not value:
                return None
            name = str(value).strip()
            if not name:
                return None
        elif target == ALIAS_FIELD:
            if value:
                alias = _clean_alias(value)
        elif target == CATEGORY_FIELD:
            category = classify_category(raw)
        else:
            number = _parse_float(value)
            if header == TRANS_FAT_HEADER:
                number = number / 1000
            if target in NUTRIENT_KEYS:
                values[target] = number
            else:
                extras[target] = number

    if keep_unknown_numeric:
        for header, raw in row.items():
            if header in headers:
                continue
            number = _parse_float(_substitute_missing(raw))
            if number:
                extras[str(header)] = number

    if values.get("cal", 0.0) <= 0:
        return None
    return NutrientRecord(
        id=record_id,
        name=name,
        category=category,
        alias=alias,
        extras=extras,
        **values,
    )


def _substitute_missing(value: object) -> object:
    if value is None:
        return 0
    if isinstance(value, str) and value in _MISSING_TOKENS:
        return 0
    return value


def _clean_alias(value: object) -> str | None:
    parts = [part.strip() for part in str(value).strip().split(",")]
    cleaned = [part for part in parts if part]
    if not cleaned:
        return None
    return ", ".join(cleaned)


def _parse_float(value: object) -> float:
    """Parse the leading number of a cell, clamped to finite non-negatives."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match is None:
            return 0.0
        number = float(match.group(1))
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


@dataclass
class CatalogService:
    """Process-wide food catalog with user-imported extensions."""

    source: FoodRowSource
    page_size: int = 20
    headers: Mapping[str, str] = field(default_factory=lambda: HEADER_MAP)
    foods: list[NutrientRecord] = field(default_factory=list)
    extra_foods: list[NutrientRecord] = field(default_factory=list)
    is_loading: bool = False
    load_error: str | None = None

    async def load(self) -> int:
        """Load the base catalog once from the configured source."""
        self.is_loading = True
        try:
            rows = await self.source.fetch_rows()
        except Exception as exc:
            self.load_error = str(exc) or exc.__class__.__name__
            _logger.exception("Failed to load food catalog")
            raise CatalogLoadError(self.load_error) from exc
        finally:
            self.is_loading = False
        foods = normalize_rows(rows, headers=self.headers)
        self.foods = foods
        self.load_error = None
        _logger.info(
            "Food catalog loaded: kept=%s dropped=%s", len(foods), len(rows) - len(foods)
        )
        return len(foods)

    def import_rows(self, rows: list[Mapping[str, object]]) -> list[NutrientRecord]:
        """Normalize user-imported rows and prepend them to the extra foods."""
        prefix = f"imported_{time.time_ns() // 1_000_000}_"
        imported = normalize_rows(rows, id_prefix=prefix, id_start=0, headers=self.headers)
        self.extra_foods = [*imported, *self.extra_foods]
        _logger.info("Imported foods: kept=%s rows=%s", len(imported), len(rows))
        return imported

    def all_foods(self) -> list[NutrientRecord]:
        """Return imported foods followed by the base catalog."""
        return [*self.extra_foods, *self.foods]

    def get(self, food_id: str) -> NutrientRecord | None:
        """Return a food by id from either list."""
        for food in self.all_foods():
            if food.id == food_id:
                return food
        return None

    def search(
        self,
        query: str | None = None,
        category: str | None = None,
        page: int = 0,
        page_size: int | None = None,
    ) -> CatalogPage:
        """Filter by name or alias substring and category, then paginate."""
        limit = page_size or self.page_size
        matches = [
            food
            for food in self.all_foods()
            if _matches_query(food, query) and _matches_category(food, category)
        ]
        start = max(page, 0) * limit
        items = matches[start : start + limit]
        return CatalogPage(items=items, page=page, has_more=len(items) >= limit)


def _matches_query(food: NutrientRecord, query: str | None) -> bool:
    if not query:
        return True
    needle = query.lower()
    if needle in food.name.lower():
        return True
    return bool(food.alias and needle in food.alias.lower())


def _matches_category(food: NutrientRecord, category: str | None) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return food.category == category
