"""Domain models for the food composition catalog."""

from dataclasses import dataclass, field, fields
from typing import Literal

CATEGORIES: tuple[str, ...] = (
    "全穀雜糧",
    "豆魚蛋肉",
    "海鮮",
    "蔬菜",
    "水果",
    "乳品",
    "油脂/其他",
)
FALLBACK_CATEGORY = "油脂/其他"
ALL_CATEGORIES = "All"


@dataclass(frozen=True)
class NutrientRecord:
    """One food item with its nutrient profile per 100 g edible portion."""

    id: str
    name: str
    category: str
    alias: str | None = None

    # Macros
    cal: float = 0.0
    p: float = 0.0
    f: float = 0.0
    c: float = 0.0
    water: float = 0.0
    ash: float = 0.0
    fiber: float = 0.0
    alcohol: float = 0.0

    # Sugars (g)
    sugar: float = 0.0
    glucose: float = 0.0
    fructose: float = 0.0
    galactose: float = 0.0
    maltose: float = 0.0
    sucrose: float = 0.0
    lactose: float = 0.0

    # Fats (g) and cholesterol (mg)
    sat_fat: float = 0.0
    trans_fat: float = 0.0
    cholesterol: float = 0.0

    # Minerals (mg)
    sodium: float = 0.0
    k: float = 0.0
    ca: float = 0.0
    mg: float = 0.0
    fe: float = 0.0
    zn: float = 0.0
    p_min: float = 0.0
    cu: float = 0.0
    mn: float = 0.0

    # Vitamin A
    vit_a_iu: float = 0.0
    vit_a: float = 0.0
    retinol: float = 0.0
    alpha_carotene: float = 0.0
    beta_carotene: float = 0.0

    # Vitamin D
    vit_d_iu: float = 0.0
    vit_d_ug: float = 0.0
    vit_d2: float = 0.0
    vit_d3: float = 0.0

    # Vitamin E
    vit_e_total: float = 0.0
    vit_e: float = 0.0
    alpha_tocopherol: float = 0.0
    beta_tocopherol: float = 0.0
    gamma_tocopherol: float = 0.0
    delta_tocopherol: float = 0.0

    # Vitamin K
    vit_k1: float = 0.0
    vit_k2_mk4: float = 0.0
    vit_k2_mk7: float = 0.0

    # B vitamins and C
    vit_b1: float = 0.0
    vit_b2: float = 0.0
    niacin: float = 0.0
    vit_b6: float = 0.0
    vit_b12: float = 0.0
    folic_acid: float = 0.0
    vit_c: float = 0.0

    # Saturated fatty acids (mg)
    sfa_total: float = 0.0
    butyric_acid: float = 0.0
    caproic_acid: float = 0.0
    caprylic_acid: float = 0.0
    capric_acid: float = 0.0
    lauric_acid: float = 0.0
    tridecanoic_acid: float = 0.0
    myristic_acid: float = 0.0
    pentadecanoic_acid: float = 0.0
    palmitic_acid: float = 0.0
    heptadecanoic_acid: float = 0.0
    stearic_acid: float = 0.0
    nonadecanoic_acid: float = 0.0
    arachidic_acid: float = 0.0
    behenic_acid: float = 0.0
    lignoceric_acid: float = 0.0

    # Monounsaturated fatty acids (mg)
    mufa_total: float = 0.0
    myristoleic_acid: float = 0.0
    palmitoleic_acid: float = 0.0
    oleic_acid: float = 0.0
    eicosenoic_acid: float = 0.0
    erucic_acid: float = 0.0

    # Polyunsaturated fatty acids (mg)
    pufa_total: float = 0.0
    linoleic_acid: float = 0.0
    linolenic_acid: float = 0.0
    stearidonic_acid: float = 0.0
    arachidonic_acid: float = 0.0
    epa: float = 0.0
    dpa: float = 0.0
    dha: float = 0.0
    other_fatty_acids: float = 0.0
    pms_ratio: float = 0.0

    # Amino acids (mg)
    total_amino_acids: float = 0.0
    aspartic_acid: float = 0.0
    threonine: float = 0.0
    serine: float = 0.0
    glutamic_acid: float = 0.0
    proline: float = 0.0
    glycine: float = 0.0
    alanine: float = 0.0
    cystine: float = 0.0
    valine: float = 0.0
    methionine: float = 0.0
    isoleucine: float = 0.0
    leucine: float = 0.0
    tyrosine: float = 0.0
    phenylalanine: float = 0.0
    lysine: float = 0.0
    histidine: float = 0.0
    arginine: float = 0.0
    tryptophan: float = 0.0

    extras: dict[str, float] = field(default_factory=dict, hash=False, compare=False)

    def nutrient(self, key: str) -> float:
        """Return a nutrient amount per 100 g, or 0 when unknown."""
        if key in NUTRIENT_KEYS:
            return getattr(self, key)
        return self.extras.get(key, 0.0)

    def to_dict(self) -> dict[str, object]:
        """Return a flat JSON-compatible representation."""
        data: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
        }
        if self.alias is not None:
            data["alias"] = self.alias
        for key in NUTRIENT_KEYS:
            data[key] = getattr(self, key)
        for key, value in self.extras.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "NutrientRecord":
        """Rebuild a record from its flat representation."""
        known: dict[str, float] = {}
        extras: dict[str, float] = {}
        for key, value in data.items():
            if key in _IDENTITY_KEYS:
                continue
            if not isinstance(value, int | float) or isinstance(value, bool):
                continue
            if key in NUTRIENT_KEYS:
                known[key] = float(value)
            else:
                extras[key] = float(value)
        alias = data.get("alias")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            category=str(data.get("category") or FALLBACK_CATEGORY),
            alias=str(alias) if alias else None,
            extras=extras,
            **known,
        )


_IDENTITY_KEYS = frozenset({"id", "name", "category", "alias", "extras"})

NUTRIENT_KEYS: tuple[str, ...] = tuple(
    entry.name for entry in fields(NutrientRecord) if entry.name not in _IDENTITY_KEYS
)


NutrientGroup = Literal["macro", "detail", "mineral", "vitamin"]


@dataclass(frozen=True)
class NutrientMeta:
    """Display metadata for a nutrient key."""

    key: str
    label: str
    unit: str
    group: NutrientGroup


NUTRIENT_METADATA: tuple[NutrientMeta, ...] = (
    NutrientMeta("cal", "熱量", "kcal", "macro"),
    NutrientMeta("p", "蛋白質", "g", "macro"),
    NutrientMeta("f", "脂肪", "g", "macro"),
    NutrientMeta("c", "碳水", "g", "macro"),
    NutrientMeta("fiber", "膳食纖維", "g", "detail"),
    NutrientMeta("sugar", "糖質", "g", "detail"),
    NutrientMeta("sat_fat", "飽和脂肪", "g", "detail"),
    NutrientMeta("trans_fat", "反式脂肪", "g", "detail"),
    NutrientMeta("cholesterol", "膽固醇", "mg", "detail"),
    NutrientMeta("sodium", "鈉", "mg", "mineral"),
    NutrientMeta("k", "鉀", "mg", "mineral"),
    NutrientMeta("ca", "鈣", "mg", "mineral"),
    NutrientMeta("mg", "鎂", "mg", "mineral"),
    NutrientMeta("fe", "鐵", "mg", "mineral"),
    NutrientMeta("zn", "鋅", "mg", "mineral"),
    NutrientMeta("p_min", "磷", "mg", "mineral"),
    NutrientMeta("vit_a", "維 A", "ug", "vitamin"),
    NutrientMeta("vit_c", "維 C", "mg", "vitamin"),
    NutrientMeta("vit_b1", "維 B1", "mg", "vitamin"),
    NutrientMeta("vit_b2", "維 B2", "mg", "vitamin"),
    NutrientMeta("vit_b6", "維 B6", "mg", "vitamin"),
    NutrientMeta("vit_b12", "維 B12", "ug", "vitamin"),
    NutrientMeta("vit_e", "維 E", "mg", "vitamin"),
    NutrientMeta("folic_acid", "葉酸", "ug", "vitamin"),
)

DEFAULT_VISIBLE_NUTRIENTS: tuple[str, ...] = ("cal", "p", "f", "c", "fiber", "sodium")


@dataclass(frozen=True)
class CatalogPage:
    """One page of catalog search results."""

    items: list[NutrientRecord]
    page: int
    has_more: bool
