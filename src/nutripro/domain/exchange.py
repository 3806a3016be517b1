"""Food exchange system: groups, meal slots and per-portion standards."""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class FoodGroupId(StrEnum):
    """Fine-grained exchange subgroups."""

    STARCH = "starch"
    MEAT_LOW = "meat_low"
    MEAT_MED = "meat_med"
    DAIRY_LOW = "dairy_low"
    DAIRY_MED = "dairy_med"
    VEG = "veg"
    FRUIT = "fruit"
    FAT = "fat"
    NUT = "nut"


class MealTimeId(StrEnum):
    """Fixed daily meal and snack slots."""

    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"
    EVENING_SNACK = "evening_snack"


FOOD_GROUP_LABELS: dict[FoodGroupId, str] = {
    FoodGroupId.STARCH: "全榖雜糧類",
    FoodGroupId.MEAT_LOW: "豆魚蛋肉(低脂)",
    FoodGroupId.MEAT_MED: "豆魚蛋肉(中脂)",
    FoodGroupId.DAIRY_LOW: "乳品類(低脂)",
    FoodGroupId.DAIRY_MED: "乳品類(中脂)",
    FoodGroupId.VEG: "蔬菜類",
    FoodGroupId.FRUIT: "水果類",
    FoodGroupId.FAT: "油脂類",
    FoodGroupId.NUT: "堅果種子類",
}

MEAL_TIME_LABELS: dict[MealTimeId, str] = {
    MealTimeId.BREAKFAST: "早餐",
    MealTimeId.MORNING_SNACK: "早點",
    MealTimeId.LUNCH: "午餐",
    MealTimeId.AFTERNOON_SNACK: "午點",
    MealTimeId.DINNER: "晚餐",
    MealTimeId.EVENING_SNACK: "晚點",
}


@dataclass(frozen=True)
class ExchangeStandard:
    """Macro and energy content of one exchange portion."""

    p: float
    f: float
    c: float
    cal: float


EXCHANGE_STANDARDS: MappingProxyType[FoodGroupId, ExchangeStandard] = MappingProxyType(
    {
        FoodGroupId.STARCH: ExchangeStandard(p=2, f=0, c=15, cal=70),
        FoodGroupId.MEAT_LOW: ExchangeStandard(p=7, f=3, c=0, cal=55),
        FoodGroupId.MEAT_MED: ExchangeStandard(p=7, f=5, c=0, cal=75),
        FoodGroupId.DAIRY_LOW: ExchangeStandard(p=8, f=4, c=12, cal=120),
        FoodGroupId.DAIRY_MED: ExchangeStandard(p=8, f=8, c=12, cal=150),
        FoodGroupId.VEG: ExchangeStandard(p=1, f=0, c=5, cal=25),
        FoodGroupId.FRUIT: ExchangeStandard(p=0, f=0, c=15, cal=60),
        FoodGroupId.FAT: ExchangeStandard(p=0, f=5, c=0, cal=45),
        FoodGroupId.NUT: ExchangeStandard(p=0, f=5, c=0, cal=45),
    }
)

PortionMatrix = dict[FoodGroupId, dict[MealTimeId, float]]


def empty_portion_matrix() -> PortionMatrix:
    """Return a matrix with every group and meal cell set to zero."""
    return {group: {meal: 0.0 for meal in MealTimeId} for group in FoodGroupId}
