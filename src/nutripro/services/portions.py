"""Estimate exchange portions from logged food and compare with the plan."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from nutripro.domain.exchange import (
    EXCHANGE_STANDARDS,
    FoodGroupId,
    MealTimeId,
    PortionMatrix,
    empty_portion_matrix,
)
from nutripro.domain.plans import DietPlan
from nutripro.domain.records import CartItem, DailyRecord

MEAT_MED_FAT_THRESHOLD_G = 5
ON_TARGET_TOLERANCE = 0.3
OFF_TARGET_MARGIN = 1
_DEVIATION_DIGITS = 9

_CATEGORY_GROUPS: dict[str, FoodGroupId] = {
    "全穀雜糧": FoodGroupId.STARCH,
    "蔬菜": FoodGroupId.VEG,
    "水果": FoodGroupId.FRUIT,
    "海鮮": FoodGroupId.MEAT_LOW,
    "乳品": FoodGroupId.DAIRY_MED,
    "油脂/其他": FoodGroupId.FAT,
}
_CARB_GROUPS = frozenset({FoodGroupId.STARCH, FoodGroupId.FRUIT})
_PROTEIN_GROUPS = frozenset(
    {
        FoodGroupId.MEAT_LOW,
        FoodGroupId.MEAT_MED,
        FoodGroupId.DAIRY_LOW,
        FoodGroupId.DAIRY_MED,
    }
)


class Deviation(Enum):
    """How an actual portion count compares with the planned one."""

    NO_DATA = "no_data"
    ON_TARGET = "on_target"
    OVER = "over"
    UNDER = "under"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class PortionComparison:
    """Planned versus estimated portions for one group and meal."""

    group: FoodGroupId
    meal: MealTimeId
    planned: float
    actual: float
    deviation: float
    status: Deviation


def exchange_group_for(item: CartItem) -> FoodGroupId:
    """Map a logged food's catalog category to its exchange group."""
    category = item.food.category
    if category == "豆魚蛋肉":
        if item.food.f > MEAT_MED_FAT_THRESHOLD_G:
            return FoodGroupId.MEAT_MED
        return FoodGroupId.MEAT_LOW
    return _CATEGORY_GROUPS.get(category, FoodGroupId.FAT)


def portion_count(item: CartItem, group: FoodGroupId) -> float:
    """Portions of a group supplied by one item, by the group's dominant macro."""
    standard = EXCHANGE_STANDARDS[group]
    if group in _CARB_GROUPS:
        return item.food.c * item.quantity / standard.c
    if group == FoodGroupId.VEG:
        return item.quantity
    if group in _PROTEIN_GROUPS:
        return item.food.p * item.quantity / standard.p
    return item.food.f * item.quantity / standard.f


def estimate_actual_portions(items: Iterable[CartItem]) -> dict[FoodGroupId, float]:
    """Sum estimated portions per exchange group."""
    totals = {group: 0.0 for group in FoodGroupId}
    for item in items:
        group = exchange_group_for(item)
        totals[group] += portion_count(item, group)
    return totals


def estimate_portion_matrix(record: DailyRecord) -> PortionMatrix:
    """Estimate portions per group and meal, shaped like a plan matrix."""
    matrix = empty_portion_matrix()
    for meal in MealTimeId:
        totals = estimate_actual_portions(record.get(meal, []))
        for group, value in totals.items():
            matrix[group][meal] = value
    return matrix


def classify_deviation(planned: float, actual: float) -> Deviation:
    """Classify actual minus planned against the display thresholds."""
    if planned == 0 and actual == 0:
        return Deviation.NO_DATA
    # Rounded so that 2.3 - 2 compares as exactly 0.3.
    diff = round(actual - planned, _DEVIATION_DIGITS)
    if abs(diff) < ON_TARGET_TOLERANCE:
        return Deviation.ON_TARGET
    if diff > OFF_TARGET_MARGIN:
        return Deviation.OVER
    if diff < -OFF_TARGET_MARGIN:
        return Deviation.UNDER
    return Deviation.NEUTRAL


def compare_plan(plan: DietPlan, record: DailyRecord) -> list[PortionComparison]:
    """Compare every plan cell with the estimated actual portions."""
    actual = estimate_portion_matrix(record)
    comparisons: list[PortionComparison] = []
    for group in FoodGroupId:
        for meal in MealTimeId:
            planned = plan.portions.get(group, {}).get(meal, 0.0)
            value = actual[group][meal]
            comparisons.append(
                PortionComparison(
                    group=group,
                    meal=meal,
                    planned=planned,
                    actual=value,
                    deviation=value - planned,
                    status=classify_deviation(planned, value),
                )
            )
    return comparisons
