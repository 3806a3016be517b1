"""Exchange diet plan synthesis."""

import math
from dataclasses import dataclass

from nutripro.domain.exchange import (
    EXCHANGE_STANDARDS,
    FoodGroupId,
    MealTimeId,
    PortionMatrix,
    empty_portion_matrix,
)
from nutripro.domain.plans import DietPlan, MacroTargets
from nutripro.services.metabolic import round_half_up

PROTEIN_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
CARB_KCAL_PER_G = 4


class InvalidPortionError(ValueError):
    """Raised when a portion count is negative or not a finite number."""


@dataclass(frozen=True)
class MacroRatios:
    """Share of planned energy from each macro, in whole percent."""

    protein_pct: int
    fat_pct: int
    carb_pct: int


def synthesize(portions: PortionMatrix) -> MacroTargets:
    """Compute energy and macro targets from a portion matrix."""
    total_cal = 0.0
    total_p = 0.0
    total_f = 0.0
    total_c = 0.0
    for group in FoodGroupId:
        group_portions = sum(portions.get(group, {}).get(meal, 0.0) for meal in MealTimeId)
        standard = EXCHANGE_STANDARDS[group]
        total_p += group_portions * standard.p
        total_f += group_portions * standard.f
        total_c += group_portions * standard.c
        total_cal += group_portions * standard.cal
    return MacroTargets(
        target_calories=total_cal,
        target_p=total_p,
        target_f=total_f,
        target_c=total_c,
    )


def build_plan(portions: PortionMatrix) -> DietPlan:
    """Build a plan whose targets are derived from a full copy of the matrix."""
    matrix = empty_portion_matrix()
    for group, meals in portions.items():
        for meal, value in meals.items():
            matrix[FoodGroupId(group)][MealTimeId(meal)] = float(value)
    targets = synthesize(matrix)
    return DietPlan(
        target_calories=targets.target_calories,
        target_p=targets.target_p,
        target_f=targets.target_f,
        target_c=targets.target_c,
        portions=matrix,
    )


def empty_plan() -> DietPlan:
    """Return a plan with no portions allocated."""
    return build_plan(empty_portion_matrix())


def set_portion(
    plan: DietPlan, group: FoodGroupId, meal: MealTimeId, value: float
) -> DietPlan:
    """Return a new plan with one cell changed and all targets recomputed."""
    if not math.isfinite(value) or value < 0:
        raise InvalidPortionError(f"Invalid portion count: {value}")
    portions = {g: dict(meals) for g, meals in plan.portions.items()}
    portions.setdefault(group, {})[meal] = float(value)
    return build_plan(portions)


def group_total(plan: DietPlan, group: FoodGroupId) -> float:
    """Portions of a group summed across all meals."""
    return sum(plan.portions[group].values())


def group_calories(plan: DietPlan, group: FoodGroupId) -> float:
    """Energy contributed by a group across the day."""
    return group_total(plan, group) * EXCHANGE_STANDARDS[group].cal


def meal_calories(plan: DietPlan, meal: MealTimeId) -> float:
    """Energy planned for a single meal slot."""
    return sum(
        plan.portions[group][meal] * EXCHANGE_STANDARDS[group].cal
        for group in FoodGroupId
    )


def macro_ratios(targets: MacroTargets) -> MacroRatios:
    """Percent of target energy supplied by protein, fat and carbohydrate."""
    if targets.target_calories <= 0:
        return MacroRatios(protein_pct=0, fat_pct=0, carb_pct=0)
    return MacroRatios(
        protein_pct=_percent(targets.target_p * PROTEIN_KCAL_PER_G, targets),
        fat_pct=_percent(targets.target_f * FAT_KCAL_PER_G, targets),
        carb_pct=_percent(targets.target_c * CARB_KCAL_PER_G, targets),
    )


def _percent(kcal: float, targets: MacroTargets) -> int:
    return int(round_half_up(kcal / targets.target_calories * 100))


def calorie_gap(plan: DietPlan, tdee: float) -> float:
    """Planned energy minus the estimated expenditure."""
    return plan.target_calories - tdee
