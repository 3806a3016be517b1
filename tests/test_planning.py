"""Tests for exchange plan synthesis."""

import math

import pytest

from nutripro.domain.exchange import (
    FoodGroupId,
    MealTimeId,
    PortionMatrix,
    empty_portion_matrix,
)
from nutripro.services.planning import (
    InvalidPortionError,
    build_plan,
    calorie_gap,
    empty_plan,
    group_calories,
    group_total,
    macro_ratios,
    meal_calories,
    set_portion,
    synthesize,
)


def _example_matrix() -> PortionMatrix:
    matrix = empty_portion_matrix()
    matrix[FoodGroupId.STARCH][MealTimeId.BREAKFAST] = 2
    matrix[FoodGroupId.STARCH][MealTimeId.LUNCH] = 2
    matrix[FoodGroupId.STARCH][MealTimeId.DINNER] = 2
    matrix[FoodGroupId.MEAT_MED][MealTimeId.LUNCH] = 1
    matrix[FoodGroupId.MEAT_LOW][MealTimeId.DINNER] = 2
    matrix[FoodGroupId.VEG][MealTimeId.LUNCH] = 1
    matrix[FoodGroupId.VEG][MealTimeId.DINNER] = 1
    return matrix


def test_synthesize_example_matrix() -> None:
    targets = synthesize(_example_matrix())

    assert targets.target_calories == 655
    assert targets.target_p == 35
    assert targets.target_f == 11
    assert targets.target_c == 100


def test_empty_plan_has_zero_targets() -> None:
    plan = empty_plan()

    assert plan.target_calories == 0
    assert all(
        plan.portions[group][meal] == 0 for group in FoodGroupId for meal in MealTimeId
    )


def test_set_portion_recomputes_targets_and_keeps_original() -> None:
    original = build_plan(_example_matrix())

    updated = set_portion(original, FoodGroupId.FRUIT, MealTimeId.AFTERNOON_SNACK, 1)

    assert updated.target_calories == 715
    assert updated.target_c == 115
    assert original.target_calories == 655
    assert original.portions[FoodGroupId.FRUIT][MealTimeId.AFTERNOON_SNACK] == 0


def test_build_plan_copies_the_matrix() -> None:
    matrix = _example_matrix()
    plan = build_plan(matrix)

    matrix[FoodGroupId.STARCH][MealTimeId.BREAKFAST] = 10

    assert plan.portions[FoodGroupId.STARCH][MealTimeId.BREAKFAST] == 2


@pytest.mark.parametrize("value", [-1, math.nan, math.inf])
def test_set_portion_rejects_invalid_values(value: float) -> None:
    with pytest.raises(InvalidPortionError):
        set_portion(empty_plan(), FoodGroupId.STARCH, MealTimeId.LUNCH, value)


def test_group_and_meal_totals() -> None:
    plan = build_plan(_example_matrix())

    assert group_total(plan, FoodGroupId.STARCH) == 6
    assert group_calories(plan, FoodGroupId.STARCH) == 420
    assert meal_calories(plan, MealTimeId.LUNCH) == 140 + 75 + 25
    assert meal_calories(plan, MealTimeId.MORNING_SNACK) == 0


def test_macro_ratios() -> None:
    ratios = macro_ratios(build_plan(_example_matrix()).targets)

    assert ratios.protein_pct == 21
    assert ratios.fat_pct == 15
    assert ratios.carb_pct == 61


def test_macro_ratios_without_energy() -> None:
    ratios = macro_ratios(empty_plan().targets)

    assert (ratios.protein_pct, ratios.fat_pct, ratios.carb_pct) == (0, 0, 0)


def test_calorie_gap() -> None:
    assert calorie_gap(build_plan(_example_matrix()), 2000) == -1345
