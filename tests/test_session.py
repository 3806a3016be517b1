"""Tests for the dietitian session workflow."""

import pytest

from nutripro.adapters.json_case_repository import InMemoryCaseRepository
from nutripro.domain.catalog import DEFAULT_VISIBLE_NUTRIENTS
from nutripro.domain.exchange import FoodGroupId, MealTimeId
from nutripro.domain.profile import ActivityLevel, Gender
from nutripro.services.cases import CaseService
from nutripro.services.portions import Deviation
from nutripro.services.session import (
    DEFAULT_TDEE,
    DietitianSession,
    UnknownNutrientError,
)
from tests.conftest import make_food


def test_profile_edits_refresh_tdee() -> None:
    session = DietitianSession()
    assert session.tdee == DEFAULT_TDEE

    session.update_profile(height=176, weight=82)
    session.update_profile(age=45, gender=Gender.MALE)

    assert session.tdee == 2635

    session.update_profile(activity_level=ActivityLevel.SEDENTARY)
    assert session.tdee == 2040


def test_incomplete_profile_keeps_previous_tdee() -> None:
    session = DietitianSession()
    session.update_profile(height=176, weight=82, age=45)

    session.update_profile(weight=0)

    assert session.tdee == 2635


def test_log_cart_moves_items_and_clears_cart() -> None:
    session = DietitianSession()
    session.cart.add(make_food("rice", category="全穀雜糧", cal=180, c=30))
    session.cart.set_quantity("rice", 1.5)

    logged = session.log_cart(MealTimeId.LUNCH)

    assert len(logged) == 1
    assert session.cart.items == []
    assert session.record[MealTimeId.LUNCH][0].quantity == 1.5
    assert session.actual_portions()[FoodGroupId.STARCH][MealTimeId.LUNCH] == 3.0


def test_remove_logged_item() -> None:
    session = DietitianSession()
    session.cart.add(make_food("rice"))
    session.log_cart(MealTimeId.DINNER)

    session.remove_logged(MealTimeId.DINNER, 0)

    assert session.record[MealTimeId.DINNER] == []


def test_comparison_reflects_plan_and_record() -> None:
    session = DietitianSession()
    session.set_portion(FoodGroupId.STARCH, MealTimeId.LUNCH, 3)
    session.cart.add(make_food("rice", category="全穀雜糧", c=30))
    session.cart.set_quantity("rice", 1.5)
    session.log_cart(MealTimeId.LUNCH)

    statuses = {
        (item.group, item.meal): item.status for item in session.comparison()
    }

    assert session.plan.target_calories == 210
    assert statuses[(FoodGroupId.STARCH, MealTimeId.LUNCH)] == Deviation.ON_TARGET
    assert statuses[(FoodGroupId.FAT, MealTimeId.LUNCH)] == Deviation.NO_DATA


def test_save_and_load_case_restores_state() -> None:
    service = CaseService(InMemoryCaseRepository())
    session = DietitianSession()
    session.update_profile(height=160, weight=55, age=30, gender=Gender.FEMALE)
    session.set_portion(FoodGroupId.FRUIT, MealTimeId.AFTERNOON_SNACK, 2)
    session.cart.add(make_food("banana", category="水果", cal=85, c=22))
    session.log_cart(MealTimeId.AFTERNOON_SNACK)
    case = session.save_case(service)

    fresh = DietitianSession()
    fresh.load_case(case)

    assert fresh.profile == session.profile
    assert fresh.plan.targets == session.plan.targets
    assert fresh.tdee == session.tdee
    assert len(fresh.record[MealTimeId.AFTERNOON_SNACK]) == 1

    fresh.remove_logged(MealTimeId.AFTERNOON_SNACK, 0)
    assert len(case.record[MealTimeId.AFTERNOON_SNACK]) == 1


def test_toggle_nutrient_shows_and_hides() -> None:
    session = DietitianSession()

    session.toggle_nutrient("vit_c")
    assert session.visible_nutrients[-1] == "vit_c"

    session.toggle_nutrient("sodium")
    assert "sodium" not in session.visible_nutrients


def test_toggle_keeps_energy_when_it_is_the_last_column() -> None:
    session = DietitianSession(visible_nutrients=["cal", "p"])

    session.toggle_nutrient("p")
    session.toggle_nutrient("cal")

    assert session.visible_nutrients == ["cal"]


def test_toggle_allows_hiding_energy_among_others() -> None:
    session = DietitianSession(visible_nutrients=["cal", "p"])

    assert session.toggle_nutrient("cal") == ["p"]


def test_toggle_rejects_unknown_nutrient() -> None:
    session = DietitianSession()

    with pytest.raises(UnknownNutrientError):
        session.toggle_nutrient("caffeine")
    assert session.visible_nutrients == list(DEFAULT_VISIBLE_NUTRIENTS)
