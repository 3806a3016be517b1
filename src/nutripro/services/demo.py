"""Sample case shown before any case has been saved."""

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from nutripro.domain.cases import CaseRecord
from nutripro.domain.catalog import NutrientRecord
from nutripro.domain.exchange import FoodGroupId, MealTimeId, empty_portion_matrix
from nutripro.domain.profile import ActivityLevel, Gender, UserProfile
from nutripro.domain.records import CartItem, DailyRecord, empty_daily_record
from nutripro.services.cases import build_snapshot
from nutripro.services.planning import build_plan

DEMO_CASE_ID = "demo-case-001"
DEMO_AGE = timedelta(days=2)

DEMO_PROFILE = UserProfile(
    height=176,
    weight=82,
    age=45,
    gender=Gender.MALE,
    activity_level=ActivityLevel.MODERATE,
    name="範例個案 - 陳大明",
    notes="輕微高血壓，建議控制鈉攝取量 (<2300mg)。喜好麵食。",
)

_DEMO_PORTIONS: tuple[tuple[FoodGroupId, MealTimeId, float], ...] = (
    (FoodGroupId.STARCH, MealTimeId.BREAKFAST, 3),
    (FoodGroupId.MEAT_MED, MealTimeId.BREAKFAST, 1),
    (FoodGroupId.STARCH, MealTimeId.LUNCH, 3),
    (FoodGroupId.MEAT_LOW, MealTimeId.LUNCH, 2),
    (FoodGroupId.VEG, MealTimeId.LUNCH, 2),
)

FoodMatcher = Callable[[NutrientRecord], bool]


def _name_has(*keywords: str) -> FoodMatcher:
    return lambda food: any(keyword in food.name for keyword in keywords)


def _category_is(category: str) -> FoodMatcher:
    return lambda food: food.category == category


# Meal -> (matcher, quantity); foods that cannot be found are left out.
_DEMO_MEALS: dict[MealTimeId, tuple[tuple[FoodMatcher, float], ...]] = {
    MealTimeId.LUNCH: (
        (_name_has("糙米", "米飯"), 1.5),
        (_name_has("雞胸", "雞肉"), 1.2),
        (_category_is("蔬菜"), 2),
    ),
    MealTimeId.AFTERNOON_SNACK: ((_name_has("香蕉"), 1),),
    MealTimeId.DINNER: (
        (_name_has("地瓜", "甘藷"), 1.5),
        (_name_has("鮭魚", "魚"), 1),
    ),
}


def build_demo_record(foods: Sequence[NutrientRecord]) -> DailyRecord:
    """Fill a day of meals with catalog foods picked by name or category."""
    record = empty_daily_record()
    if not foods:
        return record
    record[MealTimeId.BREAKFAST].append(CartItem(food=foods[0], quantity=2))
    egg = _first(foods, _name_has("雞蛋", "蛋"))
    if egg is not None:
        record[MealTimeId.BREAKFAST].append(CartItem(food=egg, quantity=1))
    for meal, picks in _DEMO_MEALS.items():
        for matcher, quantity in picks:
            food = _first(foods, matcher)
            if food is not None:
                record[meal].append(CartItem(food=food, quantity=quantity))
    return record


def build_demo_case(
    foods: Sequence[NutrientRecord], *, now: datetime | None = None
) -> CaseRecord:
    """Build the sample case, dated two days before now."""
    portions = empty_portion_matrix()
    for group, meal, value in _DEMO_PORTIONS:
        portions[group][meal] = value
    moment = (now or datetime.now(tz=UTC)) - DEMO_AGE
    case = build_snapshot(
        DEMO_PROFILE, build_plan(portions), build_demo_record(foods), now=moment
    )
    return replace(case, id=DEMO_CASE_ID)


def _first(
    foods: Sequence[NutrientRecord], matcher: FoodMatcher
) -> NutrientRecord | None:
    return next((food for food in foods if matcher(food)), None)
