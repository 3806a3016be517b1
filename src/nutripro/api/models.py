"""Request models and response payload builders for the HTTP API."""

from dataclasses import asdict

from pydantic import BaseModel, Field

from nutripro.domain.cases import CaseRecord
from nutripro.domain.catalog import CatalogPage, NutrientRecord
from nutripro.domain.exchange import FoodGroupId, MealTimeId
from nutripro.domain.plans import DietPlan
from nutripro.domain.profile import ActivityLevel, Gender, UserProfile
from nutripro.domain.records import CartItem, DailyRecord
from nutripro.services.metabolic import assess
from nutripro.services.planning import calorie_gap, macro_ratios
from nutripro.services.portions import PortionComparison


class ProfileUpdate(BaseModel):
    """Partial profile edit; omitted fields keep their value."""

    height: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    weight: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    age: int | None = Field(default=None, ge=0)
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    name: str | None = None
    notes: str | None = None


class PortionUpdate(BaseModel):
    """One exchange plan cell."""

    group: FoodGroupId
    meal: MealTimeId
    value: float = Field(ge=0, allow_inf_nan=False)


class CartAdd(BaseModel):
    """Food to stage in the cart."""

    food_id: str


class CartAdjust(BaseModel):
    """Quantity step for a staged food."""

    delta: float = Field(default=0.5, allow_inf_nan=False)


class CartQuantity(BaseModel):
    """Exact amount for a staged food, in 100 g units or in grams."""

    quantity: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    grams: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class FoodImport(BaseModel):
    """Spreadsheet rows keyed by header."""

    rows: list[dict[str, object]]


def food_payload(food: NutrientRecord) -> dict[str, object]:
    return food.to_dict()


def page_payload(page: CatalogPage) -> dict[str, object]:
    return {
        "items": [food_payload(food) for food in page.items],
        "page": page.page,
        "has_more": page.has_more,
    }


def item_payload(item: CartItem) -> dict[str, object]:
    return {
        "food": food_payload(item.food),
        "quantity": item.quantity,
        "grams": item.grams,
    }


def record_payload(record: DailyRecord) -> dict[str, list[dict[str, object]]]:
    return {
        meal.value: [item_payload(item) for item in record.get(meal, [])]
        for meal in MealTimeId
    }


def profile_payload(profile: UserProfile, tdee: int) -> dict[str, object]:
    assessment = assess(profile)
    return {
        "profile": asdict(profile),
        "tdee": tdee,
        "assessment": {
            **asdict(assessment),
            "bmi_status": (
                assessment.bmi_status.value if assessment.bmi_status else None
            ),
        },
    }


def plan_payload(plan: DietPlan, tdee: int) -> dict[str, object]:
    return {
        "target_calories": plan.target_calories,
        "target_p": plan.target_p,
        "target_f": plan.target_f,
        "target_c": plan.target_c,
        "portions": plan.portions,
        "ratios": asdict(macro_ratios(plan.targets)),
        "calorie_gap": calorie_gap(plan, tdee),
    }


def comparison_payload(comparison: PortionComparison) -> dict[str, object]:
    return {
        "group": comparison.group.value,
        "meal": comparison.meal.value,
        "planned": comparison.planned,
        "actual": comparison.actual,
        "deviation": comparison.deviation,
        "status": comparison.status.value,
    }


def case_payload(case: CaseRecord) -> dict[str, object]:
    return {
        "id": case.id,
        "timestamp": case.timestamp,
        "profile": asdict(case.profile),
        "plan": {
            "target_calories": case.plan.target_calories,
            "target_p": case.plan.target_p,
            "target_f": case.plan.target_f,
            "target_c": case.plan.target_c,
            "portions": case.plan.portions,
        },
        "record": record_payload(case.record),
        "summary": asdict(case.summary),
    }
