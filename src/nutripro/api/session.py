"""Endpoints for the active dietitian session."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from nutripro.api.models import (
    CartAdd,
    CartAdjust,
    CartQuantity,
    PortionUpdate,
    ProfileUpdate,
    comparison_payload,
    item_payload,
    plan_payload,
    profile_payload,
    record_payload,
)
from nutripro.domain.catalog import NUTRIENT_METADATA
from nutripro.domain.exchange import MealTimeId
from nutripro.services.planning import InvalidPortionError
from nutripro.services.records import meal_totals, record_totals
from nutripro.services.session import DietitianSession, UnknownNutrientError

if TYPE_CHECKING:
    from nutripro.containers import AppContainer

router = APIRouter(tags=["session"])


def _session(request: Request) -> DietitianSession:
    container: AppContainer = request.app.state.container
    return container.session


def _cart_payload(session: DietitianSession) -> dict[str, object]:
    return {
        "items": [item_payload(item) for item in session.cart.items],
        "totals": session.cart.totals(session.visible_nutrients),
    }


@router.get("/profile")
async def get_profile(request: Request) -> dict[str, object]:
    """Return the profile with its body assessment and TDEE."""
    session = _session(request)
    return profile_payload(session.profile, session.tdee)


@router.put("/profile")
async def update_profile(body: ProfileUpdate, request: Request) -> dict[str, object]:
    """Edit profile fields and recompute the TDEE."""
    session = _session(request)
    session.update_profile(**body.model_dump(exclude_none=True))
    return profile_payload(session.profile, session.tdee)


@router.get("/plan")
async def get_plan(request: Request) -> dict[str, object]:
    """Return the exchange plan with targets and macro split."""
    session = _session(request)
    return plan_payload(session.plan, session.tdee)


@router.put("/plan/portions")
async def update_portion(body: PortionUpdate, request: Request) -> dict[str, object]:
    """Set one plan cell."""
    session = _session(request)
    try:
        session.set_portion(body.group, body.meal, body.value)
    except InvalidPortionError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return plan_payload(session.plan, session.tdee)


@router.get("/cart")
async def get_cart(request: Request) -> dict[str, object]:
    """Return staged foods and their totals."""
    return _cart_payload(_session(request))


@router.post("/cart")
async def add_to_cart(body: CartAdd, request: Request) -> dict[str, object]:
    """Stage one unit of a catalog food."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.get(body.food_id)
    if food is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
    container.session.cart.add(food)
    return _cart_payload(container.session)


@router.post("/cart/{food_id}/adjust")
async def adjust_cart_item(
    food_id: str, body: CartAdjust, request: Request
) -> dict[str, object]:
    """Step a staged quantity up or down."""
    session = _session(request)
    session.cart.adjust(food_id, body.delta)
    return _cart_payload(session)


@router.put("/cart/{food_id}")
async def set_cart_item(
    food_id: str, body: CartQuantity, request: Request
) -> dict[str, object]:
    """Set a staged quantity, in grams when given."""
    session = _session(request)
    if body.grams is not None:
        session.cart.set_grams(food_id, body.grams)
    elif body.quantity is not None:
        session.cart.set_quantity(food_id, body.quantity)
    return _cart_payload(session)


@router.delete("/cart/{food_id}")
async def remove_cart_item(food_id: str, request: Request) -> dict[str, object]:
    """Drop a staged food."""
    session = _session(request)
    session.cart.remove(food_id)
    return _cart_payload(session)


@router.delete("/cart")
async def clear_cart(request: Request) -> dict[str, object]:
    """Empty the cart."""
    session = _session(request)
    session.cart.clear()
    return _cart_payload(session)


@router.get("/record")
async def get_record(request: Request) -> dict[str, object]:
    """Return the food log with per-meal and daily totals."""
    session = _session(request)
    return {
        "meals": record_payload(session.record),
        "meal_totals": {
            meal.value: asdict(meal_totals(session.record.get(meal, [])))
            for meal in MealTimeId
        },
        "totals": asdict(record_totals(session.record)),
    }


@router.post("/record/{meal}")
async def log_cart(meal: MealTimeId, request: Request) -> dict[str, object]:
    """Move the cart into a meal."""
    session = _session(request)
    logged = session.log_cart(meal)
    return {"logged": len(logged), "meals": record_payload(session.record)}


@router.delete("/record/{meal}/{index}")
async def remove_logged_item(
    meal: MealTimeId, index: int, request: Request
) -> dict[str, object]:
    """Remove a logged food by position."""
    session = _session(request)
    session.remove_logged(meal, index)
    return {"meals": record_payload(session.record)}


@router.get("/analysis")
async def get_analysis(request: Request) -> dict[str, object]:
    """Compare the plan with the estimated portions of the logged food."""
    session = _session(request)
    return {
        "actual": session.actual_portions(),
        "comparisons": [comparison_payload(item) for item in session.comparison()],
        "totals": asdict(record_totals(session.record)),
    }


@router.get("/settings/nutrients")
async def get_visible_nutrients(request: Request) -> dict[str, object]:
    """Return the displayed nutrient keys and the keys that can be shown."""
    session = _session(request)
    return {
        "visible": session.visible_nutrients,
        "available": [asdict(meta) for meta in NUTRIENT_METADATA],
    }


@router.put("/settings/nutrients/{key}")
async def toggle_visible_nutrient(key: str, request: Request) -> dict[str, object]:
    """Show or hide one nutrient in cart totals."""
    session = _session(request)
    try:
        visible = session.toggle_nutrient(key)
    except UnknownNutrientError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown nutrient: {key}"
        ) from exc
    return {"visible": visible}
