"""Food catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutripro.api.models import FoodImport, food_payload, page_payload
from nutripro.domain.catalog import CATEGORIES

if TYPE_CHECKING:
    from nutripro.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def search_foods(
    request: Request,
    query: str | None = None,
    category: str | None = None,
    page: int = 0,
) -> dict[str, object]:
    """Search the catalog by name or alias and category."""
    container: AppContainer = request.app.state.container
    result = container.catalog_service.search(query=query, category=category, page=page)
    return page_payload(result)


@router.get("/categories")
async def list_categories() -> dict[str, object]:
    """Return the catalog categories in display order."""
    return {"categories": list(CATEGORIES)}


@router.post("/import")
async def import_foods(body: FoodImport, request: Request) -> dict[str, object]:
    """Normalize uploaded rows into extra catalog foods."""
    container: AppContainer = request.app.state.container
    imported = container.catalog_service.import_rows(body.rows)
    return {
        "imported": len(imported),
        "items": [food_payload(food) for food in imported],
    }
