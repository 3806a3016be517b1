"""Saved-case endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from nutripro.api.models import case_payload, profile_payload
from nutripro.config import resolve_timezone
from nutripro.services.cases import CaseNotFoundError, calorie_achievement
from nutripro.services.reports import (
    case_profile_rows,
    case_summary_rows,
    meal_log_rows,
    nutrient_total_rows,
)

if TYPE_CHECKING:
    from nutripro.containers import AppContainer

router = APIRouter(prefix="/cases", tags=["cases"])


def _not_found(exc: CaseNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"Case not found: {exc}"
    )


@router.get("")
async def list_cases(request: Request) -> dict[str, object]:
    """Return saved cases, newest first."""
    container: AppContainer = request.app.state.container
    return {
        "cases": [
            {**case_payload(case), "achievement": calorie_achievement(case)}
            for case in container.case_service.list_cases()
        ]
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_case(request: Request) -> dict[str, object]:
    """Snapshot the active session."""
    container: AppContainer = request.app.state.container
    case = container.session.save_case(container.case_service)
    return case_payload(case)


@router.get("/export")
async def export_cases(request: Request) -> dict[str, object]:
    """Return the case list as summary rows."""
    container: AppContainer = request.app.state.container
    tz = resolve_timezone(container.settings)
    return {"rows": case_summary_rows(container.case_service.list_cases(), tz)}


@router.delete("/{case_id}")
async def delete_case(case_id: str, request: Request) -> dict[str, str]:
    """Delete a saved case."""
    container: AppContainer = request.app.state.container
    try:
        container.case_service.delete(case_id)
    except CaseNotFoundError as exc:
        raise _not_found(exc) from exc
    return {"status": "deleted"}


@router.post("/{case_id}/load")
async def load_case(case_id: str, request: Request) -> dict[str, object]:
    """Replace the active session with a saved case."""
    container: AppContainer = request.app.state.container
    try:
        case = container.case_service.get(case_id)
    except CaseNotFoundError as exc:
        raise _not_found(exc) from exc
    container.session.load_case(case)
    session = container.session
    return profile_payload(session.profile, session.tdee)


@router.get("/{case_id}/report")
async def case_report(case_id: str, request: Request) -> dict[str, object]:
    """Return the client details, nutrient totals and food log rows of a case."""
    container: AppContainer = request.app.state.container
    try:
        case = container.case_service.get(case_id)
    except CaseNotFoundError as exc:
        raise _not_found(exc) from exc
    return {
        "profile": case_profile_rows(case, resolve_timezone(container.settings)),
        "nutrients": nutrient_total_rows(case),
        "meals": meal_log_rows(case.record),
    }
