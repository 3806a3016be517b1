"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from nutripro.adapters.food_source import (
    FoodRowSource,
    HttpxFoodRowSource,
    JsonFileFoodRowSource,
    StaticFoodRowSource,
)
from nutripro.adapters.json_case_repository import (
    InMemoryCaseRepository,
    JsonCaseRepository,
)
from nutripro.config import Settings, SourceKind, resolve_source_kind
from nutripro.services.cases import CaseRepository, CaseService
from nutripro.services.catalog import CatalogService
from nutripro.services.session import DietitianSession


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_source: FoodRowSource
    catalog_service: CatalogService
    case_service: CaseService
    session: DietitianSession
    close_resources: Callable[[], Awaitable[None]]


def build_food_source(settings: Settings) -> FoodRowSource:
    """Create the catalog row source selected by the settings."""
    kind = resolve_source_kind(settings)
    if kind is SourceKind.URL and settings.food_source_url:
        return HttpxFoodRowSource.create(
            settings.food_source_url.strip(),
            timeout_seconds=settings.http_timeout_seconds,
        )
    if kind is SourceKind.FILE and settings.food_source_path:
        return JsonFileFoodRowSource(Path(settings.food_source_path.strip()))
    return StaticFoodRowSource([])


def build_case_repository(settings: Settings) -> CaseRepository:
    """Create the saved-case store; without a path cases live in memory."""
    if settings.cases_path:
        return JsonCaseRepository.open(Path(settings.cases_path))
    return InMemoryCaseRepository()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    food_source = build_food_source(resolved_settings)
    catalog_service = CatalogService(
        source=food_source,
        page_size=resolved_settings.catalog_page_size,
    )
    case_service = CaseService(build_case_repository(resolved_settings))

    async def close_resources() -> None:
        await food_source.close()

    return AppContainer(
        settings=resolved_settings,
        food_source=food_source,
        catalog_service=catalog_service,
        case_service=case_service,
        session=DietitianSession(),
        close_resources=close_resources,
    )
