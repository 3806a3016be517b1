"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from nutripro.api.cases import router as cases_router
from nutripro.api.catalog import router as catalog_router
from nutripro.api.session import router as session_router
from nutripro.app_logging import configure_logging
from nutripro.containers import AppContainer
from nutripro.services.catalog import CatalogLoadError
from nutripro.services.demo import build_demo_case


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            await state_container.catalog_service.load()
        except CatalogLoadError:
            logger.exception("Starting with an empty food catalog")
        else:
            foods = state_container.catalog_service.foods
            demo = build_demo_case(foods) if foods else None
            if demo and state_container.case_service.seed_demo(demo):
                logger.info("Seeded demo case %s", demo.id)
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(catalog_router)
    app.include_router(session_router)
    app.include_router(cases_router)

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Health check reporting whether the catalog is available."""
        state_container: AppContainer = request.app.state.container
        catalog = state_container.catalog_service
        return {
            "status": "ok",
            "catalog_loaded": bool(catalog.foods),
            "catalog_size": len(catalog.all_foods()),
            "load_error": catalog.load_error,
        }

    return app
