from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travelplanner.api.v1.router import router as api_v1_router
from travelplanner.config.settings import settings
from travelplanner.core.logging import setup_logging
from travelplanner.core.middleware import register_middlewares
from travelplanner.db.init_db import init_db


def create_app(initialize_db: bool = True) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging()

    app = FastAPI(
        title=settings.api.API_TITLE,
        description=settings.api.API_DESCRIPTION,
        debug=settings.DEBUG,
        version=settings.api.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging and exception handlers
    register_middlewares(app)

    app.include_router(api_v1_router, prefix=settings.api.API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "version": settings.api.API_VERSION}

    # Schema bootstrap for dev/demo; production databases are migrated separately
    if initialize_db and not settings.is_production:
        @app.on_event("startup")
        def on_startup() -> None:
            init_db()

    return app


app = create_app()
