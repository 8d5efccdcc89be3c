"""
REST API main application.
Entry point for the FastAPI server (HTTP API and the /ws realtime link).
"""

from fastapi import FastAPI

from realtime import RealtimeHub
from realtime.router import router as realtime_router
from rest_api.core.cors import configure_cors
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers import (
    auth_router,
    catalog_router,
    menus_router,
    orders_router,
    public_router,
    tables_router,
)
from shared.config.settings import settings


def create_app() -> FastAPI:
    """
    Build the application.

    Each app owns its own RealtimeHub (app.state.realtime); handlers reach it
    through realtime.get_emitter.
    """
    app = FastAPI(
        title="QR Menu REST API",
        description="Multi-tenant restaurant ordering API with realtime notifications",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.realtime = RealtimeHub.from_settings(settings)

    configure_cors(app)
    register_middlewares(app)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get("/api/health")
    def health_check():
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "service": "rest-api",
            "environment": settings.environment,
        }

    # =========================================================================
    # Include Routers
    # =========================================================================

    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(menus_router)
    app.include_router(orders_router)
    app.include_router(tables_router)
    app.include_router(public_router)
    app.include_router(realtime_router)

    return app


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
