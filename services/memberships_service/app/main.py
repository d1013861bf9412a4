"""FastAPI application for the Memberships Service."""

from fastapi import FastAPI
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import add_rate_limiting
from services.memberships_service.routers import memberships_router, reference_router


def create_app() -> FastAPI:
    """Create and configure the Memberships Service FastAPI app."""
    app = FastAPI(
        title="Academy Memberships Service",
        version="0.1.0",
        description="Programs, waivers, membership plans and member memberships.",
    )

    add_observability_middleware(app, "memberships")
    add_exception_handlers(app)
    add_rate_limiting(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "memberships"}

    app.include_router(reference_router)
    app.include_router(memberships_router)

    return app


app = create_app()
