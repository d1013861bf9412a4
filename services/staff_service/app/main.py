"""FastAPI application for the Staff Service."""

from fastapi import FastAPI
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import add_rate_limiting
from services.staff_service.routers import staff_router


def create_app() -> FastAPI:
    """Create and configure the Staff Service FastAPI app."""
    app = FastAPI(
        title="Academy Staff Service",
        version="0.1.0",
        description="Staff roles and invitations through the identity provider.",
    )

    add_observability_middleware(app, "staff")
    add_exception_handlers(app)
    add_rate_limiting(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "staff"}

    app.include_router(staff_router)

    return app


app = create_app()
