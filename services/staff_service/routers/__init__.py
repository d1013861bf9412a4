"""Staff service routers package."""

from services.staff_service.routers.staff import router as staff_router

__all__ = ["staff_router"]
