"""Memberships service routers package."""

from services.memberships_service.routers.memberships import router as memberships_router
from services.memberships_service.routers.reference import router as reference_router

__all__ = [
    "memberships_router",
    "reference_router",
]
