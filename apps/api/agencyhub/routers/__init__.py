"""API routers."""

from agencyhub.routers.agency import router as agency_router
from agencyhub.routers.subaccounts import router as subaccounts_router
from agencyhub.routers.users import router as users_router

__all__ = [
    "agency_router",
    "subaccounts_router",
    "users_router",
]
