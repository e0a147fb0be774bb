"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from talenthub.api.v1 import auth, navigation, talents, employers, discover, admin

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    navigation.router,
    prefix="/navigation",
    tags=["Navigation"],
)

api_router.include_router(
    talents.router,
    prefix="/talents",
    tags=["Talents"],
)

api_router.include_router(
    employers.router,
    prefix="/employers",
    tags=["Employers"],
)

api_router.include_router(
    discover.router,
    prefix="/discover",
    tags=["Discover"],
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)
