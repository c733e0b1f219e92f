"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import categories, lists, providers, search, videos

api_router = APIRouter()
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(videos.router, prefix="/videos", tags=["videos"])
api_router.include_router(lists.router, tags=["lists"])
api_router.include_router(providers.router, prefix="/providers", tags=["providers"])
