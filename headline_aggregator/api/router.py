from fastapi import APIRouter

from .endpoints import articles, debug, health, pages

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(articles.router, tags=["articles"])
api_router.include_router(pages.router, tags=["pages"])
api_router.include_router(debug.router, tags=["debug"])
