from typing import List

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_article_cache
from ..schemas import ArticleListResponse, ArticleResponse, ErrorResponse, RefreshResponse
from ...services.article_cache import ArticleCache
from ...services.news_sources.base import ArticleRecord


logger = structlog.get_logger(__name__)

router = APIRouter()


def to_article_responses(records: List[ArticleRecord]) -> List[ArticleResponse]:
    return [
        ArticleResponse(
            title=record.title,
            url=record.url,
            publish_date=record.publish_date,
            source=record.source,
        )
        for record in records
    ]


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump(by_alias=True))


@router.get(
    "/api/articles",
    response_model=ArticleListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_articles(cache: ArticleCache = Depends(get_article_cache)):
    """Cached articles, aggregating first when the cache is stale"""
    try:
        records = await run_in_threadpool(cache.get)
    except Exception as e:
        logger.error("list_articles_failed", error=str(e), exc_info=e)
        return error_response("Failed to fetch articles")

    return ArticleListResponse(count=len(records), articles=to_article_responses(records))


@router.get(
    "/refresh",
    response_model=RefreshResponse,
    responses={500: {"model": ErrorResponse}},
)
async def refresh_articles(cache: ArticleCache = Depends(get_article_cache)):
    """Drop the cache and aggregate again"""
    try:
        records = await run_in_threadpool(cache.force_refresh)
    except Exception as e:
        logger.error("refresh_articles_failed", error=str(e), exc_info=e)
        return error_response("Failed to refresh articles")

    return RefreshResponse(message="Articles refreshed", count=len(records))
