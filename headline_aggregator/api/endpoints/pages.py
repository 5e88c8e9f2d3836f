import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_app_settings, get_article_cache
from ..templates import render_articles_page, render_error_page
from ...config import Settings
from ...services.article_cache import ArticleCache


logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def articles_page(
    cache: ArticleCache = Depends(get_article_cache),
    settings: Settings = Depends(get_app_settings)
):
    try:
        records = await run_in_threadpool(cache.get)
        html = render_articles_page(
            site_name=settings.site_name,
            articles=records,
            years=settings.tracked_years,
            cutoff_date=settings.cutoff_date,
            last_fetch=cache.state.fetched_at,
            expires_at=cache.expires_at,
            reload_after_ms=int(cache.duration.total_seconds() * 1000),
        )
    except Exception as e:
        logger.error("articles_page_failed", error=str(e), exc_info=e)
        return HTMLResponse(status_code=500, content=render_error_page("Failed to load articles"))

    return HTMLResponse(content=html)
