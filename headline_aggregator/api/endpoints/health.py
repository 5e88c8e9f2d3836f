from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..dependencies import get_article_cache
from ..schemas import HealthResponse
from ...services.article_cache import ArticleCache

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(cache: ArticleCache = Depends(get_article_cache)):
    # Reads the current state only; never triggers aggregation
    state = cache.state
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        articles_count=len(state.records),
        last_fetch=state.fetched_at,
    )
