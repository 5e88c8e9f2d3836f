import logging
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api.dependencies import build_article_cache, build_diagnostics
from .api.router import api_router
from .config import Settings, get_settings
from .services.news_sources.fetcher import SourceFetcher


def apply_logging_preferences():
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s"
    )

    apply_logging_preferences()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    apply_logging_preferences()
    logger.info(
        "Starting headline aggregator",
        version=__version__,
        site_url=app.state.settings.site_url,
        fallback_feeds=len(app.state.settings.fallback_feed_urls),
    )
    logger.info("Initial article fetch will happen on first request")

    yield

    app.state.fetcher.session.close()
    logger.info("Shutting down headline aggregator")


def create_application(app_settings: Optional[Settings] = None, fetcher: Optional[SourceFetcher] = None) -> FastAPI:
    app_settings = app_settings or settings
    fetcher = fetcher or SourceFetcher()

    app = FastAPI(
        title="Headline Aggregator",
        description="Front page headline scraper with RSS fallback and an in-memory cache",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Cache state lives for the process lifetime, owned by this app instance
    app.state.settings = app_settings
    app.state.fetcher = fetcher
    app.state.article_cache = build_article_cache(app_settings, fetcher)
    app.state.diagnostics = build_diagnostics(app_settings, fetcher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def handle_common_requests(request: Request, call_next):
        common_paths = ["/favicon.ico", "/robots.txt", "/sitemap.xml", "/apple-touch-icon.png"]
        if request.url.path in common_paths:
            return JSONResponse(status_code=404, content={"detail": "Not found"})

        return await call_next(request)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception occurred",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
            }
        )

    app.include_router(api_router)

    return app


app = create_application()


def run():
    import uvicorn

    logger.info(
        "Headline aggregator listening",
        url=f"http://{settings.api_host}:{settings.api_port}",
        endpoints=["/", "/debug", "/api/articles", "/refresh", "/health"],
    )
    uvicorn.run(
        "headline_aggregator.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info",
        access_log=False,
    )


if __name__ == "__main__":
    run()
