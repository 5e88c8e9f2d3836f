from datetime import timedelta

from fastapi import Request

from ..config import Settings
from ..services.article_cache import ArticleCache
from ..services.diagnostics import DiagnosticsService
from ..services.news_sources.aggregator import AggregationPolicy, FallbackFeed
from ..services.news_sources.feed_extractor import FeedExtractor
from ..services.news_sources.fetcher import SourceFetcher
from ..services.news_sources.html_extractor import HtmlExtractor


def build_html_extractor(settings: Settings) -> HtmlExtractor:
    return HtmlExtractor(
        base_url=settings.site_base_url,
        years=settings.tracked_years,
        cutoff=settings.cutoff_datetime,
    )


def build_article_cache(settings: Settings, fetcher: SourceFetcher) -> ArticleCache:
    policy = AggregationPolicy(
        fetcher=fetcher,
        html_extractor=build_html_extractor(settings),
        feed_extractor=FeedExtractor(base_url=settings.site_base_url, cutoff=settings.cutoff_datetime),
        site_url=settings.site_url,
        fallback_feeds=[FallbackFeed.from_url(url) for url in settings.fallback_feed_urls],
        cutoff=settings.cutoff_datetime,
        fallback_threshold=settings.fallback_threshold,
        primary_timeout_seconds=settings.primary_timeout_seconds,
        feed_timeout_seconds=settings.feed_timeout_seconds,
    )
    return ArticleCache(policy, duration=timedelta(minutes=settings.cache_duration_minutes))


def build_diagnostics(settings: Settings, fetcher: SourceFetcher) -> DiagnosticsService:
    return DiagnosticsService(
        fetcher=fetcher,
        html_extractor=build_html_extractor(settings),
        site_url=settings.site_url,
        timeout_seconds=settings.primary_timeout_seconds,
        years=settings.tracked_years,
    )


def get_article_cache(request: Request) -> ArticleCache:
    return request.app.state.article_cache


def get_diagnostics(request: Request) -> DiagnosticsService:
    return request.app.state.diagnostics


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
