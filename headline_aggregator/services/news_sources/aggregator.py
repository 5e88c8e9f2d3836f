"""
Aggregation policy - scrape the front page first, fall back to RSS feeds
when scraping comes up short, then merge, dedupe and sort.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence

import structlog

from .base import ArticleRecord, feed_source_tag
from .feed_extractor import FeedExtractor
from .fetcher import BROWSER_HEADERS, FEED_HEADERS, SourceFetcher
from .html_extractor import HtmlExtractor
from ...exceptions import ParseError
from ...utils.url_utils import feed_name_from_url


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FallbackFeed:
    url: str
    name: str

    @classmethod
    def from_url(cls, url: str) -> "FallbackFeed":
        return cls(url=url, name=feed_name_from_url(url))

    @property
    def source(self) -> str:
        return feed_source_tag(self.name)


def dedupe_by_url(records: Iterable[ArticleRecord]) -> List[ArticleRecord]:
    """Keep the first record seen for each URL, preserving order"""
    seen = set()
    unique = []
    for record in records:
        if record.url in seen:
            continue
        seen.add(record.url)
        unique.append(record)
    return unique


def sort_newest_first(records: Iterable[ArticleRecord]) -> List[ArticleRecord]:
    # sorted() is stable with reverse=True, so ties keep their relative order
    return sorted(records, key=lambda record: record.publish_date, reverse=True)


class AggregationPolicy:
    def __init__(
        self,
        fetcher: SourceFetcher,
        html_extractor: HtmlExtractor,
        feed_extractor: FeedExtractor,
        site_url: str,
        fallback_feeds: Sequence[FallbackFeed],
        cutoff: datetime,
        fallback_threshold: int = 10,
        primary_timeout_seconds: float = 30.0,
        feed_timeout_seconds: float = 15.0
    ):
        self.fetcher = fetcher
        self.html_extractor = html_extractor
        self.feed_extractor = feed_extractor
        self.site_url = site_url
        self.fallback_feeds = list(fallback_feeds)
        self.cutoff = cutoff
        self.fallback_threshold = fallback_threshold
        self.primary_timeout_seconds = primary_timeout_seconds
        self.feed_timeout_seconds = feed_timeout_seconds

    def run(self) -> List[ArticleRecord]:
        """
        One aggregation run. Never raises for source failures; an empty list
        means every source came up empty.
        """
        logger.info("aggregation_started", site_url=self.site_url)

        html_records = dedupe_by_url(self.scrape_primary())
        feed_records: List[ArticleRecord] = []

        if len(html_records) < self.fallback_threshold:
            logger.info(
                "fallback_feeds_triggered",
                scraped=len(html_records),
                threshold=self.fallback_threshold,
                feeds=len(self.fallback_feeds),
            )
            feed_records = self.read_fallback_feeds()

        merged = dedupe_by_url(html_records + feed_records)
        within_cutoff = [record for record in merged if record.publish_date >= self.cutoff]
        articles = sort_newest_first(within_cutoff)

        logger.info(
            "aggregation_completed",
            scraped=len(html_records),
            from_feeds=len(feed_records),
            total=len(articles),
        )
        return articles

    def scrape_primary(self) -> List[ArticleRecord]:
        result = self.fetcher.fetch(self.site_url, self.primary_timeout_seconds, BROWSER_HEADERS)
        if not result.success:
            logger.warning("primary_fetch_failed", url=self.site_url, error=result.error.cause)
            return []

        try:
            records = self.html_extractor.extract(result.content)
        except ParseError as e:
            logger.warning("primary_parse_failed", url=self.site_url, error=str(e))
            return []

        if not records:
            logger.warning(
                "primary_scrape_empty",
                url=self.site_url,
                html_length=len(result.content),
            )
        return records

    def read_fallback_feeds(self) -> List[ArticleRecord]:
        collected: List[ArticleRecord] = []

        for feed in self.fallback_feeds:
            result = self.fetcher.fetch(feed.url, self.feed_timeout_seconds, FEED_HEADERS)
            if not result.success:
                logger.warning("fallback_feed_failed", feed=feed.url, error=result.error.cause)
                continue

            try:
                records = self.feed_extractor.extract(result.content, feed.source)
            except ParseError as e:
                logger.warning("fallback_feed_unreadable", feed=feed.url, error=str(e))
                continue

            collected.extend(records)
            logger.info("fallback_feed_parsed", feed=feed.url, records=len(records), collected=len(collected))

        return collected
