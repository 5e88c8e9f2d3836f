from .base import ArticleRecord, PRIMARY_SOURCE, feed_source_tag
from .fetcher import FetchResult, SourceFetcher, BROWSER_HEADERS, FEED_HEADERS
from .html_extractor import HtmlExtractor
from .feed_extractor import FeedExtractor
from .aggregator import AggregationPolicy, FallbackFeed, dedupe_by_url

__all__ = [
    "ArticleRecord",
    "PRIMARY_SOURCE",
    "feed_source_tag",
    "FetchResult",
    "SourceFetcher",
    "BROWSER_HEADERS",
    "FEED_HEADERS",
    "HtmlExtractor",
    "FeedExtractor",
    "AggregationPolicy",
    "FallbackFeed",
    "dedupe_by_url",
]
