"""
RSS / Atom feed reader
"""

from datetime import datetime
from typing import List, Optional, Union

import feedparser
import structlog

from .base import ArticleRecord
from .date_parser import parse_feed_timestamp
from ...exceptions import ParseError
from ...utils.string_utils import clean_text
from ...utils.url_utils import to_absolute_url


logger = structlog.get_logger(__name__)


class FeedExtractor:
    def __init__(self, base_url: str, cutoff: datetime):
        self.base_url = base_url
        self.cutoff = cutoff

    def extract(self, document: Union[str, bytes], source: str) -> List[ArticleRecord]:
        """
        Build records straight from the feed's structured fields.

        Entries without a title, link or parseable date are skipped. Raises
        ParseError only when the document could not be read as a feed at all.
        """
        feed = feedparser.parse(document)

        if feed.bozo and not feed.entries:
            raise ParseError(f"Unreadable feed for {source}: {feed.get('bozo_exception')}")
        if feed.bozo:
            logger.warning("feed_parse_issues", source=source, error=str(feed.get('bozo_exception')))

        records = []
        skipped = 0
        for entry in feed.entries:
            record = self._parse_entry(entry, source)
            if record is None:
                skipped += 1
                continue
            if record.publish_date >= self.cutoff:
                records.append(record)

        logger.info(
            "feed_extraction_completed",
            source=source,
            entries=len(feed.entries),
            records=len(records),
            skipped=skipped,
        )
        return records

    def _parse_entry(self, entry, source: str) -> Optional[ArticleRecord]:
        title = clean_text(entry.get('title') or '')
        link = to_absolute_url(entry.get('link') or '', self.base_url)
        if not title or not link:
            return None

        publish_date = parse_feed_timestamp(
            entry.get('published_parsed') or entry.get('updated_parsed')
        )
        if publish_date is None:
            logger.debug(
                "feed_entry_date_unparseable",
                source=source,
                link=link,
                raw_date=entry.get('published') or entry.get('updated'),
            )
            return None

        return ArticleRecord(title=title, url=link, publish_date=publish_date, source=source)
