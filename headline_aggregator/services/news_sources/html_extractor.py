"""
Front page scraper - turns dated article links into ArticleRecords
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Union

import structlog
from bs4 import BeautifulSoup, Tag

from .base import ArticleRecord, PRIMARY_SOURCE
from .date_parser import parse_url_date
from .selector_rules import (
    ARTICLE_CONTAINER_SELECTOR,
    DEFAULT_RULES,
    HEADING_SELECTOR,
    SelectorRule,
    build_selectors,
    expand_rules,
)
from ...exceptions import ParseError
from ...utils.string_utils import clean_text, first_line
from ...utils.url_utils import to_absolute_url


logger = structlog.get_logger(__name__)


class HtmlExtractor:
    ANCHOR_TEXT_MIN_LENGTH = 5
    TITLE_MIN_LENGTH = 10
    TITLE_MAX_LENGTH = 200

    def __init__(
        self,
        base_url: str,
        years: Iterable[int],
        cutoff: datetime,
        rules: Sequence[SelectorRule] = DEFAULT_RULES,
        source: str = PRIMARY_SOURCE
    ):
        self.base_url = base_url
        self.years = list(years)
        self.cutoff = cutoff
        self.rules = tuple(rules)
        self.source = source

    def extract(self, document: Union[str, bytes, BeautifulSoup]) -> List[ArticleRecord]:
        """
        Evaluate every rule against the document in order.

        Records come out in rule order, then year order, then document order.
        The same link matched by several rules is emitted once per match;
        deduplication is left to the aggregation step.
        """
        soup = self._parse(document)
        records = []

        for rule, selector in expand_rules(self.rules, self.years):
            for anchor in soup.select(selector):
                record = self._extract_record(anchor)
                if record:
                    records.append(record)

        logger.info("html_extraction_completed", source=self.source, candidates=len(records))
        return records

    def count_matches(self, document: Union[str, bytes, BeautifulSoup]) -> Dict[str, int]:
        """Raw element count per selector, for diagnostics"""
        soup = self._parse(document)
        return {
            selector: len(soup.select(selector))
            for selector in build_selectors(self.rules, self.years)
        }

    def _parse(self, document: Union[str, bytes, BeautifulSoup]) -> BeautifulSoup:
        if isinstance(document, BeautifulSoup):
            return document
        try:
            return BeautifulSoup(document, 'html.parser')
        except Exception as e:
            raise ParseError(f"Could not parse HTML document: {e}") from e

    def _extract_record(self, anchor: Tag) -> Optional[ArticleRecord]:
        href = anchor.get('href')
        if not href:
            return None

        title = clean_text(self._candidate_title(anchor))
        if not self.TITLE_MIN_LENGTH < len(title) < self.TITLE_MAX_LENGTH:
            return None

        url = to_absolute_url(href, self.base_url)
        publish_date = parse_url_date(url)
        if publish_date is None or publish_date < self.cutoff:
            return None

        return ArticleRecord(title=title, url=url, publish_date=publish_date, source=self.source)

    def _candidate_title(self, anchor: Tag) -> str:
        title = anchor.get_text().strip()
        if len(title) >= self.ANCHOR_TEXT_MIN_LENGTH:
            return title

        container = anchor.css.closest(ARTICLE_CONTAINER_SELECTOR)
        if container is None:
            return title

        heading = container.select_one(HEADING_SELECTOR)
        heading_text = heading.get_text().strip() if heading else ""
        return heading_text or first_line(container.get_text())
