"""
Front page diagnostics for the /debug endpoint
"""

from typing import Any, Dict, Iterable

import structlog
from bs4 import BeautifulSoup

from .news_sources.fetcher import BROWSER_HEADERS, SourceFetcher
from .news_sources.html_extractor import HtmlExtractor
from ..utils.string_utils import truncate_text


logger = structlog.get_logger(__name__)


class DiagnosticsService:
    SAMPLE_LINK_LIMIT = 10
    SAMPLE_TEXT_LENGTH = 100
    SAMPLE_HTML_LENGTH = 2000

    def __init__(
        self,
        fetcher: SourceFetcher,
        html_extractor: HtmlExtractor,
        site_url: str,
        timeout_seconds: float,
        years: Iterable[int]
    ):
        self.fetcher = fetcher
        self.html_extractor = html_extractor
        self.site_url = site_url
        self.timeout_seconds = timeout_seconds
        self.years = [str(year) for year in years]

    def inspect_primary(self) -> Dict[str, Any]:
        result = self.fetcher.fetch(self.site_url, self.timeout_seconds, BROWSER_HEADERS)
        if not result.success:
            return {"success": False, "error": result.error.cause, "status": result.status_code}

        soup = BeautifulSoup(result.content, 'html.parser')
        html = result.content.decode(soup.original_encoding or 'utf-8', errors='replace')
        links = soup.select('a[href]')
        year_links = [
            {
                "href": link['href'],
                "text": truncate_text(link.get_text().strip(), self.SAMPLE_TEXT_LENGTH),
            }
            for link in links
            if any(year in link['href'] for year in self.years)
        ]
        selector_matches = {
            selector: count
            for selector, count in self.html_extractor.count_matches(soup).items()
            if count > 0
        }
        title_tag = soup.find('title')

        logger.info(
            "primary_inspected",
            url=self.site_url,
            links=len(links),
            year_links=len(year_links),
            matching_selectors=len(selector_matches),
        )

        return {
            "success": True,
            "status": result.status_code,
            "title": title_tag.get_text().strip() if title_tag else "",
            "htmlLength": len(html),
            "headingCounts": {tag: len(soup.find_all(tag)) for tag in ("h1", "h2", "h3", "h4")},
            "linkCount": len(links),
            "articleCount": len(soup.find_all('article')),
            "yearLinksFound": len(year_links),
            "sampleYearLinks": year_links[:self.SAMPLE_LINK_LIMIT],
            "selectorMatches": selector_matches,
            "scrapedArticles": len(self.html_extractor.extract(soup)),
            "sampleHTML": html[:self.SAMPLE_HTML_LENGTH],
        }
