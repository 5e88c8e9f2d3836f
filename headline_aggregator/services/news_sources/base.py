"""
Article record shared by every news source
"""

from dataclasses import dataclass
from datetime import datetime


PRIMARY_SOURCE = "primary"


def feed_source_tag(feed_name: str) -> str:
    return f"feed:{feed_name}"


@dataclass(frozen=True)
class ArticleRecord:
    """Standardized article produced by the scraper and the feed readers"""
    title: str
    url: str
    publish_date: datetime
    source: str

    @property
    def year(self) -> int:
        return self.publish_date.year
