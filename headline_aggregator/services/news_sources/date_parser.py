import re
from datetime import datetime, timezone
from time import struct_time
from typing import Optional


URL_DATE_PATTERN = re.compile(r'/(\d{4})/(\d{1,2})/(\d{1,2})/')


def parse_url_date(url: str) -> Optional[datetime]:
    """Date encoded as /YYYY/M/D/ in an article path, or None when absent or invalid."""
    if not url:
        return None

    match = URL_DATE_PATTERN.search(url)
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None


def parse_feed_timestamp(parsed: Optional[struct_time]) -> Optional[datetime]:
    # feedparser normalizes entry dates to UTC struct_time
    if not parsed:
        return None
    try:
        return datetime(*parsed[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None
