"""
Single-shot HTTP fetcher used by the scraper and the feed readers
"""

from typing import Dict, Optional

import requests
import structlog

from ...exceptions import FetchError


logger = structlog.get_logger(__name__)


BROWSER_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
    'Accept-Encoding': 'gzip, deflate',
    'DNT': '1',
    'Connection': 'keep-alive',
    'Upgrade-Insecure-Requests': '1',
    'Cache-Control': 'no-cache',
}

FEED_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (compatible; RSS Reader/1.0)',
}


class FetchResult:
    def __init__(
        self,
        url: str,
        content: bytes = b"",
        text: str = "",
        status_code: Optional[int] = None,
        error: Optional[FetchError] = None
    ):
        self.url = url
        self.content = content
        self.text = text
        self.status_code = status_code
        self.error = error
        self.success = error is None

    def __repr__(self):
        status = "Success" if self.success else f"Error: {self.error.cause}"
        return f"FetchResult({status}, url={self.url}, content_length={len(self.content)})"


class SourceFetcher:
    """Performs one GET per call. Failures come back inside the result, never raised."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def fetch(self, url: str, timeout_seconds: float, headers: Optional[Dict[str, str]] = None) -> FetchResult:
        logger.debug("fetch_started", url=url, timeout_seconds=timeout_seconds)

        try:
            response = self.session.get(url, timeout=timeout_seconds, headers=headers or {})
            response.raise_for_status()
        except requests.Timeout:
            return self._failure(url, f"Request timed out after {timeout_seconds}s")
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            return self._failure(url, f"HTTP {status_code}", status_code)
        except requests.RequestException as e:
            return self._failure(url, str(e) or e.__class__.__name__)

        logger.info(
            "fetch_completed",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return FetchResult(
            url=url,
            content=response.content,
            text=response.text,
            status_code=response.status_code,
        )

    def _failure(self, url: str, cause: str, status_code: Optional[int] = None) -> FetchResult:
        logger.warning("fetch_failed", url=url, cause=cause, status_code=status_code)
        return FetchResult(url=url, status_code=status_code, error=FetchError(url, cause, status_code))
