from typing import Optional


class AggregatorError(Exception):
    pass


class FetchError(AggregatorError):
    def __init__(self, url: str, cause: str, status_code: Optional[int] = None):
        self.url = url
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {cause}")


class ParseError(AggregatorError):
    pass
