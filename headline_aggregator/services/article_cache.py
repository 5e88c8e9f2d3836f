"""
In-memory article cache in front of the aggregation policy
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

import structlog

from .news_sources.aggregator import AggregationPolicy
from .news_sources.base import ArticleRecord


logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheState:
    records: Tuple[ArticleRecord, ...] = ()
    fetched_at: Optional[datetime] = None

    def is_expired(self, now: datetime, duration: timedelta) -> bool:
        if self.fetched_at is None or not self.records:
            return True
        return now - self.fetched_at > duration


class ArticleCache:
    """
    Holds the last aggregation result for a fixed duration.

    State is replaced wholesale on every run and never patched in place.
    Stale reads serialize behind a lock, so at most one aggregation runs at a
    time; callers that waited re-check freshness and reuse the fresh result.
    """

    def __init__(
        self,
        policy: AggregationPolicy,
        duration: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = utc_now
    ):
        self.policy = policy
        self.duration = duration
        self.clock = clock
        self._state = CacheState()
        self._lock = threading.Lock()

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def expires_at(self) -> Optional[datetime]:
        fetched_at = self._state.fetched_at
        return fetched_at + self.duration if fetched_at else None

    def get(self) -> List[ArticleRecord]:
        state = self._state
        if not state.is_expired(self.clock(), self.duration):
            logger.info("cache_hit", articles=len(state.records))
            return list(state.records)

        with self._lock:
            state = self._state
            if not state.is_expired(self.clock(), self.duration):
                logger.info("cache_filled_while_waiting", articles=len(state.records))
                return list(state.records)
            return self._refill()

    def force_refresh(self) -> List[ArticleRecord]:
        with self._lock:
            self._state = CacheState()
            logger.info("cache_invalidated")
            return self._refill()

    def _refill(self) -> List[ArticleRecord]:
        started_at = self.clock()
        logger.info("cache_refill_started", previous_fetch=self._state.fetched_at)

        records = self.policy.run()
        self._state = CacheState(records=tuple(records), fetched_at=started_at)

        logger.info("cache_refilled", articles=len(records), fetched_at=started_at.isoformat())
        return list(records)
