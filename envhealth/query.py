"""Per-domain fetch state machine with fixed-delay retry and tab gating.

Each ``Query`` owns exactly one data domain. Its lifecycle follows
``TRANSITIONS``::

    idle -> loading -> success | failed
    success | failed -> loading   (refetch / re-trigger)
    loading | success | failed -> idle   (disabled)

Every run is tagged with a generation number. Disabling or re-running a query
bumps the generation, so a response that resolves for an older generation is
dropped instead of overwriting newer state.
"""

from __future__ import annotations

import datetime as dt
import threading
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, FrozenSet, Generic, Optional, TypeVar

from envhealth.errors import InvalidTransition, NetworkFailure, ShapeMismatch
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="query")

T = TypeVar("T")


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


TRANSITIONS: Dict[QueryStatus, FrozenSet[QueryStatus]] = {
    QueryStatus.IDLE: frozenset({QueryStatus.LOADING}),
    QueryStatus.LOADING: frozenset({QueryStatus.IDLE, QueryStatus.SUCCESS, QueryStatus.FAILED}),
    QueryStatus.SUCCESS: frozenset({QueryStatus.IDLE, QueryStatus.LOADING}),
    QueryStatus.FAILED: frozenset({QueryStatus.IDLE, QueryStatus.LOADING}),
}


@dataclass(frozen=True)
class QueryState(Generic[T]):
    """Immutable view of a query at one point in time."""
    status: QueryStatus = QueryStatus.IDLE
    data: Optional[T] = None
    error: Optional[str] = None
    attempts: int = 0
    updated_at: Optional[dt.datetime] = None

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.FAILED

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS


class Query(Generic[T]):
    """One independently retried, optionally gated fetch operation."""

    def __init__(
        self,
        key: str,
        fetch: Callable[[], T],
        *,
        retry_count: int = 3,
        retry_delay_seconds: float = 1.0,
        enabled: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.key = key
        self.retry_count = retry_count
        self.retry_delay_seconds = retry_delay_seconds
        self._fetch = fetch
        self._sleep = sleep
        self._enabled = enabled
        self._generation = 0
        self._state: QueryState[T] = QueryState()
        self._lock = threading.Lock()

    @property
    def state(self) -> QueryState[T]:
        with self._lock:
            return self._state

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def _transition(self, status: QueryStatus, **changes) -> None:
        """Move to `status`; caller must hold the lock."""
        current = self._state.status
        if status not in TRANSITIONS[current]:
            raise InvalidTransition(f"{self.key}: {current.value} -> {status.value}")
        self._state = replace(
            self._state,
            status=status,
            updated_at=dt.datetime.now(dt.timezone.utc),
            **changes,
        )

    def set_enabled(self, enabled: bool) -> None:
        """Toggle gating. Disabling resets to idle and drops data; enabling waits for the next run."""
        with self._lock:
            if enabled == self._enabled:
                return
            self._enabled = enabled
            self._generation += 1
            if self._state.status is not QueryStatus.IDLE:
                self._transition(QueryStatus.IDLE, data=None, error=None, attempts=0)
        logger.debug("Query gating changed", extra={"query": self.key, "enabled": enabled})

    def _begin(self) -> Optional[int]:
        with self._lock:
            if not self._enabled:
                return None
            self._generation += 1
            if self._state.status is QueryStatus.LOADING:
                # superseding an in-flight run
                self._state = replace(self._state, attempts=0, error=None)
            else:
                self._transition(QueryStatus.LOADING, attempts=0, error=None)
            return self._generation

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _record_attempt(self, generation: int, attempt: int) -> None:
        with self._lock:
            if generation == self._generation:
                self._state = replace(self._state, attempts=attempt)

    def _settle(self, generation: int, status: QueryStatus, **changes) -> QueryState[T]:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding stale response",
                    extra={"query": self.key, "generation": generation, "current": self._generation},
                )
                return self._state
            self._transition(status, **changes)
            return self._state

    def run(self) -> QueryState[T]:
        """Fetch with up to `retry_count` retries and a fixed delay between attempts."""
        generation = self._begin()
        if generation is None:
            logger.debug("Query disabled; not fetching", extra={"query": self.key})
            return self.state

        max_attempts = self.retry_count + 1
        for attempt in range(1, max_attempts + 1):
            if not self._is_current(generation):
                logger.debug("Run superseded before attempt", extra={"query": self.key, "attempt": attempt})
                return self.state
            self._record_attempt(generation, attempt)
            try:
                data = self._fetch()
            except NetworkFailure as exc:
                if attempt < max_attempts:
                    logger.warning(
                        "Fetch attempt failed; retrying",
                        extra={"query": self.key, "attempt": attempt, "error": str(exc)},
                    )
                    self._sleep(self.retry_delay_seconds)
                    continue
                logger.error(
                    "Fetch failed after retries; falling back",
                    extra={"query": self.key, "attempts": attempt, "error": str(exc)},
                )
                return self._settle(generation, QueryStatus.FAILED, data=None, error=str(exc))
            except ShapeMismatch as exc:
                logger.warning("Unusable response; falling back", extra={"query": self.key, "error": str(exc)})
                return self._settle(generation, QueryStatus.FAILED, data=None, error=str(exc))
            except Exception as exc:
                self._settle(generation, QueryStatus.FAILED, data=None, error=str(exc))
                raise

            logger.debug("Fetch succeeded", extra={"query": self.key, "attempt": attempt})
            return self._settle(generation, QueryStatus.SUCCESS, data=data, error=None)

        return self.state
