"""Retry policy for CRM database lookups (tenacity)."""

from __future__ import annotations

from collections.abc import Callable

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import RetryConfig

logger = structlog.get_logger()


def log_retry(operation: str) -> Callable[[RetryCallState], None]:
    """tenacity ``before_sleep`` hook: one warning per failed attempt."""

    def _before_sleep(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        logger.warning(
            "db_lookup_retry",
            operation=operation,
            attempt=state.attempt_number,
            wait_seconds=state.next_action.sleep if state.next_action else None,
            error=repr(error),
        )

    return _before_sleep


def with_retry(
    config: RetryConfig,
    *,
    retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
    operation: str = "lookup",
) -> Callable:
    """Return a tenacity decorator for one named lookup.

    The last error is re-raised once ``config.max_attempts`` is used up.

        @with_retry(settings.retry, retryable_exceptions=(OperationalError,),
                    operation="snippet.find_by_slug")
        async def lookup(): ...
    """
    return retry(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_exponential(
            multiplier=config.multiplier,
            min=config.initial_wait_seconds,
            max=config.max_wait_seconds,
        ),
        retry=retry_if_exception_type(retryable_exceptions),
        before_sleep=log_retry(operation),
        reraise=True,
    )
