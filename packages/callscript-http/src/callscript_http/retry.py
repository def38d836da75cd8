"""Caller-side retry with exponential backoff and jitter."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """Configuration for automatic retries."""

    max_retries: int = 2
    base_delay: float = 1.0
    max_delay: float = 60.0
    backoff_multiplier: float = 2.0
    jitter: bool = True
    retry_on: tuple[type[BaseException], ...] = (httpx.TransportError,)
    retry_statuses: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    on_retry: Callable[[Any, int, float], None] | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")


def delay_for_attempt(attempt: int, policy: RetryPolicy) -> float:
    """Calculate delay for a given retry attempt (0-indexed)."""
    delay = min(
        policy.base_delay * (policy.backoff_multiplier ** attempt),
        policy.max_delay,
    )
    if policy.jitter:
        delay = delay * random.uniform(0.5, 1.5)
    return delay


def retry_after_seconds(response: httpx.Response) -> float | None:
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return max(float(raw), 0.0)
    except ValueError:
        # HTTP-date form is not supported
        return None


async def retry(
    fn: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
) -> T:
    """Execute fn with retry logic per the policy.

    Exceptions listed in ``policy.retry_on`` are retried and the last one is
    re-raised once retries run out. Responses with a status in
    ``policy.retry_statuses`` are retried too; the last such response is
    returned rather than raised. Everything else propagates immediately.
    """
    for attempt in range(policy.max_retries + 1):
        try:
            result = await fn()
        except policy.retry_on as e:
            if attempt >= policy.max_retries:
                raise
            wait = delay_for_attempt(attempt, policy)
            await _backoff(policy, e, attempt, wait)
            continue

        if not _is_retryable_response(result, policy) or attempt >= policy.max_retries:
            return result

        retry_after = retry_after_seconds(result)
        if retry_after is not None and retry_after > policy.max_delay:
            return result
        wait = retry_after if retry_after is not None else delay_for_attempt(attempt, policy)
        await _backoff(policy, result, attempt, wait)

    raise AssertionError("unreachable")  # pragma: no cover


def _is_retryable_response(result: Any, policy: RetryPolicy) -> bool:
    return isinstance(result, httpx.Response) and result.status_code in policy.retry_statuses


async def _backoff(policy: RetryPolicy, reason: Any, attempt: int, wait: float) -> None:
    logger.warning(
        "Attempt %d/%d failed (%s); retrying in %.2fs",
        attempt + 1,
        policy.max_retries + 1,
        _describe(reason),
        wait,
    )
    if policy.on_retry is not None:
        policy.on_retry(reason, attempt + 1, wait)
    await asyncio.sleep(wait)


def _describe(reason: Any) -> str:
    if isinstance(reason, httpx.Response):
        return f"HTTP {reason.status_code}"
    return f"{type(reason).__name__}: {reason}"


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    policy: RetryPolicy | None = None,
) -> Any:
    """GET ``url`` with retries and return the decoded JSON body."""
    response = await retry(lambda: client.get(url), policy or RetryPolicy())
    response.raise_for_status()
    return response.json()
