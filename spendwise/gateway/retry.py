"""Timeout racing and retry with exponential backoff.

Retry policy per attempt outcome:
  - Text → returned immediately
  - RATE_LIMITED → wait 2^(attempt+1) seconds (2s, 4s, 8s), then retry
  - PROVIDER_ERROR → terminal, returned immediately
  - Empty → next attempt without waiting
  - TIMEOUT / NETWORK_FAULT → wait 1s and retry; returned on the final attempt

Exhausting attempts on rate limits or empty replies yields Empty, not a
failure. Delays go through an injectable ``sleep`` so timing is testable.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace

from spendwise.gateway.types import CallOutcome, FailureKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
NETWORK_RETRY_DELAY = 1.0

Sleep = Callable[[float], Awaitable[None]]


async def race_with_timeout(operation: Awaitable[CallOutcome], deadline: float) -> CallOutcome:
    """Await ``operation`` for at most ``deadline`` seconds.

    The operation is cancelled when the deadline wins.
    """
    try:
        return await asyncio.wait_for(operation, timeout=deadline)
    except asyncio.TimeoutError:
        return CallOutcome.failure(FailureKind.TIMEOUT, f"Request timeout after {deadline:g} seconds")


def rate_limit_backoff(attempt: int) -> float:
    """Backoff after a rate-limited attempt (0-based): 2s, 4s, 8s, ..."""
    return float(2 ** (attempt + 1))


async def with_retry(
    attempt: Callable[[], Awaitable[CallOutcome]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    sleep: Sleep = asyncio.sleep,
) -> CallOutcome:
    """Run ``attempt`` up to ``max_attempts`` times according to the retry policy."""
    for index in range(max_attempts):
        is_last = index == max_attempts - 1

        try:
            outcome = await attempt()
        except Exception as e:
            logger.warning("Attempt %d/%d raised %s", index + 1, max_attempts, type(e).__name__)
            outcome = CallOutcome.failure(FailureKind.NETWORK_FAULT, str(e) or type(e).__name__)

        if outcome.is_text:
            return replace(outcome, attempts=index + 1)

        if outcome.is_empty:
            logger.info("Attempt %d/%d returned no text", index + 1, max_attempts)
            continue

        if outcome.kind == FailureKind.RATE_LIMITED:
            delay = rate_limit_backoff(index)
            logger.warning(
                "Rate limit hit. Attempt %d of %d. Retrying in %.0fs",
                index + 1,
                max_attempts,
                delay,
            )
            await sleep(delay)
            continue

        if outcome.kind == FailureKind.PROVIDER_ERROR:
            return replace(outcome, attempts=index + 1)

        # Timeout or transport fault
        if is_last:
            return replace(outcome, attempts=index + 1)
        logger.info("Attempt %d/%d failed (%s), retrying", index + 1, max_attempts, outcome.kind.value)
        await sleep(NETWORK_RETRY_DELAY)

    return replace(CallOutcome.empty(), attempts=max_attempts)
