"""Retry of read-modify-write operations that hit a version conflict.

The domain services never retry on their own. Adapters that want
last-writer-retries semantics wrap the whole operation here so each
attempt re-reads the current record before modifying it.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from identityhub.core.logging import get_logger
from identityhub.domain.exceptions import ConcurrentModificationError

logger = get_logger(__name__)

T = TypeVar("T")


async def retry_on_conflict(
    operation: Callable[[], Awaitable[T]],
    attempts: int = 3,
) -> T:
    """Run an operation, re-running it on ConcurrentModificationError.

    Args:
        operation: Zero-argument coroutine function performing one full
            read-modify-write cycle.
        attempts: Maximum number of attempts, at least 1.

    Returns:
        The result of the first attempt that succeeds.

    Raises:
        ConcurrentModificationError: If every attempt conflicts.
        ValueError: If attempts is less than 1.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await operation()
        except ConcurrentModificationError as e:
            if attempt >= attempts:
                logger.warning(
                    "Giving up after version conflicts",
                    attempts=attempts,
                    key=e.key,
                )
                raise
            logger.info("Version conflict, retrying", attempt=attempt, key=e.key)
            attempt += 1
