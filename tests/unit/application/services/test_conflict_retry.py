"""Unit tests for retry_on_conflict."""

from unittest.mock import AsyncMock

import pytest

from identityhub.application.services import retry_on_conflict
from identityhub.domain.exceptions import ConcurrentModificationError, NotFoundError


def _conflict() -> ConcurrentModificationError:
    return ConcurrentModificationError("user", "jane@example.com")


@pytest.mark.asyncio
async def test_returns_first_success():
    operation = AsyncMock(return_value="done")

    assert await retry_on_conflict(operation) == "done"
    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_retries_after_conflict():
    operation = AsyncMock(side_effect=[_conflict(), _conflict(), "done"])

    assert await retry_on_conflict(operation, attempts=3) == "done"
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_raises_after_last_attempt():
    operation = AsyncMock(side_effect=_conflict())

    with pytest.raises(ConcurrentModificationError):
        await retry_on_conflict(operation, attempts=2)

    assert operation.await_count == 2


@pytest.mark.asyncio
async def test_other_errors_are_not_retried():
    operation = AsyncMock(side_effect=NotFoundError("user", "jane@example.com"))

    with pytest.raises(NotFoundError):
        await retry_on_conflict(operation, attempts=3)

    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_rejects_zero_attempts():
    operation = AsyncMock()

    with pytest.raises(ValueError):
        await retry_on_conflict(operation, attempts=0)

    operation.assert_not_awaited()
