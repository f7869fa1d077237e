"""Tests for the fixed-count retry helper."""

from unittest.mock import AsyncMock

import pytest

from skills_service.core.retry import with_retry


@pytest.mark.asyncio
async def test_returns_first_success_without_retrying():
    operation = AsyncMock(return_value="ok")

    result = await with_retry(3, operation)

    assert result == "ok"
    assert operation.await_count == 1


@pytest.mark.asyncio
async def test_retries_until_success():
    operation = AsyncMock(side_effect=[ValueError("a"), ValueError("b"), "ok"])

    result = await with_retry(3, operation)

    assert result == "ok"
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_raises_last_error_when_attempts_exhausted():
    last = ValueError("third")
    operation = AsyncMock(side_effect=[ValueError("first"), ValueError("second"), last])

    with pytest.raises(ValueError) as exc_info:
        await with_retry(3, operation)

    assert exc_info.value is last
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_attempt_count_is_total_invocations():
    operation = AsyncMock(side_effect=RuntimeError("always"))

    with pytest.raises(RuntimeError):
        await with_retry(1, operation)

    assert operation.await_count == 1


@pytest.mark.asyncio
async def test_rejects_non_positive_attempts():
    operation = AsyncMock()

    with pytest.raises(ValueError, match="num_attempts"):
        await with_retry(0, operation)

    operation.assert_not_called()


@pytest.mark.asyncio
async def test_logs_each_failed_attempt(caplog):
    operation = AsyncMock(side_effect=[RuntimeError("x"), "ok"])

    with caplog.at_level("WARNING", logger="skills_service.core.retry"):
        await with_retry(3, operation, name="reportSkill")

    assert "reportSkill failed on attempt 1/3, retrying" in caplog.text


@pytest.mark.asyncio
async def test_logs_giving_up_on_last_attempt(caplog):
    operation = AsyncMock(side_effect=[RuntimeError("x"), RuntimeError("y")])

    with caplog.at_level("WARNING", logger="skills_service.core.retry"):
        with pytest.raises(RuntimeError):
            await with_retry(2, operation, name="reportSkill")

    assert "reportSkill failed on attempt 1/2, retrying: RuntimeError('x')" in caplog.text
    assert "reportSkill failed on attempt 2/2, giving up: RuntimeError('y')" in caplog.text


@pytest.mark.asyncio
async def test_error_is_not_wrapped():
    operation = AsyncMock(side_effect=KeyError("missing"))

    with pytest.raises(KeyError):
        await with_retry(2, operation)

    assert operation.await_count == 2
