"""Tests for the ordered fallback combinator."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from saas_e2e.e2e_modules.orchestrators import FallbackExhaustedError, run_fallback


@pytest.mark.asyncio
async def test_first_success_stops_the_sequence(test_logger):
    first = AsyncMock()
    second = AsyncMock()

    winner = await run_fallback([("api", first), ("ui", second)], test_logger)

    assert winner == "api"
    first.assert_awaited_once()
    second.assert_not_called()


@pytest.mark.asyncio
async def test_failure_falls_through_to_next(test_logger):
    first = AsyncMock(side_effect=ValueError("api down"))
    second = AsyncMock()

    winner = await run_fallback([("api", first), ("ui", second)], test_logger)

    assert winner == "ui"
    first.assert_awaited_once()
    second.assert_awaited_once()


@pytest.mark.asyncio
async def test_all_failures_are_recorded_in_order(test_logger):
    first = AsyncMock(side_effect=ValueError("api down"))
    second = AsyncMock(side_effect=RuntimeError("form missing"))

    with pytest.raises(FallbackExhaustedError) as exc_info:
        await run_fallback([("api", first), ("ui", second)], test_logger)

    error = exc_info.value
    assert [failure.name for failure in error.failures] == ["api", "ui"]
    assert isinstance(error.error_for("api"), ValueError)
    assert isinstance(error.error_for("ui"), RuntimeError)
    assert error.error_for("sso") is None
    assert str(error) == "All strategies failed: api: api down; ui: form missing"


@pytest.mark.asyncio
async def test_each_strategy_runs_once(test_logger):
    flaky = AsyncMock(side_effect=[ValueError("first"), None])

    with pytest.raises(FallbackExhaustedError):
        await run_fallback([("api", flaky)], test_logger)

    assert flaky.await_count == 1


@pytest.mark.asyncio
async def test_empty_sequence_raises(test_logger):
    with pytest.raises(FallbackExhaustedError, match="no strategies given"):
        await run_fallback([], test_logger)
