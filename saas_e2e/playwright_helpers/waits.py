"""Best-effort waits for Playwright pages.

Waits here never raise for timeouts or browser errors. They return a
WaitResult so callers can decide whether to care, and log the outcome.
"""

from __future__ import annotations

import logging
from typing import Awaitable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..e2e_modules.data_types import WaitOutcome, WaitResult


async def soft_wait(
    waitable: Awaitable[object], label: str, logger: logging.Logger
) -> WaitResult:
    """Await a Playwright wait and report how it ended.

    Args:
        waitable: Pending Playwright call, e.g. ``page.wait_for_url(...)``
        label: Short description used in logs and in the result
        logger: Logger receiving timeout and failure messages

    Returns:
        WaitResult with outcome COMPLETED, TIMED_OUT or FAILED
    """
    try:
        await waitable
    except PlaywrightTimeoutError as exc:
        logger.info(f"{label}: timed out, continuing")
        return WaitResult(outcome=WaitOutcome.TIMED_OUT, label=label, detail=str(exc))
    except PlaywrightError as exc:
        logger.warning(f"{label}: {exc}, continuing")
        return WaitResult(outcome=WaitOutcome.FAILED, label=label, detail=str(exc))

    logger.debug(f"{label}: completed")
    return WaitResult(outcome=WaitOutcome.COMPLETED, label=label)


async def is_visible(locator: Locator) -> bool:
    """Return True if the locator resolves to a visible element, False on any browser error."""

    try:
        return await locator.is_visible()
    except PlaywrightError:
        return False


__all__ = ["is_visible", "soft_wait"]
