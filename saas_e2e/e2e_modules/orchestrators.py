"""Helpers for running ordered fallback strategies."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence, Tuple

from .data_types import StrategyFailure

Strategy = Tuple[str, Callable[[], Awaitable[None]]]


class FallbackExhaustedError(RuntimeError):
    """Raised when every strategy in a fallback sequence failed."""

    def __init__(self, failures: Sequence[StrategyFailure]) -> None:
        summary = "; ".join(failure.describe() for failure in failures) or "no strategies given"
        super().__init__(f"All strategies failed: {summary}")
        self.failures = list(failures)

    def error_for(self, name: str) -> BaseException | None:
        for failure in self.failures:
            if failure.name == name:
                return failure.error
        return None


async def run_fallback(strategies: Sequence[Strategy], logger: logging.Logger) -> str:
    """Run each strategy in order, stopping on the first success.

    Returns the name of the strategy that succeeded. Each strategy runs at
    most once.
    """

    failures: list[StrategyFailure] = []
    for name, attempt in strategies:
        logger.info(f"Trying {name} strategy")
        try:
            await attempt()
        except Exception as exc:
            logger.warning(f"{name} strategy failed: {exc}")
            failures.append(StrategyFailure(name=name, error=exc))
            continue
        logger.info(f"{name} strategy succeeded")
        return name

    raise FallbackExhaustedError(failures)


__all__ = ["FallbackExhaustedError", "Strategy", "run_fallback"]
