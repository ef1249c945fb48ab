"""Data models for the E2E login helpers."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Matches the user created by the admin backend's test fixtures.
DEFAULT_TEST_USERNAME = "admin@example.com"
DEFAULT_TEST_PASSWORD = "testpass123"

DEFAULT_API_BASE_URL = "http://localhost:8000"


class Credentials(BaseModel):
    """Username/password pair used by both login paths."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


class WaitOutcome(str, Enum):
    """How a best-effort wait ended."""
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"      # browser error other than a timeout


class WaitResult(BaseModel):
    outcome: WaitOutcome
    label: str
    detail: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.outcome == WaitOutcome.COMPLETED


class AuthSettings(BaseModel):
    """Resolved configuration for a LoginOrchestrator.

    Timeouts follow Playwright conventions (milliseconds) except for the
    HTTP request timeout, which httpx takes in seconds.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    web_base_url: Optional[str] = None
    credentials: Credentials = Field(
        default_factory=lambda: Credentials(
            username=DEFAULT_TEST_USERNAME, password=DEFAULT_TEST_PASSWORD
        )
    )
    element_timeout_ms: int = 5_000
    navigation_timeout_ms: int = 10_000
    network_idle_timeout_ms: int = 10_000
    request_timeout_s: float = 30.0


class StrategyFailure(BaseModel):
    """A single failed attempt recorded by the fallback combinator."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    error: BaseException

    def describe(self) -> str:
        return f"{self.name}: {self.error}"


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_TEST_PASSWORD",
    "DEFAULT_TEST_USERNAME",
    "AuthSettings",
    "Credentials",
    "StrategyFailure",
    "WaitOutcome",
    "WaitResult",
]
