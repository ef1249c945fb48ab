"""Shared fixtures for the login helper tests.

FakePage stands in for a Playwright page: it keeps a URL and a localStorage
dict and understands the two storage scripts the helpers evaluate.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from saas_e2e.e2e_modules.data_types import AuthSettings, Credentials
from saas_e2e.playwright_helpers.selectors import HAS_TOKEN_SCRIPT, SEED_TOKEN_SCRIPT

APP_URL = "http://localhost:3000"
API_URL = "http://api.test"


class FakePage:
    def __init__(self, url: str = "about:blank", storage: Optional[dict] = None) -> None:
        self.url = url
        self.storage: dict[str, str] = dict(storage or {})
        self.visible: set[str] = set()
        self.on_submit: Optional[Callable[["FakePage"], None]] = None
        self.locators: dict[str, MagicMock] = {}

        self.goto = AsyncMock(side_effect=self._goto)
        self.reload = AsyncMock()
        self.evaluate = AsyncMock(side_effect=self._evaluate)
        self.wait_for_selector = AsyncMock()
        self.wait_for_url = AsyncMock()
        self.wait_for_load_state = AsyncMock()
        self.locator = MagicMock(side_effect=self._locator)

    async def _goto(self, url: str) -> None:
        self.url = f"{APP_URL}{url}" if url.startswith("/") else url

    async def _evaluate(self, script: str, arg=None):
        if script == SEED_TOKEN_SCRIPT:
            self.storage["auth_token"] = arg
            self.storage["token"] = arg
            return None
        if script == HAS_TOKEN_SCRIPT:
            return bool(self.storage.get("auth_token") or self.storage.get("token"))
        raise AssertionError(f"Unexpected script: {script}")

    def _locator(self, selector: str) -> MagicMock:
        if selector not in self.locators:
            element = MagicMock()
            element.is_visible = AsyncMock(side_effect=lambda: selector in self.visible)
            element.fill = AsyncMock()
            element.click = AsyncMock(side_effect=self._click)
            wrapper = MagicMock()
            wrapper.first = element
            self.locators[selector] = wrapper
        return self.locators[selector]

    async def _click(self) -> None:
        if self.on_submit is not None:
            self.on_submit(self)

    def element(self, selector: str) -> MagicMock:
        return self._locator(selector).first


def _app_login_handler(page: FakePage) -> None:
    page.storage["token"] = "ui-token"
    page.url = f"{APP_URL}/dashboard"


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(
        api_base_url=API_URL,
        credentials=Credentials(username="admin@example.com", password="testpass123"),
    )


@pytest.fixture
def test_logger() -> logging.Logger:
    return logging.getLogger("saas_e2e.tests")


def _token_transport(token: str = "tok-123", status_code: int = 200, seen: Optional[list] = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if status_code >= 400:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json={"access_token": token, "token_type": "bearer"})

    return httpx.MockTransport(handler)


@pytest.fixture
def app_login_handler():
    """Simulates the app's own login handler after a successful form submit."""
    return _app_login_handler


@pytest.fixture
def token_transport():
    """Factory for MockTransports answering the login endpoint with a fixed response."""
    return _token_transport


E2E_ENV_VARS = (
    "PLAYWRIGHT_API_BASE_URL",
    "PLAYWRIGHT_BASE_URL",
    "E2E_USERNAME",
    "E2E_PASSWORD",
    "E2E_ENV_FILE",
    "E2E_CONFIG_DIR",
    "E2E_LOG_ROOT",
)


@pytest.fixture(scope="session", autouse=True)
def isolated_e2e_env(tmp_path_factory):
    """Keep dotenv loading and run logs away from the repository for the whole session.

    Every E2E variable is registered with the MonkeyPatch before anything can
    write it, so values load_dotenv sets during the run are undone at the end.
    """
    mp = pytest.MonkeyPatch()
    for name in E2E_ENV_VARS:
        mp.setenv(name, "")
        mp.delenv(name)
    mp.setenv("E2E_CONFIG_DIR", str(tmp_path_factory.mktemp("e2e_config")))
    mp.setenv("E2E_LOG_ROOT", str(tmp_path_factory.mktemp("e2e_logs")))
    yield
    mp.undo()
