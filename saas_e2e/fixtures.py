"""pytest plugin exposing login fixtures to E2E suites.

Enable it from a conftest.py:

    pytest_plugins = ["saas_e2e.fixtures"]

logged_in_page expects the harness to provide an async Playwright ``page``
fixture (for example from pytest-playwright-asyncio).
"""

from __future__ import annotations

import pytest
import pytest_asyncio

from saas_e2e.e2e_modules.data_types import AuthSettings, Credentials
from saas_e2e.e2e_modules.utils import load_e2e_env, load_settings, make_run_id, setup_logger
from saas_e2e.playwright_helpers.auth import LoginOrchestrator


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a running admin app and browser"
    )


@pytest.fixture(scope="session")
def e2e_settings() -> AuthSettings:
    """Settings resolved from dotenv files and the environment."""
    load_e2e_env()
    return load_settings()


@pytest.fixture(scope="session")
def login_credentials(e2e_settings: AuthSettings) -> Credentials:
    """Test account used when a test does not pass its own credentials."""
    return e2e_settings.credentials


@pytest.fixture(scope="session")
def login_orchestrator(e2e_settings: AuthSettings) -> LoginOrchestrator:
    logger = setup_logger(make_run_id())
    return LoginOrchestrator(settings=e2e_settings, logger=logger)


@pytest_asyncio.fixture
async def logged_in_page(page, login_orchestrator: LoginOrchestrator, login_credentials: Credentials):
    """The harness page, logged in before the test starts."""
    await login_orchestrator.ensure_session(page, login_credentials)
    return page
