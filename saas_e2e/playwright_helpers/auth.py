"""
Login helpers for Playwright sessions in the E2E suite.

This module authenticates a browser page against the SaaS admin app either by
posting credentials to the backend login endpoint and seeding the returned
token into localStorage, or by filling in the login form. ensure_session
combines both: API first, UI as the fallback.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ..e2e_modules.data_types import AuthSettings, Credentials
from ..e2e_modules.orchestrators import FallbackExhaustedError, run_fallback
from ..e2e_modules.utils import get_logger, load_e2e_env, load_settings
from .selectors import (
    HAS_TOKEN_SCRIPT,
    LOGIN_PATH,
    PASSWORD_INPUT,
    ROOT_PATH,
    SEED_TOKEN_SCRIPT,
    SUBMIT_BUTTON,
    USERNAME_INPUT,
)
from .waits import is_visible, soft_wait

API_LOGIN_PATH = "/api/v1/auth/login"


class LoginError(Exception):
    """Base exception for login helper errors."""
    pass


class AuthenticationError(LoginError):
    """Raised when the login endpoint rejects the request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_response(cls, response: httpx.Response) -> "AuthenticationError":
        return cls(
            f"Login failed: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            reason=response.reason_phrase,
        )


class VerificationError(LoginError):
    """Raised when a login path finished but the page is still unauthenticated."""
    pass


class AggregateAuthenticationError(LoginError):
    """Raised when both the API and the UI login paths failed."""

    def __init__(
        self,
        api_error: Optional[BaseException],
        ui_error: Optional[BaseException],
    ) -> None:
        super().__init__(
            "Login failed: both API and UI login failed. "
            f"API error: {api_error}, UI error: {ui_error}"
        )
        self.api_error = api_error
        self.ui_error = ui_error


class LoginOrchestrator:
    """
    Logs Playwright pages into the admin app.

    Holds configuration only; every operation works on the page it is given,
    so one orchestrator can serve many pages sequentially.

    Example:
        orchestrator = LoginOrchestrator()
        await orchestrator.ensure_session(page)
        assert await orchestrator.check_session(page)
    """

    def __init__(
        self,
        settings: Optional[AuthSettings] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            settings: Resolved settings; read from the environment when omitted
            logger: Logger for progress and soft failures
            transport: httpx transport for the login request (tests pass a MockTransport)
        """
        self.settings = settings or load_settings()
        self.logger = logger or get_logger()
        self._transport = transport

    def _page_url(self, path: str) -> str:
        # Relative paths resolve against the browser context's base_url.
        if self.settings.web_base_url:
            return f"{self.settings.web_base_url.rstrip('/')}{path}"
        return path

    @property
    def login_endpoint(self) -> str:
        return f"{self.settings.api_base_url.rstrip('/')}{API_LOGIN_PATH}"

    async def form_login(self, page: Page, credentials: Optional[Credentials] = None) -> None:
        """
        Log in by filling and submitting the login form.

        Missing form elements and slow redirects are logged, not raised;
        the caller verifies the outcome with check_session.

        Args:
            page: Playwright page to log in
            credentials: Account to use; defaults to the configured test account
        """
        creds = credentials or self.settings.credentials
        await page.goto(self._page_url(LOGIN_PATH))

        form = await soft_wait(
            page.wait_for_selector(USERNAME_INPUT, timeout=self.settings.element_timeout_ms),
            "wait for login form",
            self.logger,
        )
        if not form.completed:
            self.logger.info("Login form not found; already logged in or the page layout differs")

        username_input = page.locator(USERNAME_INPUT).first
        if await is_visible(username_input):
            await username_input.fill(creds.username)
        else:
            self.logger.info("Username input not visible, skipping")

        password_input = page.locator(PASSWORD_INPUT).first
        if await is_visible(password_input):
            await password_input.fill(creds.password)
        else:
            self.logger.info("Password input not visible, skipping")

        login_button = page.locator(SUBMIT_BUTTON).first
        if not await is_visible(login_button):
            self.logger.info("Login button not visible, not submitting")
            return

        await login_button.click()

        redirect = await soft_wait(
            page.wait_for_url(
                lambda url: LOGIN_PATH not in url,
                timeout=self.settings.navigation_timeout_ms,
            ),
            "wait for redirect away from login",
            self.logger,
        )
        if not redirect.completed:
            self.logger.info("No redirect after submitting the login form, continuing")

        await soft_wait(
            page.wait_for_load_state("networkidle", timeout=self.settings.network_idle_timeout_ms),
            "wait for network idle after form login",
            self.logger,
        )

    async def api_login(self, page: Page, credentials: Optional[Credentials] = None) -> None:
        """
        Log in through the backend and seed the token into localStorage.

        Faster than form_login and independent of the login page markup.

        Args:
            page: Playwright page to log in
            credentials: Account to use; defaults to the configured test account

        Raises:
            AuthenticationError: On a non-2xx status, a network error, or a
                response without an access_token
        """
        creds = credentials or self.settings.credentials
        url = self.login_endpoint
        self.logger.info(f"Logging in via API as {creds.username}")

        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout_s, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    url,
                    data={"username": creds.username, "password": creds.password},
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
            except httpx.RequestError as e:
                raise AuthenticationError(f"Network error: {str(e)}") from e

        if not response.is_success:
            raise AuthenticationError.from_response(response)

        try:
            token_data = response.json()
        except ValueError as e:
            raise AuthenticationError(
                f"Login response is not JSON: {response.text[:200]}",
                status_code=response.status_code,
            ) from e

        token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not token:
            raise AuthenticationError(
                "Login response did not include an access_token",
                status_code=response.status_code,
            )

        await page.goto(self._page_url(ROOT_PATH))
        await page.evaluate(SEED_TOKEN_SCRIPT, token)

        # Reload so the app picks up the token on boot
        await page.reload()
        await soft_wait(
            page.wait_for_load_state("networkidle", timeout=self.settings.network_idle_timeout_ms),
            "wait for network idle after API login",
            self.logger,
        )

    async def check_session(self, page: Page) -> bool:
        """Return True if the page is off the login page and holds a token."""

        if LOGIN_PATH in page.url:
            return False
        try:
            return bool(await page.evaluate(HAS_TOKEN_SCRIPT))
        except PlaywrightError as exc:
            # about:blank and other opaque origins deny localStorage access
            self.logger.debug(f"localStorage not readable at {page.url}: {exc}")
            return False

    async def _verify(self, page: Page, path_name: str) -> None:
        if not await self.check_session(page):
            raise VerificationError(f"Verification failed after {path_name} login")

    async def ensure_session(self, page: Page, credentials: Optional[Credentials] = None) -> None:
        """
        Make sure the page is logged in, logging in only when needed.

        Tries the API path first and falls back to the login form. Each path
        counts as successful only if check_session agrees afterwards.

        Raises:
            AggregateAuthenticationError: If both paths failed
        """
        if await self.check_session(page):
            self.logger.debug("Page already authenticated, skipping login")
            return

        async def via_api() -> None:
            await self.api_login(page, credentials)
            await self._verify(page, "API")

        async def via_ui() -> None:
            await self.form_login(page, credentials)
            await self._verify(page, "UI")

        try:
            await run_fallback([("api", via_api), ("ui", via_ui)], self.logger)
        except FallbackExhaustedError as exc:
            raise AggregateAuthenticationError(
                api_error=exc.error_for("api"), ui_error=exc.error_for("ui")
            ) from exc


def default_orchestrator() -> LoginOrchestrator:
    """Orchestrator configured the way the pytest fixtures configure theirs.

    Loads the suite's dotenv files first, so one-line helpers and fixtures
    agree on the API URL and the test account.
    """

    load_e2e_env()
    return LoginOrchestrator(settings=load_settings())


async def login_user(page: Page, credentials: Optional[Credentials] = None) -> None:
    """Log in through the login form using the default orchestrator."""

    await default_orchestrator().form_login(page, credentials)


async def login_via_api(page: Page, credentials: Optional[Credentials] = None) -> None:
    """Log in through the backend API using the default orchestrator."""

    await default_orchestrator().api_login(page, credentials)


async def is_logged_in(page: Page) -> bool:
    """Return True if the page is off the login page and holds a session token."""

    return await default_orchestrator().check_session(page)


async def ensure_logged_in(page: Page, credentials: Optional[Credentials] = None) -> None:
    """Log the page in unless it already is, API first then UI."""

    await default_orchestrator().ensure_session(page, credentials)
