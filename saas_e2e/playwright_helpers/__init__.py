"""
Playwright login helpers for the E2E suite.

This package logs Playwright browser pages into the SaaS admin app for
end-to-end tests.

Main exports:
- LoginOrchestrator: form login, API login, session check and ensure_session
- login_user / login_via_api / is_logged_in / ensure_logged_in: one-line helpers
- AuthenticationError, VerificationError, AggregateAuthenticationError
"""

from .auth import (
    AggregateAuthenticationError,
    AuthenticationError,
    LoginError,
    LoginOrchestrator,
    VerificationError,
    default_orchestrator,
    ensure_logged_in,
    is_logged_in,
    login_user,
    login_via_api,
)

__all__ = [
    "AggregateAuthenticationError",
    "AuthenticationError",
    "LoginError",
    "LoginOrchestrator",
    "VerificationError",
    "default_orchestrator",
    "ensure_logged_in",
    "is_logged_in",
    "login_user",
    "login_via_api",
]
