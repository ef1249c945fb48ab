"""Shared utilities for the E2E helpers: environment, settings and logging.

Dotenv files and run logs live in the consuming suite's directory, not next
to this package: that is E2E_CONFIG_DIR when set, otherwise the working
directory pytest was started from.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from pathlib import Path

from dotenv import load_dotenv

from .data_types import DEFAULT_API_BASE_URL, AuthSettings, Credentials

PROJECT_NAME = "saas-e2e"
LOGGER_NAME = "saas_e2e"

# Later files win over earlier ones.
DEFAULT_E2E_ENV_FILENAMES = (
    "e2e/.env",
    "e2e/.env.local",
    ".env.e2e",
    ".env.e2e.local",
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_dir() -> Path:
    """Directory holding the suite's dotenv files and default log folder."""

    override = os.getenv("E2E_CONFIG_DIR", "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd()


def e2e_env_files() -> list[Path]:
    """Dotenv files to layer on top of the shared .env, in load order.

    E2E_ENV_FILE replaces the default list; relative entries are taken
    from config_dir().
    """

    base = config_dir()
    override = os.getenv("E2E_ENV_FILE", "").strip()
    names = override.split(os.pathsep) if override else list(DEFAULT_E2E_ENV_FILENAMES)
    return [base / Path(name.strip()).expanduser() for name in names if name.strip()]


def load_e2e_env() -> list[Path]:
    """Load .env without overriding the shell, then the E2E files with override.

    Returns the files that were actually loaded.
    """

    loaded: list[Path] = []
    shared = config_dir() / ".env"
    if shared.is_file():
        load_dotenv(shared, override=False)
        loaded.append(shared)

    for env_path in e2e_env_files():
        if env_path.is_file():
            load_dotenv(env_path, override=True)
            loaded.append(env_path)

    if loaded:
        get_logger().debug(f"Loaded env files: {', '.join(str(p) for p in loaded)}")
    return loaded


def api_base_url() -> str:
    """Base URL of the backend API, without a trailing slash."""

    url = os.getenv("PLAYWRIGHT_API_BASE_URL") or DEFAULT_API_BASE_URL
    return url.rstrip("/")


def load_settings() -> AuthSettings:
    """Build AuthSettings from the current environment.

    Unset variables fall back to the model defaults, so an empty environment
    yields the local backend and the built-in test account.
    """

    defaults = AuthSettings()
    web_base_url = (os.getenv("PLAYWRIGHT_BASE_URL") or "").strip().rstrip("/")
    credentials = Credentials(
        username=os.getenv("E2E_USERNAME") or defaults.credentials.username,
        password=os.getenv("E2E_PASSWORD") or defaults.credentials.password,
    )
    return AuthSettings(
        api_base_url=api_base_url(),
        web_base_url=web_base_url or None,
        credentials=credentials,
    )


def logs_root() -> Path:
    """Root directory for run logs: E2E_LOG_ROOT, else ./logs in config_dir()."""

    override = os.environ.get("E2E_LOG_ROOT")
    base = Path(override) if override else config_dir() / "logs"
    return base / PROJECT_NAME


def make_run_id() -> str:
    """Generate an 8-character run identifier."""

    return str(uuid.uuid4())[:8]


def setup_logger(run_id: str, console_level: int = logging.INFO) -> logging.Logger:
    """Send the helpers' logs to <logs_root>/<run_id>/login.log and to stdout.

    Calling it again for a new run replaces the previous run's handlers.
    """

    log_file = logs_root() / run_id / "login.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("[e2e] %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.debug(f"Run {run_id} logging to {log_file}")
    return logger


def get_logger() -> logging.Logger:
    """Return the helpers' logger (configured or not)."""

    return logging.getLogger(LOGGER_NAME)


__all__ = [
    "DEFAULT_E2E_ENV_FILENAMES",
    "LOGGER_NAME",
    "PROJECT_NAME",
    "api_base_url",
    "config_dir",
    "e2e_env_files",
    "get_logger",
    "load_e2e_env",
    "load_settings",
    "logs_root",
    "make_run_id",
    "setup_logger",
]
