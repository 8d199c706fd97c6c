"""
Suite configuration module.

This module defines configuration classes for the environments the
end-to-end suite runs in (local workstation, CI). Values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


def parse_change_list(raw: str | None) -> tuple[int, ...]:
    """
    Parse a comma-separated list of UI change numbers.

    Args:
        raw: Value such as "1,3". Blank or None yields an empty tuple.

    Returns:
        Sorted, de-duplicated change numbers.

    Raises:
        ValueError: If an entry is not one of 1, 2 or 3.
    """
    if not raw:
        return ()
    changes = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if part not in {"1", "2", "3"}:
            raise ValueError(f"Unknown UI change {part!r}; expected 1, 2 or 3")
        changes.add(int(part))
    return tuple(sorted(changes))


class Config:
    """Base configuration with default settings."""

    # Application under test
    BASE_URL: str = os.environ.get("TEST_BASE_URL", "http://localhost:5173")
    APP_START_COMMAND: str = os.environ.get("APP_START_COMMAND", "")
    APP_READY_TIMEOUT_S: int = int(os.environ.get("APP_READY_TIMEOUT_S", "60"))

    # Playwright waits (milliseconds)
    NAVIGATION_TIMEOUT_MS: int = 10_000
    ACTION_TIMEOUT_MS: int = 5_000
    ASSERTION_TIMEOUT_MS: int = 5_000
    HEALING_CHECK_TIMEOUT_MS: int = 2_000
    DIALOG_TIMEOUT_MS: int = 5_000
    SETTLE_MS: int = 200

    VIEWPORT: dict = {"width": 1280, "height": 720}

    ARTIFACTS_DIR: Path = Path(
        os.environ.get("E2E_ARTIFACTS_DIR", BASE_DIR / "test-results")
    )

    # Changes applied on /dev before healing scenarios run
    APPLIED_CHANGES: tuple[int, ...] = parse_change_list(
        os.environ.get("HEALING_APPLY_CHANGES")
    )


class LocalConfig(Config):
    """Local workstation configuration."""

    CI: bool = False


class CIConfig(Config):
    """CI configuration with more generous waits for shared runners."""

    CI: bool = True

    NAVIGATION_TIMEOUT_MS: int = 20_000
    ACTION_TIMEOUT_MS: int = 10_000
    ASSERTION_TIMEOUT_MS: int = 10_000
    APP_READY_TIMEOUT_S: int = int(os.environ.get("APP_READY_TIMEOUT_S", "120"))


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses E2E_ENV, falling back to "ci" when the
             CI environment variable is set.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("E2E_ENV") or ("ci" if os.environ.get("CI") else "local")
    return config.get(env, config["default"])
