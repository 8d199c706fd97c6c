"""Resolve a reachable Dummy QA App instance for the browser suites."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from collections.abc import Generator

import pytest
import requests

logger = logging.getLogger(__name__)


def is_app_ready(url: str, timeout: int = 2) -> bool:
    """Return True when the app serves its login route with a 200."""
    try:
        response = requests.get(f"{url}/login", timeout=timeout)
    except requests.RequestException:
        return False
    return response.status_code == 200


def wait_for_app_ready(url: str, timeout: int = 60, interval: int = 1) -> None:
    """Poll the app until it answers or the timeout elapses."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if is_app_ready(url):
            return
        time.sleep(interval)
    raise RuntimeError(f"App at {url} not ready after {timeout}s")


def _stop(process: subprocess.Popen, grace: int = 10) -> None:
    process.terminate()
    try:
        process.wait(timeout=grace)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()


def live_app_url(
    *,
    base_url_env: str,
    base_url_default: str,
    start_command: str,
    ready_timeout: int = 60,
) -> Generator[str, None, None]:
    """
    Yield a ready base URL, reusing or starting the app when needed.

    Priority:
    1. Use explicit base URL from `base_url_env` (and wait for it).
    2. Reuse an app already serving at `base_url_default`.
    3. Run `start_command`, wait for readiness, then stop it on exit.

    Step 3 is refused inside a pytest-xdist worker: every worker would
    start its own copy on the same port, and the first to finish would
    stop the app the others still use. Parallel runs need an app that is
    already running (`base_url_env` or `base_url_default`).

    Raises:
        RuntimeError: If the app would have to be started by an xdist worker.
    """
    provided_base_url = os.getenv(base_url_env)
    if provided_base_url:
        logger.info("Using app at %s from %s", provided_base_url, base_url_env)
        wait_for_app_ready(provided_base_url, timeout=ready_timeout)
        yield provided_base_url
        return

    base_url = base_url_default
    if is_app_ready(base_url):
        logger.info("Reusing app already running at %s", base_url)
        yield base_url
        return

    if not start_command:
        pytest.skip(
            f"No app reachable at {base_url}; set {base_url_env} or "
            "APP_START_COMMAND to run browser tests"
        )

    worker = os.getenv("PYTEST_XDIST_WORKER")
    if worker:
        raise RuntimeError(
            f"No app reachable at {base_url} and worker {worker} will not start one; "
            f"start the app once and set {base_url_env} when running with --workers"
        )

    logger.info("Starting app: %s", start_command)
    try:
        process = subprocess.Popen(
            shlex.split(start_command),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        pytest.skip(f"App start command not found: {start_command}")

    try:
        wait_for_app_ready(base_url, timeout=ready_timeout)
        yield base_url
    finally:
        logger.info("Stopping app process %s", process.pid)
        _stop(process)
