"""
Failure taxonomy for the end-to-end suite.

Page objects translate Playwright timeouts into these errors so a failed
scenario reports which view, route or identifier it was waiting on.
None of them is retried; they abort the running scenario.
"""

from __future__ import annotations

from typing import Any


class SuiteError(Exception):
    """Base class for harness-level failures."""


class NavigationError(SuiteError):
    """The route's marker element never appeared after navigation."""

    def __init__(self, route: str, marker: str, timeout_ms: int):
        self.route = route
        self.marker = marker
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Navigation to {route} did not show '{marker}' within {timeout_ms}ms"
        )


class ElementNotReadyError(SuiteError):
    """A target element was absent or not actionable within its timeout."""

    def __init__(self, identifier: str, action: str, timeout_ms: int):
        self.identifier = identifier
        self.action = action
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Element '{identifier}' not ready to {action} within {timeout_ms}ms"
        )


class DialogTimeout(SuiteError):
    """An armed confirmation dialog was never raised by the triggering action."""

    def __init__(self, trigger: str, timeout_ms: int):
        self.trigger = trigger
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Clicking '{trigger}' did not raise a dialog within {timeout_ms}ms"
        )


class AssertionFailure(AssertionError):
    """Observed UI value differs from the expected oracle value."""

    def __init__(self, what: str, expected: Any, actual: Any):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected {expected!r}, got {actual!r}")
