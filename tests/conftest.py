"""
Shared pytest fixtures for the Dummy QA App test suite.

This module contains fixtures shared by the browser suites and the
harness unit tests: the active configuration and a factory for user
records with unique, realistic values.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Test data factories backed by Faker
- Environment-driven configuration
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

import pytest
from faker import Faker

from qa_support.config import Config, get_config
from qa_support.test_data import Role, UserRecord

# Initialize Faker for generating test data
fake = Faker()


@pytest.fixture(scope="session")
def app_settings() -> type[Config]:
    """Configuration class selected by E2E_ENV (or CI)."""
    return get_config()


@pytest.fixture
def user_factory() -> Callable[..., UserRecord]:
    """
    Factory fixture for new (not yet created) user records.

    Emails carry a random suffix so records never collide with seeded
    users or with each other.

    Example:
        def test_something(user_factory):
            user = user_factory(role=Role.MANAGER)
            assert user.id is None
    """

    def _make(
        name: str | None = None,
        role: Role | None = None,
        department: str | None = None,
    ) -> UserRecord:
        suffix = uuid.uuid4().hex[:6]
        return UserRecord(
            id=None,
            name=name or fake.name(),
            email=f"e2e_{suffix}_{fake.user_name()}@example.com",
            role=role or fake.random_element(list(Role)),
            department=department,
        )

    return _make
