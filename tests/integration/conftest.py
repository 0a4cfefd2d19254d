"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_BOORU_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_BOORU_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_BOORU_NETWORK_TESTS=1 to run",
)

USER_AGENT = os.environ.get(
    "BOORU_USER_AGENT", "booru-e621/integration_tests (by booru-e621 maintainers)"
)


@pytest.fixture
def user_agent() -> str:
    return USER_AGENT
