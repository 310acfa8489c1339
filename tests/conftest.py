"""
Pytest configuration and shared fixtures for sthash tests.

Usage:
    pytest                 # Run everything
    pytest -m api          # HTTP API tests only
    pytest -m "not api"    # Hashing engine only
"""

import pytest
from fastapi.testclient import TestClient

from sthash.core.config import settings
from sthash.main import app

# hash_spacetime("abc", 100, 700, 25.123456, 122.123000, 10, -3, 1)
GOLDEN_TOKENS = [
    # timestamp 0
    "4bc38a6e7d6ff3b1", "c382a0e3cb70d994", "bb10b2665ae6ddfb",
    "c70af5fb7b8fde48", "3221754cc20782e2",
    "9eb8bf971bd6a5c4", "3edfc9c2b1918d94", "b677765bc46e842c",
    # timestamp 600
    "1d4093fde8022368", "514f818e18001c56", "e3c6e6e96e94d4be",
    "6d196070385fb881", "0cefa29f531ab9a5",
    "3354367bcca7a39a", "38df5a16e00b8fdd", "dc37d585fefe04e2",
    # timestamp 1200
    "f003d1589b89a76c", "85ec3daafd12a580", "435ce8b5b333c9b0",
    "546835556647f287", "0a79fc6b39705be6",
    "46b4b9f876166efe", "8f72ee403295fa96", "e086767349312bc8",
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: HTTP API tests")


def pytest_collection_modifyitems(config, items):
    """Auto-apply markers based on test file names."""
    for item in items:
        if "api" in item.fspath.basename:
            item.add_marker(pytest.mark.api)


@pytest.fixture
def golden_tokens():
    return list(GOLDEN_TOKENS)


@pytest.fixture
def no_hash_key(monkeypatch):
    """Make sure no HASH_KEY leaks in from the environment or a .env file."""
    monkeypatch.setattr(settings, "HASH_KEY", None)


@pytest.fixture
def client(no_hash_key):
    with TestClient(app) as test_client:
        yield test_client
