"""
Pytest configuration for icrud tests.

Provides a parameterized ``driver`` fixture so the same test runs under
eval_icrud, run_icrud and run_icrud_async.
"""

import pytest

from tests.stores import ALL_DRIVERS, Driver, InMemoryStore


@pytest.fixture(params=["eval", "run", "async"])
def driver(request: pytest.FixtureRequest) -> Driver:
    """Parameterized fixture providing all three drivers."""
    return ALL_DRIVERS[request.param]()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore({"a": {"name": "alice"}, "b": {"name": "bob"}})
