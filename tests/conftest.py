"""Shared test fixtures."""

import pytest
import pytest_asyncio

from phishlens.learning.adaptive import AdaptiveLearning
from phishlens.learning.store import MemoryKeyValueStore


@pytest.fixture
def store():
    """Empty in-memory learning store."""
    return MemoryKeyValueStore()


@pytest_asyncio.fixture
async def learning(store):
    """Initialized AdaptiveLearning over an empty in-memory store."""
    engine = AdaptiveLearning(store)
    await engine.initialize()
    return engine
