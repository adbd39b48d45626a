"""Tests for the key-value stores behind adaptive learning."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from phishlens.learning.store import MemoryKeyValueStore, SqlKeyValueStore
from phishlens.models.base import Base


@pytest_asyncio.fixture
async def sql_store():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlKeyValueStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_missing_key(self):
        assert await MemoryKeyValueStore().get("nope") is None

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        store = MemoryKeyValueStore()
        value = {"a": [1, 2]}
        await store.set("k", value)
        value["a"].append(3)
        assert await store.get("k") == {"a": [1, 2]}


class TestSqlKeyValueStore:
    @pytest.mark.asyncio
    async def test_missing_key(self, sql_store):
        assert await sql_store.get("weight_adjustments") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, sql_store):
        await sql_store.set("domain_reputation", {"evil.example": {"phishingCount": 2}})
        assert await sql_store.get("domain_reputation") == {"evil.example": {"phishingCount": 2}}

    @pytest.mark.asyncio
    async def test_overwrite(self, sql_store):
        await sql_store.set("feedback_log", [])
        await sql_store.set("feedback_log", [{"text": "hi"}])
        assert await sql_store.get("feedback_log") == [{"text": "hi"}]
