"""Key-value persistence for adaptive-learning state.

Values are JSON-serializable documents. The SQL store keeps one
``LearningRecord`` row per key.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..models.learning_record import LearningRecord


class KeyValueStore(ABC):
    """Async key-value store for JSON documents."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key was never written."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class MemoryKeyValueStore(KeyValueStore):
    """In-process store. Values are JSON round-tripped so callers never share state with it."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the ``learning_records`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str) -> Optional[Any]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(LearningRecord).where(LearningRecord.key == key)
            )
            row = result.scalar_one_or_none()
        if row is None:
            return None
        return json.loads(row.value_json)

    async def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        async with self._session_factory() as session:
            row = await session.get(LearningRecord, key)
            if row is None:
                session.add(LearningRecord(key=key, value_json=payload))
            else:
                row.value_json = payload
                row.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
            await session.commit()
