"""
Key-Value Store - async string storage with last-writer-wins semantics.
"""
from typing import Iterable, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fittrack.core.database import get_session
from fittrack.core.exceptions import StorageError
from fittrack.core.logging import get_logger
from fittrack.models.kv import KeyValueEntry

logger = get_logger(__name__)


class KeyValueStore:
    """
    Database-backed key-value store.

    Each call runs in its own session. A write replaces the whole value
    stored under its key.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string or None if the key is unset
        """
        try:
            async with get_session(self.session_factory) as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            logger.error("Failed to read key", key=key, error=str(e))
            raise StorageError(f"Failed to read {key}") from e

    async def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Args:
            key: Storage key
            value: String to store
        """
        try:
            async with get_session(self.session_factory) as session:
                existing = await session.get(KeyValueEntry, key)

                if existing:
                    existing.value = value
                else:
                    session.add(KeyValueEntry(key=key, value=value))

                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to write key", key=key, error=str(e))
            raise StorageError(f"Failed to write {key}") from e

        logger.debug("Stored value", key=key, length=len(value))

    async def multi_remove(self, keys: Iterable[str]) -> None:
        """
        Remove several keys at once. Missing keys are ignored.

        Args:
            keys: Storage keys to remove
        """
        keys = list(keys)
        try:
            async with get_session(self.session_factory) as session:
                await session.execute(
                    delete(KeyValueEntry).where(KeyValueEntry.key.in_(keys))
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to remove keys", keys=keys, error=str(e))
            raise StorageError("Failed to remove keys") from e

        logger.debug("Removed keys", keys=keys)
