"""Storage service abstraction.

A record store exposes two coroutines: ``write`` persists any value
under a freshly generated id and ``read`` returns it again. Only the
in-memory backend exists; records live for the lifetime of the process
and nothing is written to disk.
"""

from __future__ import annotations

import abc
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from receipt_points.core.exceptions import RecordNotFoundError


@dataclass(frozen=True)
class StorageRecord:
    id: str
    value: Any


class Storage(abc.ABC):
    """Interface every record store implements."""

    @abc.abstractmethod
    async def read(self, id: str) -> StorageRecord:
        """Return the record stored under ``id`` or raise ``RecordNotFoundError``."""

    @abc.abstractmethod
    async def write(self, value: Any) -> StorageRecord:
        """Persist ``value`` and return the record with its new id."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of stored records."""


class MemoryStorage(Storage):
    """Dict-backed store indexed by record id.

    Records are almost always fetched by id, so a plain dict gives
    constant time lookups.
    """

    def __init__(self, store: Optional[Dict[str, StorageRecord]] = None) -> None:
        self._store: Dict[str, StorageRecord] = store if store is not None else {}

    def __len__(self) -> int:
        return len(self._store)

    async def read(self, id: str) -> StorageRecord:
        record = self._store.get(id)
        if record is None:
            raise RecordNotFoundError(id)
        return record

    async def write(self, value: Any) -> StorageRecord:
        if value is None:
            raise ValueError("Cannot store an empty value")
        # Unique id is generated on write
        record = StorageRecord(id=str(uuid.uuid4()), value=value)
        self._store[record.id] = record
        return record


__all__ = ["Storage", "StorageRecord", "MemoryStorage"]
