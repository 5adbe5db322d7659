"""
Durable CRUD over one homogeneous collection of records.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

import aiosqlite

from ..db import SQLiteDatabase, EntityKind, MutationResult, MutationStatus, generate_id

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

# Errors a storage write may raise; they are logged, never propagated
STORAGE_ERRORS = (aiosqlite.Error, OSError)


class EntityStore:
    """
    One collection of records (customers, products, orders, ...).

    The whole collection lives in memory and is rewritten to storage after
    every mutation. Mutations are serialized by a per-store lock so their
    read-modify-write cycles never interleave.
    """

    def __init__(self, db: SQLiteDatabase, kind: EntityKind):
        self.db = db
        self.kind = kind
        self._records: List[Record] = []
        self._lock = asyncio.Lock()
        self._loaded = False

    @property
    def storage_key(self) -> str:
        return self.kind.storage_key

    async def load(self) -> None:
        """Read the collection from storage. Absent or corrupt data means empty."""
        try:
            value = await self.db.get_json(self.storage_key)
        except ValueError as e:
            logger.error(f"Corrupt data under '{self.storage_key}', starting empty: {e}")
            value = None
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to read '{self.storage_key}', starting empty: {e}")
            value = None

        if value is None:
            self._records = []
        elif not isinstance(value, list):
            logger.error(f"Unexpected value under '{self.storage_key}' ({type(value).__name__}), starting empty")
            self._records = []
        else:
            self._records = [r for r in value if isinstance(r, dict)]

        self._loaded = True
        logger.debug(f"Loaded {len(self._records)} records from '{self.storage_key}'")

    async def _persist(self) -> Optional[str]:
        """Write the whole collection. Returns an error message on failure."""
        try:
            await self.db.set_json(self.storage_key, self._records)
            return None
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to save '{self.storage_key}': {e}")
            return str(e)

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.get("id") == record_id:
                return i
        return -1

    # ===== Reads =====

    def get_all(self) -> List[Record]:
        """Snapshot of the collection. Changing it does not affect the store."""
        return copy.deepcopy(self._records)

    def get(self, record_id: str) -> Optional[Record]:
        index = self._index_of(record_id)
        return copy.deepcopy(self._records[index]) if index >= 0 else None

    def find_by(self, field: str, value: Any) -> Optional[Record]:
        """First record whose ``field`` equals ``value``."""
        for record in self._records:
            if record.get(field) == value:
                return copy.deepcopy(record)
        return None

    def __len__(self) -> int:
        return len(self._records)

    # ===== Mutations =====

    def _new_record(self, fields: Record) -> Record:
        record = copy.deepcopy(dict(fields))
        record["id"] = generate_id(self.kind.id_prefix)
        return record

    async def add(self, fields: Record) -> Record:
        """Create a record with a fresh id, persist, and return a copy of it."""
        async with self._lock:
            record = self._new_record(fields)
            self._records.append(record)
            await self._persist()
            return copy.deepcopy(record)

    async def add_many(self, items: Iterable[Record]) -> List[Record]:
        """Create several records with a single write."""
        async with self._lock:
            created = [self._new_record(fields) for fields in items]
            self._records.extend(created)
            await self._persist()
            return copy.deepcopy(created)

    async def update(self, record_id: str, partial: Record) -> MutationResult:
        """
        Merge ``partial`` over the record with ``record_id``.

        A missing id is a silent no-op; the NOT_FOUND status is only
        visible to callers that inspect the result.
        """
        async with self._lock:
            index = self._index_of(record_id)
            if index < 0:
                logger.warning(f"Record '{record_id}' not found in '{self.storage_key}' for update")
                return MutationResult(status=MutationStatus.NOT_FOUND)

            changes = copy.deepcopy(dict(partial))
            changes.pop("id", None)
            self._records[index].update(changes)

            error = await self._persist()
            record = copy.deepcopy(self._records[index])
            if error:
                return MutationResult(status=MutationStatus.STORAGE_ERROR, record=record, error=error)
            return MutationResult(record=record)

    async def remove(self, record_id: str) -> MutationResult:
        """Delete the record with ``record_id``; a missing id is a no-op."""
        return await self.remove_many([record_id])

    async def remove_many(self, record_ids: Iterable[str]) -> MutationResult:
        async with self._lock:
            ids = set(record_ids)
            remaining = [r for r in self._records if r.get("id") not in ids]
            removed = len(self._records) - len(remaining)
            self._records = remaining

            error = await self._persist()
            if error:
                return MutationResult(status=MutationStatus.STORAGE_ERROR, error=error)
            if removed == 0:
                return MutationResult(status=MutationStatus.NOT_FOUND)
            return MutationResult()

    async def duplicate(self, record_id: str, overrides: Optional[Record] = None) -> Optional[Record]:
        """Copy an existing record under a new id, applying ``overrides``."""
        source = self.get(record_id)
        if source is None:
            logger.warning(f"Record '{record_id}' not found in '{self.storage_key}' for duplication")
            return None

        source.pop("id", None)
        source.update(overrides or {})
        return await self.add(source)
