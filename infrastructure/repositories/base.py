"""
Shared read-modify-write plumbing for repositories over a RecordStore.

A collection is one store key holding a JSON array of one entity type.
Mutations load the whole array, change the in-memory copy and write the
whole array back while holding the collection lock.
"""
import logging
from typing import Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from application.exceptions import StorageError
from application.ports.record_store import RecordStore
from infrastructure.storage.locks import collection_lock

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StoreCollection(Generic[ModelT]):
    """
    Base class for one entity collection stored under a fixed key.

    Subclasses set `key` and `model`. Entities are matched by their `id`.
    """

    key: str
    model: Type[ModelT]

    def __init__(self, store: RecordStore):
        """
        Initialize with a record store.

        Args:
            store: RecordStore instance (injected, not global)
        """
        self._store = store
        self._lock = collection_lock(store, self.key)

    async def _load(self) -> Optional[List[ModelT]]:
        """Read and validate the collection; None if never written."""
        raw = await self._store.get(self.key)
        if raw is None:
            return None
        try:
            return [self.model.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.error(f"Collection '{self.key}' failed validation: {e}")
            raise StorageError(f"Stored data for '{self.key}' is invalid", key=self.key) from e

    async def _write(self, items: List[ModelT]) -> None:
        await self._store.set(self.key, [item.model_dump(mode="json") for item in items])

    async def _list(self) -> List[ModelT]:
        return (await self._load()) or []

    async def _find(self, predicate: Callable[[ModelT], bool]) -> Optional[ModelT]:
        return next((item for item in await self._list() if predicate(item)), None)

    async def _upsert_many(self, items: List[ModelT]) -> List[ModelT]:
        """Replace items whose id is stored, append the rest, in one write."""
        async with self._lock:
            stored = await self._list()
            index = {item.id: i for i, item in enumerate(stored)}
            for item in items:
                if item.id in index:
                    stored[index[item.id]] = item
                else:
                    index[item.id] = len(stored)
                    stored.append(item)
            await self._write(stored)
        return items

    async def _upsert(self, item: ModelT) -> ModelT:
        await self._upsert_many([item])
        return item

    async def _delete_by_id(self, item_id: str) -> bool:
        async with self._lock:
            stored = await self._list()
            remaining = [item for item in stored if item.id != item_id]
            if len(remaining) == len(stored):
                return False
            await self._write(remaining)
        return True
