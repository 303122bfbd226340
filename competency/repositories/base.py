"""
Base Repository - R&D Competency Platform
competency/repositories/base.py

In-memory key-value repository shared by every entity store.
"""

from contextlib import contextmanager
from threading import RLock
from typing import Dict, Generator, Generic, List, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from competency.core.exceptions import EntityNotFoundException

M = TypeVar("M", bound=BaseModel)


class BaseRepository(Generic[M]):
    """
    Thread-safe dictionary store keyed by UUID.

    Models are copied on the way in and out so callers never hold a
    reference into the store.
    """

    ENTITY_NAME = "Entity"

    def __init__(self):
        self._items: Dict[UUID, M] = {}
        self._lock = RLock()

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Hold the store lock across a read-modify-write sequence."""
        with self._lock:
            yield

    def get(self, entity_id: UUID) -> Optional[M]:
        with self._lock:
            item = self._items.get(entity_id)
            return item.model_copy(deep=True) if item is not None else None

    def get_or_raise(self, entity_id: UUID) -> M:
        item = self.get(entity_id)
        if item is None:
            raise EntityNotFoundException(self.ENTITY_NAME, str(entity_id))
        return item

    def put(self, entity_id: UUID, item: M) -> M:
        with self._lock:
            self._items[entity_id] = item.model_copy(deep=True)
        return item

    def delete(self, entity_id: UUID) -> bool:
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def exists(self, entity_id: UUID) -> bool:
        with self._lock:
            return entity_id in self._items

    def get_all(self) -> List[M]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items.values()]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
