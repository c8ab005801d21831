# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any

from cadence.model.entity_id import EntityId, generate_entity_id
from cadence.model.entity_type import ENTITY_KINDS, EntityKind
from cadence.repository.store import StoreError


class MemoryStore:
    """Store kept entirely in memory. Commits replace the committed snapshot."""

    def __init__(self) -> None:
        self._committed: dict[EntityKind, dict[EntityId, Any]] = {
            kind: {} for kind in ENTITY_KINDS
        }
        self._working: dict[EntityKind, dict[EntityId, Any]] = deepcopy(
            self._committed
        )
        self.is_dirty = False

    def fetch_all(self, kind: EntityKind) -> list[Any]:
        return deepcopy(list(self._working[kind].values()))

    def get(self, kind: EntityKind, id: EntityId) -> Any:
        if id not in self._working[kind]:
            raise StoreError(f"{kind}: no entity with id {id}")
        return deepcopy(self._working[kind][id])

    def create(self, kind: EntityKind, entity: Any) -> EntityId:
        self.is_dirty = True

        new_entity = deepcopy(entity)
        new_entity["id"] = generate_entity_id()
        self._working[kind][new_entity["id"]] = new_entity

        return new_entity["id"]

    def update(self, kind: EntityKind, id: EntityId, changes: dict[str, Any]) -> None:
        if id not in self._working[kind]:
            raise StoreError(f"{kind}: no entity with id {id}")
        self.is_dirty = True
        self._working[kind][id].update(deepcopy(changes))

    def delete(self, kind: EntityKind, id: EntityId) -> None:
        if id not in self._working[kind]:
            raise StoreError(f"{kind}: no entity with id {id}")
        self.is_dirty = True
        del self._working[kind][id]

    def save_changes(self) -> None:
        if not self.is_dirty:
            return
        self._committed = deepcopy(self._working)
        self.is_dirty = False

    def rollback(self) -> None:
        self._working = deepcopy(self._committed)
        self.is_dirty = False

    def count(self, kind: EntityKind) -> int:
        return len(self._working[kind])
