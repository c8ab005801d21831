# SPDX-License-Identifier: MIT

from typing import Any, Protocol

from cadence.model.entity_id import EntityId
from cadence.model.entity_type import EntityKind


class StoreError(Exception):
    """Raised when the store cannot read or commit entities."""

    pass


class Store(Protocol):
    """
    Access to the persistent object store.

    Writes (create, update, delete) are pending until save_changes() commits
    them as one unit. rollback() discards every pending write. Reads always
    see the pending state.
    """

    def fetch_all(self, kind: EntityKind) -> list[Any]: ...

    def get(self, kind: EntityKind, id: EntityId) -> Any: ...

    def create(self, kind: EntityKind, entity: Any) -> EntityId: ...

    def update(self, kind: EntityKind, id: EntityId, changes: dict[str, Any]) -> None: ...

    def delete(self, kind: EntityKind, id: EntityId) -> None: ...

    def save_changes(self) -> None: ...

    def rollback(self) -> None: ...
