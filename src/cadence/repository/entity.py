# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence.model.entity_id import EntityId, generate_entity_id
from cadence.repository.store import StoreError

PENDING_SUFFIX = ".pending"


class EntityRepository:
    """
    One YAML file per entity, kept under a single directory.

    Subclasses convert between live entities and their serializable form.
    Writes are tracked by id and only reach the directory through
    prepare_changes() followed by apply_changes().
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self._entities: Optional[list[dict[str, Any]]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()
        self._pending_files: list[tuple[Path, Path]] = []

    @property
    def entities(self) -> list[dict[str, Any]]:
        if self._entities is None:
            self.__load_data()
        if self._entities is None:
            raise ValueError()
        return self._entities

    def __load_data(self) -> None:
        self._entities = []
        if not self.directory.is_dir():
            return
        for file_path in sorted(self.directory.iterdir()):
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            try:
                raw_entity = load(file_path.read_text(), Loader=Loader)
            except (OSError, YAMLError) as e:
                self._entities = None
                raise StoreError(f"could not load {file_path}: {e}") from e
            if raw_entity is not None:
                self._entities.append(self.convert_for_deserialization(raw_entity))

    def convert_for_serialization(self, entity: dict[str, Any]) -> dict[str, Any]:
        return entity

    def convert_for_deserialization(self, entity: dict[str, Any]) -> dict[str, Any]:
        return entity

    def __find(self, id: EntityId) -> dict[str, Any]:
        matches = [entity for entity in self.entities if entity["id"] == id]
        if not matches:
            raise StoreError(f"{self.directory.name}: no entity with id {id}")
        return matches[0]

    def get_all(self) -> list[dict[str, Any]]:
        return deepcopy(self.entities)

    def get(self, id: EntityId) -> dict[str, Any]:
        return deepcopy(self.__find(id))

    def save_new(self, entity: dict[str, Any]) -> EntityId:
        self.is_dirty = True

        new_entity = deepcopy(entity)
        new_entity["id"] = generate_entity_id()

        self.entities.append(new_entity)
        self._dirty_ids.add(new_entity["id"])

        return new_entity["id"]

    def modify(self, id: EntityId, changes: dict[str, Any]) -> None:
        entity = self.__find(id)
        self.is_dirty = True
        self._dirty_ids.add(id)
        entity.update(deepcopy(changes))

    def remove(self, id: EntityId) -> None:
        entity = self.__find(id)
        self.is_dirty = True
        self.entities.remove(entity)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def prepare_changes(self) -> None:
        """Write every dirty entity next to its final file without replacing it."""
        if self._entities is None or not self.is_dirty:
            return

        self.directory.mkdir(parents=True, exist_ok=True)
        for entity in self.entities:
            if entity["id"] not in self._dirty_ids:
                continue
            serializable_entity = self.convert_for_serialization(deepcopy(entity))
            file_path = self.directory / f"{entity['id']}.yaml"
            pending_path = file_path.with_name(file_path.name + PENDING_SUFFIX)
            self._pending_files.append((pending_path, file_path))
            pending_path.write_text(dump(serializable_entity, Dumper=Dumper))

    def apply_changes(self) -> None:
        for pending_path, file_path in self._pending_files:
            pending_path.replace(file_path)

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = self.directory / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._pending_files.clear()
        self._dirty_ids.clear()
        self._deleted_ids.clear()
        self.is_dirty = False

    def discard_prepared_changes(self) -> None:
        for pending_path, _ in self._pending_files:
            pending_path.unlink(missing_ok=True)
        self._pending_files.clear()

    def discard_changes(self) -> None:
        self.discard_prepared_changes()
        self._entities = None
        self._dirty_ids.clear()
        self._deleted_ids.clear()
        self.is_dirty = False
