# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Any

from yaml import YAMLError

from cadence.model.entity_id import EntityId
from cadence.model.entity_type import ENTITY_KINDS, EntityKind
from cadence.repository.collection import CollectionRepository
from cadence.repository.entity import EntityRepository
from cadence.repository.habit import HabitRepository
from cadence.repository.habit_entry import HabitEntryRepository
from cadence.repository.journal_entry import JournalEntryRepository
from cadence.repository.store import StoreError
from cadence.repository.tag import TagRepository

logger = logging.getLogger(__name__)


class YamlStore:
    """
    Store backed by one directory per entity kind under data_path.

    save_changes() first writes every dirty entity to a pending file in all
    kinds, and only once every write succeeded moves them into place. A failed
    write leaves the committed files untouched.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self.repositories: dict[EntityKind, EntityRepository] = {
            "collections": CollectionRepository(data_path / "collections"),
            "tags": TagRepository(data_path / "tags"),
            "habits": HabitRepository(data_path / "habits"),
            "habit_entries": HabitEntryRepository(data_path / "habit_entries"),
            "journal_entries": JournalEntryRepository(data_path / "journal_entries"),
        }

    def ensure_directories(self) -> None:
        for repository in self.repositories.values():
            if not repository.directory.is_dir():
                repository.directory.mkdir(parents=True, exist_ok=True)
                (repository.directory / ".gitkeep").touch()

    def fetch_all(self, kind: EntityKind) -> list[Any]:
        return self.repositories[kind].get_all()

    def get(self, kind: EntityKind, id: EntityId) -> Any:
        return self.repositories[kind].get(id)

    def create(self, kind: EntityKind, entity: Any) -> EntityId:
        return self.repositories[kind].save_new(entity)

    def update(self, kind: EntityKind, id: EntityId, changes: dict[str, Any]) -> None:
        self.repositories[kind].modify(id, changes)

    def delete(self, kind: EntityKind, id: EntityId) -> None:
        self.repositories[kind].remove(id)

    def save_changes(self) -> None:
        try:
            for kind in ENTITY_KINDS:
                self.repositories[kind].prepare_changes()
        except (OSError, YAMLError) as e:
            for repository in self.repositories.values():
                repository.discard_prepared_changes()
            raise StoreError(f"could not write entities: {e}") from e

        try:
            for kind in ENTITY_KINDS:
                self.repositories[kind].apply_changes()
        except OSError as e:
            raise StoreError(f"could not move entities into place: {e}") from e

        logger.debug("committed changes to %s", self.data_path)

    def rollback(self) -> None:
        for repository in self.repositories.values():
            repository.discard_changes()
        logger.debug("discarded pending changes in %s", self.data_path)
