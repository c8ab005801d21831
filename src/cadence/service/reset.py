# SPDX-License-Identifier: MIT

import logging
from typing import TypedDict

from cadence.model.entity_type import ENTITY_KINDS, EntityKind
from cadence.repository.store import Store, StoreError

logger = logging.getLogger(__name__)


class ResetResult(TypedDict):
    success: bool
    deleted: dict[EntityKind, int]
    failed_kinds: dict[EntityKind, str]


def reset_store(store: Store, commit: bool = True) -> ResetResult:
    """
    Delete every entity of every managed kind.

    Each kind is cleared independently: a failure on one kind is recorded and
    the remaining kinds are still cleared. With commit=False the deletions
    stay pending in the store until the caller saves or rolls back.
    """
    result: ResetResult = {"success": True, "deleted": {}, "failed_kinds": {}}

    for kind in ENTITY_KINDS:
        deleted = 0
        try:
            for entity in store.fetch_all(kind):
                store.delete(kind, entity["id"])
                deleted += 1
        except StoreError as e:
            logger.warning("could not clear %s: %s", kind, e)
            result["success"] = False
            result["failed_kinds"][kind] = str(e)
        result["deleted"][kind] = deleted

    if commit:
        try:
            store.save_changes()
        except StoreError as e:
            logger.warning("could not commit reset: %s", e)
            store.rollback()
            result["success"] = False
            result["failed_kinds"] = {kind: str(e) for kind in ENTITY_KINDS}

    return result
