# SPDX-License-Identifier: MIT

from cadence.model.collection import Collection
from cadence.model.entity_type import EntityType


def get_collection_template() -> Collection:
    return {
        "id": None,
        "entity_type": EntityType.COLLECTION,
        "name": "",
    }
