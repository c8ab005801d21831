# SPDX-License-Identifier: MIT

from cadence.model.entity_type import EntityType
from cadence.model.tag import Tag


def get_tag_template() -> Tag:
    return {
        "id": None,
        "entity_type": EntityType.TAG,
        "name": "",
    }
