# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from cadence.model.entity_id import EntityId


class Tag(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "tag"
    name: str
