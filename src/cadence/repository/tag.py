# SPDX-License-Identifier: MIT

from cadence.repository.entity import EntityRepository


class TagRepository(EntityRepository):
    pass
