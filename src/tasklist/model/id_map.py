# SPDX-License-Identifier: MIT

from typing import TypedDict

from tasklist.model.entity_id import EntityId


class IdMap(TypedDict):
    """
    Short synthetic ids for tasks, so the terminal can refer to "3" rather than
    a full store id.

    synthetic_to_real[7] is the store id of the task shown as 7, and
    real_to_synthetic is the inverse mapping.
    """

    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]
