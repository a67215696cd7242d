# SPDX-License-Identifier: MIT

from typing import Any, Optional, cast

import pendulum

from tasklist.model.history import HISTORY_FIELDS, HistoryEntry
from tasklist.model.task import ProposedChanges, Task
from tasklist.time import now_utc, same_instant


def _differs(field: str, old_value: Any, new_value: Any) -> bool:
    if field == "due_date":
        return not same_instant(old_value, new_value)
    return bool(old_value != new_value)


def record_changes(
    task: Task,
    proposed: ProposedChanges,
    timestamp: Optional[pendulum.DateTime] = None,
) -> list[HistoryEntry]:
    """
    Compute the history entries for applying `proposed` to `task`.

    One entry is produced per proposed field whose value differs from the
    task's current value, in the order title, description, priority,
    due_date, completed. Every entry carries the same timestamp, so ordering
    within one mutation comes from list position only.

    Nothing is mutated; the caller persists task["history"] + the result.
    """
    if timestamp is None:
        timestamp = now_utc()

    entries: list[HistoryEntry] = []
    for field in HISTORY_FIELDS:
        if field not in proposed:
            continue
        old_value = task[field]  # type: ignore[literal-required]
        new_value = proposed[field]  # type: ignore[literal-required]
        if _differs(field, old_value, new_value):
            entries.append(
                cast(
                    HistoryEntry,
                    {
                        "timestamp": timestamp,
                        "field": field,
                        "old_value": old_value,
                        "new_value": new_value,
                    },
                )
            )
    return entries
