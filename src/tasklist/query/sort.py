# SPDX-License-Identifier: MIT

from functools import cmp_to_key
from typing import Callable, Optional, TypeAlias

from tasklist.model.sort_config import SortConfig, SortDirection, SortKey
from tasklist.model.task import Task
from tasklist.time import to_epoch_milliseconds

Comparator: TypeAlias = Callable[[Task, Task], int]


def by_priority(a: Task, b: Task) -> int:
    """High before Medium before Low. Sort direction never applies here."""
    return b["priority"].rank - a["priority"].rank


def by_due_date(a: Task, b: Task) -> int:
    """Earliest due date first."""
    a_ms = to_epoch_milliseconds(a["due_date"])
    b_ms = to_epoch_milliseconds(b["due_date"])
    return (a_ms > b_ms) - (a_ms < b_ms)


def reverse(comparator: Comparator) -> Comparator:
    def reversed_comparator(a: Task, b: Task) -> int:
        return -comparator(a, b)

    return reversed_comparator


def compose(primary: Comparator, secondary: Optional[Comparator]) -> Comparator:
    """Order by `primary`, consulting `secondary` only to break primary ties."""

    def composed(a: Task, b: Task) -> int:
        comparison = primary(a, b)
        if comparison == 0 and secondary is not None:
            comparison = secondary(a, b)
        return comparison

    return composed


COMPARATORS: dict[SortKey, Comparator] = {
    SortKey.PRIORITY: by_priority,
    SortKey.DUE_DATE: by_due_date,
}


def build_comparator(sort_config: SortConfig) -> Comparator:
    primary = COMPARATORS[sort_config["primary"]]
    # Only the due date honours the direction, and only as the primary key
    if (
        sort_config["primary"] == SortKey.DUE_DATE
        and sort_config["direction"] == SortDirection.DESC
    ):
        primary = reverse(primary)

    secondary = None
    if sort_config["secondary"] is not None:
        secondary = COMPARATORS[sort_config["secondary"]]

    return compose(primary, secondary)


def sort_tasks(tasks: list[Task], sort_config: SortConfig) -> list[Task]:
    # sorted() is stable, so full ties keep their input order
    return sorted(tasks, key=cmp_to_key(build_comparator(sort_config)))
