# SPDX-License-Identifier: MIT

from typing import NamedTuple

from tasklist.model.sort_config import SortConfig
from tasklist.model.task import Task
from tasklist.query.filter import filter_tasks
from tasklist.query.paginate import paginate
from tasklist.query.sort import sort_tasks


class TaskPage(NamedTuple):
    tasks: list[Task]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    @property
    def first_index(self) -> int:
        """1-based position of the first task on this page, 0 when the page is empty."""
        if not self.tasks:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        return (self.page - 1) * self.page_size + len(self.tasks)


def derive(
    tasks: list[Task],
    search: str,
    sort_config: SortConfig,
    page: int,
    page_size: int,
) -> TaskPage:
    """
    Filter, sort and paginate `tasks` into the page to render.

    Deterministic for fixed inputs; `tasks` itself is never reordered.
    """
    filtered = filter_tasks(tasks, search)
    ordered = sort_tasks(filtered, sort_config)
    page_tasks, total_pages, page = paginate(ordered, page, page_size)
    return TaskPage(page_tasks, len(ordered), total_pages, page, page_size)
