# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod

from tasklist.model.task import Task


class Predicate(ABC):
    @abstractmethod
    def include(self, task: Task) -> bool: ...

    def filter(self, tasks: list[Task]) -> list[Task]:
        return [task for task in tasks if self.include(task)]


class TextSearch(Predicate):
    """Case-insensitive substring match on the title, or the description when present."""

    def __init__(self, search: str) -> None:
        self.search = search.lower()

    def include(self, task: Task) -> bool:
        if self.search == "":
            return True
        if self.search in task["title"].lower():
            return True
        description = task["description"]
        return description is not None and self.search in description.lower()


def filter_tasks(tasks: list[Task], search: str) -> list[Task]:
    return TextSearch(search).filter(tasks)
