# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional, Self

from tasklist.errors import SubscriptionError
from tasklist.model.sort_config import SortConfig, get_default_sort_config
from tasklist.model.task import Task
from tasklist.query.derive import TaskPage, derive
from tasklist.repository.document_store import StoreError, Subscription
from tasklist.repository.task import TaskRepository
from tasklist.view.notify import Notifier

logger = logging.getLogger(__name__)


class TaskListView:
    """
    State behind the task list: the live task collection plus the search,
    sort and pagination the user picked.

    The store subscription is acquired by open() and released by close();
    use the view as a context manager so release happens on every exit path.
    Every snapshot the store pushes replaces the whole collection and, when an
    on_change callback is given, triggers a re-render of the current page.
    """

    def __init__(
        self,
        repository: TaskRepository,
        notifier: Notifier,
        sort_config: Optional[SortConfig] = None,
        search: str = "",
        page: int = 1,
        page_size: int = 10,
        on_change: Optional[Callable[[TaskPage], None]] = None,
    ) -> None:
        self.repository = repository
        self.notifier = notifier
        self.sort_config = sort_config or get_default_sort_config()
        self.search = search
        self.page = page
        self.page_size = page_size
        self.on_change = on_change

        self.tasks: list[Task] = []
        self.error: Optional[StoreError] = None
        self._subscription: Optional[Subscription] = None

    @property
    def is_open(self) -> bool:
        return self._subscription is not None

    def open(self) -> None:
        if self._subscription is not None:
            return
        self.error = None
        self._subscribe()

    def close(self) -> None:
        if self._subscription is None:
            return
        self._subscription.unsubscribe()
        self._subscription = None

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _subscribe(self) -> None:
        subscription: Optional[Subscription] = None

        def on_tasks(tasks: list[Task]) -> None:
            # Ignore deliveries for a handle this view no longer owns
            if subscription is not None and subscription is not self._subscription:
                return
            self.tasks = tasks
            self._changed()

        def on_error(error: StoreError) -> None:
            if subscription is not None and subscription is not self._subscription:
                return
            self._fail(error)

        self._subscription = None
        subscription = self.repository.subscribe(
            self.sort_config["primary"],
            self.sort_config["direction"],
            on_tasks,
            on_error,
        )
        if self.error is None:
            self._subscription = subscription
        else:
            subscription.unsubscribe()

    def _fail(self, error: StoreError) -> None:
        logger.error("Task subscription failed: %s", error, exc_info=error)
        self.notifier.error("Failed to load tasks")
        self.error = error
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _changed(self) -> None:
        if self.on_change is not None and self.error is None:
            self.on_change(self.current_page())

    def current_page(self) -> TaskPage:
        if self.error is not None:
            raise SubscriptionError(str(self.error)) from self.error
        return derive(
            self.tasks, self.search, self.sort_config, self.page, self.page_size
        )

    def set_search(self, search: str) -> None:
        self.search = search
        self._changed()

    def set_sort_config(self, sort_config: SortConfig) -> None:
        # The store ordering follows the primary key and direction
        resubscribe = self.is_open and (
            sort_config["primary"] != self.sort_config["primary"]
            or sort_config["direction"] != self.sort_config["direction"]
        )
        self.sort_config = sort_config
        if resubscribe:
            self.close()
            self._subscribe()
        else:
            self._changed()

    def set_page(self, page: int) -> None:
        self.page = page
        self._changed()

    def set_page_size(self, page_size: int) -> None:
        self.page_size = page_size
        self.page = 1
        self._changed()

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        return None
