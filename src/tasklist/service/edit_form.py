# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from tasklist.model.task import Task
from tasklist.repository.task import TaskRepository
from tasklist.service.task import edit_task, validate_edit
from tasklist.time import datetime_to_local_date_str
from tasklist.view.notify import Notifier

logger = logging.getLogger(__name__)


class EditForm:
    """
    The values a user has entered while editing one task.

    While a submit is in flight further submits are ignored. A failed submit
    leaves the form open with the entered values intact so it can be retried.
    """

    def __init__(
        self, repository: TaskRepository, task: Task, notifier: Notifier
    ) -> None:
        self.repository = repository
        self.task = task
        self.notifier = notifier

        self.title = task["title"]
        self.description = task["description"] or ""
        self.priority = task["priority"].value
        self.due_date = datetime_to_local_date_str(task["due_date"])
        self._initial_due_date = self.due_date

        self.submitting = False
        self.closed = False

    def submit(self, now: Optional[pendulum.DateTime] = None) -> Optional[Task]:
        """
        Validate and persist the entered values.

        Returns the updated task, or None when a submit was already running.
        Raises ValidationError or PersistenceError; the form stays open then.
        """
        if self.closed:
            raise RuntimeError("edit form is closed")
        if self.submitting:
            logger.debug("Ignoring submit for task %s while one is in flight", self.task["id"])
            return None

        edit = validate_edit(self.title, self.description, self.priority, self.due_date)
        if self.due_date == self._initial_due_date:
            # Untouched date keeps the stored instant, whatever the local timezone
            edit["due_date"] = self.task["due_date"]

        self.submitting = True
        try:
            updated = edit_task(self.repository, self.task, edit, self.notifier, now)
        finally:
            self.submitting = False

        self.closed = True
        return updated

    def cancel(self) -> None:
        self.closed = True
