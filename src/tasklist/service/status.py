# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from tasklist.model.status import Status
from tasklist.model.task import Task
from tasklist.time import now_utc


def is_overdue(task: Task, now: Optional[pendulum.DateTime] = None) -> bool:
    """Incomplete and past its due date. Computed fresh, never read from the stored status."""
    if now is None:
        now = now_utc()
    return not task["completed"] and now > task["due_date"]


def status_for_completion(completed: bool) -> Status:
    return Status.COMPLETED if completed else Status.PENDING


def display_status(task: Task, now: Optional[pendulum.DateTime] = None) -> Status:
    if task["completed"]:
        return Status.COMPLETED
    if is_overdue(task, now):
        return Status.OVERDUE
    return Status.PENDING
