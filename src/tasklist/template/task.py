# SPDX-License-Identifier: MIT

from tasklist.model.priority import Priority
from tasklist.model.status import Status
from tasklist.model.task import TaskFields
from tasklist.time import now_utc


def get_task_template() -> TaskFields:
    now = now_utc()
    return {
        "title": "",
        "description": None,
        "priority": Priority.MEDIUM,
        "due_date": now,
        "status": Status.PENDING,
        "completed": False,
        "created_at": now,
        "updated_at": now,
        "history": [],
    }
