# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Callable, Optional, TypedDict, cast

import pendulum

from tasklist.errors import PersistenceError, ValidationError
from tasklist.model.entity_id import EntityId
from tasklist.model.priority import Priority
from tasklist.model.task import ProposedChanges, Task, TaskFields
from tasklist.repository.document_store import StoreError
from tasklist.repository.task import TaskRepository
from tasklist.service.history import record_changes
from tasklist.service.status import status_for_completion
from tasklist.template.task import get_task_template
from tasklist.time import datetime_from_local_date_str, now_utc
from tasklist.view.notify import Notifier

logger = logging.getLogger(__name__)


class TaskEdit(TypedDict):
    title: str
    description: Optional[str]
    priority: Priority
    due_date: pendulum.DateTime


def validate_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError("title", "Title is required")
    return title.strip()


def validate_due_date(due_date: Optional[pendulum.DateTime]) -> pendulum.DateTime:
    if due_date is None:
        raise ValidationError("due_date", "Due date is required")
    return due_date


def parse_due_date(raw: Optional[str]) -> pendulum.DateTime:
    if raw is None or not raw.strip():
        raise ValidationError("due_date", "Due date is required")
    try:
        return datetime_from_local_date_str(raw.strip())
    except ValueError as e:
        raise ValidationError("due_date", f"Invalid due date: {raw}") from e


def parse_priority(raw: str) -> Priority:
    for priority in Priority:
        if priority.value.lower() == raw.strip().lower():
            return priority
    raise ValidationError(
        "priority", f"Priority must be one of {', '.join(p.value for p in Priority)}"
    )


def normalize_description(description: Optional[str]) -> Optional[str]:
    if description is None or not description.strip():
        return None
    return description


def validate_edit(
    title: str, description: Optional[str], priority: str, due_date: str
) -> TaskEdit:
    """Turn raw form text into a typed edit, or raise ValidationError for the first bad field."""
    return {
        "title": validate_title(title),
        "description": normalize_description(description),
        "priority": parse_priority(priority),
        "due_date": parse_due_date(due_date),
    }


def _write(
    repository: TaskRepository,
    task_id: EntityId,
    fields: TaskFields,
    notifier: Notifier,
    failure_message: str,
) -> None:
    try:
        repository.update_task(task_id, fields)
    except StoreError as e:
        logger.exception("Error updating task %s", task_id)
        notifier.error(failure_message)
        raise PersistenceError(failure_message) from e


def create_task(
    repository: TaskRepository,
    title: str,
    description: Optional[str],
    priority: Priority,
    due_date: Optional[pendulum.DateTime],
    notifier: Notifier,
) -> Task:
    fields = get_task_template()
    fields["title"] = validate_title(title)
    fields["description"] = normalize_description(description)
    fields["priority"] = priority
    fields["due_date"] = validate_due_date(due_date)

    try:
        id = repository.add_task(fields)
    except StoreError as e:
        logger.exception("Error creating task")
        notifier.error("Failed to create task")
        raise PersistenceError("Failed to create task") from e

    logger.info("Created task %s", id)
    notifier.success("Task created successfully")
    return cast(Task, {"id": id, **fields})


def toggle_completion(
    repository: TaskRepository,
    task: Task,
    completed: bool,
    notifier: Notifier,
    now: Optional[pendulum.DateTime] = None,
) -> Task:
    """
    Mark a task completed or not completed.

    The status follows the completion flag (never Overdue) and the change is
    appended to the history in the same write.
    """
    if now is None:
        now = now_utc()

    changes = record_changes(task, {"completed": completed}, now)
    fields: TaskFields = {
        "completed": completed,
        "status": status_for_completion(completed),
        "updated_at": now,
        "history": task["history"] + changes,
    }
    _write(repository, task["id"], fields, notifier, "Failed to update task")

    notifier.success(f"Task {'completed' if completed else 'uncompleted'}")
    updated = deepcopy(task)
    updated.update(fields)  # type: ignore[typeddict-item]
    return updated


def delete_task(
    repository: TaskRepository,
    task_id: EntityId,
    confirm: Callable[[], bool],
    notifier: Notifier,
) -> bool:
    """
    Permanently remove a task once the user confirms.

    Returns False, without touching the store, when confirmation is declined.
    """
    if not confirm():
        logger.debug("Deletion of task %s declined", task_id)
        return False

    try:
        repository.delete_task(task_id)
    except StoreError as e:
        logger.exception("Error deleting task %s", task_id)
        notifier.error("Failed to delete task")
        raise PersistenceError("Failed to delete task") from e

    logger.info("Deleted task %s", task_id)
    notifier.success("Task deleted successfully")
    return True


def edit_task(
    repository: TaskRepository,
    task: Task,
    edit: TaskEdit,
    notifier: Notifier,
    now: Optional[pendulum.DateTime] = None,
) -> Task:
    """
    Apply an edit of title, description, priority and due date.

    Only changed fields are sent, together with the refreshed updated_at and
    the history extended by one entry per changed field.
    """
    title = validate_title(edit["title"])
    due_date = validate_due_date(edit["due_date"])
    if now is None:
        now = now_utc()

    proposed: ProposedChanges = {
        "title": title,
        "description": edit["description"],
        "priority": edit["priority"],
        "due_date": due_date,
    }
    changes = record_changes(task, proposed, now)

    fields: TaskFields = {}
    for change in changes:
        fields[change["field"]] = change["new_value"]  # type: ignore[literal-required]
    fields["updated_at"] = now
    fields["history"] = task["history"] + changes
    _write(repository, task["id"], fields, notifier, "Failed to update task")

    notifier.success("Task updated successfully")
    updated = deepcopy(task)
    updated.update(fields)  # type: ignore[typeddict-item]
    return updated
