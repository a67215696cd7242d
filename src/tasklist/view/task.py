# SPDX-License-Identifier: MIT

from typing import Any, Optional

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasklist.color import (
    COMPLETED_TASK_COLOR,
    OVERDUE_TASK_COLOR,
    PRIORITY_COLORS,
)
from tasklist.model.history import HistoryEntry
from tasklist.model.status import Status
from tasklist.model.task import Task
from tasklist.query.derive import TaskPage
from tasklist.repository.id_map import ID_MAP_REPO
from tasklist.service.status import display_status
from tasklist.time import (
    datetime_to_display_date_str,
    datetime_to_display_datetime_str,
    now_utc,
)
from tasklist.view.header import header

STATE_SYMBOLS = {
    Status.COMPLETED: "X",
    Status.OVERDUE: "!",
    Status.PENDING: " ",
}


def _colored(value: str, color: Optional[str]) -> str:
    if color is None or value == "":
        return value
    return f"[{color}]{value}[/{color}]"


def format_priority(task: Task) -> str:
    return _colored(task["priority"].value, PRIORITY_COLORS[task["priority"]])


def format_history_value(entry: HistoryEntry, value: Any) -> str:
    if value is None:
        return ""
    if entry["field"] == "due_date":
        return datetime_to_display_date_str(value)
    return escape(str(value))


def describe_change(entry: HistoryEntry) -> str:
    return (
        f"Changed {entry['field']} from "
        f"{format_history_value(entry, entry['old_value'])} to "
        f"{format_history_value(entry, entry['new_value'])}"
    )


def tasks_view(
    report_name: str,
    task_page: TaskPage,
    now: Optional[pendulum.DateTime] = None,
    use_color: bool = True,
) -> None:
    header(report_name)
    if now is None:
        now = now_utc()

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("state")
    tasks_table.add_column("title")
    tasks_table.add_column("priority")
    tasks_table.add_column("due")

    for task in task_page.tasks:
        status = display_status(task, now)
        title = escape(task["title"])
        if task["description"]:
            title = f"{title}\n{escape(task['description'])}"
        due = datetime_to_display_date_str(task["due_date"])
        priority = task["priority"].value

        if use_color:
            if status == Status.COMPLETED:
                title = _colored(title, COMPLETED_TASK_COLOR)
            elif status == Status.OVERDUE:
                title = _colored(title, OVERDUE_TASK_COLOR)
                due = _colored(due, OVERDUE_TASK_COLOR)
            priority = format_priority(task)

        tasks_table.add_row(
            str(ID_MAP_REPO.associate_id(task["id"])),
            STATE_SYMBOLS[status],
            title,
            priority,
            due,
        )

    console = Console()
    console.print(tasks_table)
    console.print(
        f"Showing {task_page.first_index} to {task_page.last_index} "
        f"of {task_page.total_count} tasks"
    )
    console.print(f"Page {task_page.page} of {task_page.total_pages}")


def single_task_view(task: Task, now: Optional[pendulum.DateTime] = None) -> None:
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", str(ID_MAP_REPO.associate_id(task["id"])))
    task_table.add_row("title", escape(task["title"]))
    task_table.add_row("description", escape(task["description"] or ""))
    task_table.add_row("priority", format_priority(task))
    task_table.add_row("due", datetime_to_display_date_str(task["due_date"]))
    task_table.add_row("status", display_status(task, now).value)
    task_table.add_row("created", datetime_to_display_datetime_str(task["created_at"]))
    task_table.add_row("updated", datetime_to_display_datetime_str(task["updated_at"]))
    task_table.add_row("changes", str(len(task["history"])))

    console = Console()
    console.print(task_table)


def history_view(task: Task) -> None:
    header("history")

    console = Console()
    if not task["history"]:
        console.print("No changes recorded.")
        return

    history_table = Table(box=box.SIMPLE)
    history_table.add_column("when")
    history_table.add_column("change")

    for entry in task["history"]:
        history_table.add_row(
            datetime_to_display_datetime_str(entry["timestamp"]),
            describe_change(entry),
        )

    console.print(history_table)
