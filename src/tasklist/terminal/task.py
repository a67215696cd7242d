# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, Optional

import pendulum
import typer

from tasklist.errors import PersistenceError, SubscriptionError, ValidationError
from tasklist.id_map import clear_id_map_if_required
from tasklist.model.priority import Priority
from tasklist.model.sort_config import SortConfig, SortDirection, SortKey
from tasklist.model.task import Task
from tasklist.repository.configuration import CONFIGURATION_REPO
from tasklist.repository.document_store import StoreError
from tasklist.repository.id_map import ID_MAP_REPO
from tasklist.repository.task import TASK_REPO
from tasklist.service.edit_form import EditForm
from tasklist.service.task import create_task, delete_task, toggle_completion
from tasklist.terminal.custom_typer import AliasedTyperGroup
from tasklist.terminal.parse import (
    parse_date,
    parse_priority_option,
    parse_sort_direction,
    parse_sort_key,
    parse_task_id,
)
from tasklist.terminal.validate import validate_page, validate_page_size
from tasklist.time import datetime_to_local_date_str
from tasklist.view import task as task_report
from tasklist.view.notify import ConsoleNotifier
from tasklist.view.task_list import TaskListView

logger = logging.getLogger(__name__)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

NOTIFIER = ConsoleNotifier()

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _resolve_task(id: str) -> Task:
    synthetic_id = parse_task_id(id)
    real_id = ID_MAP_REPO.get_real_id(synthetic_id)
    if real_id is None:
        raise typer.BadParameter(f"Unknown task id {synthetic_id}, list tasks first")
    try:
        task = TASK_REPO.find_task(real_id)
    except StoreError:
        logger.exception("Error reading task %s", real_id)
        NOTIFIER.error("Failed to load task")
        raise typer.Exit(1)
    if task is None:
        raise typer.BadParameter(f"Task {synthetic_id} no longer exists")
    return task


def _sort_config(
    sort: Optional[SortKey],
    then: Optional[SortKey],
    no_then: bool,
    direction: Optional[SortDirection],
) -> SortConfig:
    config = CONFIGURATION_REPO.get_config()

    primary = sort or SortKey(config["sort_primary"])
    secondary: Optional[SortKey] = None
    if then is not None:
        secondary = then
    elif not no_then and config["sort_secondary"] is not None:
        secondary = SortKey(config["sort_secondary"])
        if secondary == primary:
            secondary = None

    if secondary is not None and secondary == primary:
        raise typer.BadParameter("Secondary sort must differ from the primary sort")

    return {
        "primary": primary,
        "secondary": secondary,
        "direction": direction or SortDirection(config["sort_direction"]),
    }


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    due: Annotated[
        pendulum.DateTime,
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ],
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    priority: Annotated[
        Optional[Priority],
        typer.Option(
            "--priority",
            "-pr",
            parser=parse_priority_option,
            help="valid input: Low, Medium, High",
        ),
    ] = None,
) -> None:
    """Create a new task."""
    try:
        task = create_task(
            TASK_REPO,
            title,
            description,
            priority or Priority.MEDIUM,
            due,
            NOTIFIER,
        )
    except ValidationError as e:
        raise typer.BadParameter(e.message, param_hint=e.field)
    except PersistenceError:
        raise typer.Exit(1)

    task_report.single_task_view(task)


@app.command("list, ls")
def list_tasks(
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="Match title or description, ignoring case"),
    ] = "",
    sort: Annotated[
        Optional[SortKey],
        typer.Option(
            "--sort", parser=parse_sort_key, help="valid input: priority, due_date"
        ),
    ] = None,
    then: Annotated[
        Optional[SortKey],
        typer.Option(
            "--then",
            parser=parse_sort_key,
            help="Secondary sort used to break ties: priority, due_date",
        ),
    ] = None,
    no_then: Annotated[
        bool, typer.Option("--no-then", help="Ignore the configured secondary sort")
    ] = False,
    direction: Annotated[
        Optional[SortDirection],
        typer.Option(
            "--direction",
            "-dir",
            parser=parse_sort_direction,
            help="asc or desc, applies to due date ordering",
        ),
    ] = None,
    page: Annotated[
        int, typer.Option("--page", "-p", callback=validate_page)
    ] = 1,
    page_size: Annotated[
        Optional[int],
        typer.Option(
            "--page-size", "-n", callback=validate_page_size, help="5, 10, 25 or 50"
        ),
    ] = None,
) -> None:
    """List tasks: filter, sort, then paginate."""
    sort_config = _sort_config(sort, then, no_then, direction)
    config = CONFIGURATION_REPO.get_config()

    clear_id_map_if_required()

    view = TaskListView(
        TASK_REPO,
        NOTIFIER,
        sort_config=sort_config,
        search=search,
        page=page,
        page_size=page_size or config["page_size"],
    )
    with view:
        try:
            task_page = view.current_page()
        except SubscriptionError:
            raise typer.Exit(1)

    task_report.tasks_view("tasks", task_page)


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    """Show one task."""
    task_report.single_task_view(_resolve_task(id))


@app.command("history, h", no_args_is_help=True)
def history(id: str) -> None:
    """Show the change history of a task."""
    task_report.history_view(_resolve_task(id))


def _set_completion(id: str, completed: bool) -> None:
    task = _resolve_task(id)
    try:
        updated = toggle_completion(TASK_REPO, task, completed, NOTIFIER)
    except PersistenceError:
        raise typer.Exit(1)
    task_report.single_task_view(updated)


@app.command("complete, c", no_args_is_help=True)
def complete(id: str) -> None:
    """Mark a task as completed."""
    _set_completion(id, True)


@app.command("uncomplete, u", no_args_is_help=True)
def uncomplete(id: str) -> None:
    """Mark a task as not completed."""
    _set_completion(id, False)


@app.command("edit, e", no_args_is_help=True)
def edit(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    remove_description: Annotated[
        bool, typer.Option("--remove-description", "-rd")
    ] = False,
    priority: Annotated[
        Optional[Priority],
        typer.Option(
            "--priority",
            "-pr",
            parser=parse_priority_option,
            help="valid input: Low, Medium, High",
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Edit title, description, priority or due date of a task."""
    task = _resolve_task(id)

    form = EditForm(TASK_REPO, task, NOTIFIER)
    if title is not None:
        form.title = title
    if description is not None:
        form.description = description
    if remove_description:
        form.description = ""
    if priority is not None:
        form.priority = priority.value
    if due is not None:
        form.due_date = datetime_to_local_date_str(due)

    try:
        updated = form.submit()
    except ValidationError as e:
        raise typer.BadParameter(e.message, param_hint=e.field)
    except PersistenceError:
        raise typer.Exit(1)

    if updated is not None:
        task_report.single_task_view(updated)


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Delete without asking")
    ] = False,
) -> None:
    """Delete a task permanently."""
    task = _resolve_task(id)

    def confirm() -> bool:
        return yes or typer.confirm("Are you sure you want to delete this task?")

    try:
        deleted = delete_task(TASK_REPO, task["id"], confirm, NOTIFIER)
    except PersistenceError:
        raise typer.Exit(1)

    if not deleted:
        typer.echo("Task not deleted")
