# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from tasklist.errors import ValidationError
from tasklist.model.priority import Priority
from tasklist.model.sort_config import SortDirection, SortKey
from tasklist.service.task import parse_due_date, parse_priority


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Parse a due date given on the command line.

    Accepts YYYY-MM-DD, today, yesterday, tomorrow, or a day offset like 1, -1.
    The result is local midnight of that day, in UTC.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^-?\d+$", date):
        return pendulum.today().add(days=int(date)).in_tz("UTC")
    if date == "today" or date == "t":
        return pendulum.today().in_tz("UTC")
    if date == "yesterday" or date == "y":
        return pendulum.yesterday().in_tz("UTC")
    if date == "tomorrow" or date == "o":
        return pendulum.tomorrow().in_tz("UTC")

    try:
        return parse_due_date(date)
    except ValidationError as e:
        raise typer.BadParameter(e.message)


def parse_priority_option(priority_param: Optional[str]) -> Optional[Priority]:
    if priority_param is None:
        return None
    try:
        return parse_priority(priority_param)
    except ValidationError as e:
        raise typer.BadParameter(e.message)


def parse_sort_key(sort_param: Optional[str]) -> Optional[SortKey]:
    if sort_param is None:
        return None
    normalized = sort_param.strip().lower().replace("-", "_")
    if normalized in ("due", "duedate"):
        normalized = SortKey.DUE_DATE
    try:
        return SortKey(normalized)
    except ValueError:
        raise typer.BadParameter("Sort key must be one of: priority, due_date")


def parse_sort_direction(direction_param: Optional[str]) -> Optional[SortDirection]:
    if direction_param is None:
        return None
    try:
        return SortDirection(direction_param.strip().lower())
    except ValueError:
        raise typer.BadParameter("Direction must be asc or desc")


def parse_task_id(id_param: str) -> int:
    if not re.match(r"^\d+$", id_param.strip()):
        raise typer.BadParameter(f"Invalid task id: {id_param}")
    return int(id_param)
