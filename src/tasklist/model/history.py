# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from tasklist.model.priority import Priority

HistoryField = Literal["title", "description", "priority", "due_date", "completed"]

# Order in which fields are compared when recording changes
HISTORY_FIELDS: tuple[HistoryField, ...] = (
    "title",
    "description",
    "priority",
    "due_date",
    "completed",
)


class TitleChange(TypedDict):
    timestamp: pendulum.DateTime
    field: Literal["title"]
    old_value: str
    new_value: str


class DescriptionChange(TypedDict):
    timestamp: pendulum.DateTime
    field: Literal["description"]
    old_value: Optional[str]
    new_value: Optional[str]


class PriorityChange(TypedDict):
    timestamp: pendulum.DateTime
    field: Literal["priority"]
    old_value: Priority
    new_value: Priority


class DueDateChange(TypedDict):
    timestamp: pendulum.DateTime
    field: Literal["due_date"]
    old_value: pendulum.DateTime
    new_value: pendulum.DateTime


class CompletedChange(TypedDict):
    timestamp: pendulum.DateTime
    field: Literal["completed"]
    old_value: bool
    new_value: bool


HistoryEntry = (
    TitleChange | DescriptionChange | PriorityChange | DueDateChange | CompletedChange
)
