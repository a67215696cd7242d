# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from tasklist.model.entity_id import EntityId
from tasklist.model.history import HistoryEntry
from tasklist.model.priority import Priority
from tasklist.model.status import Status


class Task(TypedDict):
    id: EntityId
    title: str
    description: Optional[str]
    priority: Priority
    due_date: pendulum.DateTime
    status: Status
    completed: bool
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
    history: list[HistoryEntry]


class TaskFields(TypedDict, total=False):
    """Any subset of task fields, as written in a partial update."""

    title: str
    description: Optional[str]
    priority: Priority
    due_date: pendulum.DateTime
    status: Status
    completed: bool
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
    history: list[HistoryEntry]


class ProposedChanges(TypedDict, total=False):
    title: str
    description: Optional[str]
    priority: Priority
    due_date: pendulum.DateTime
    completed: bool
