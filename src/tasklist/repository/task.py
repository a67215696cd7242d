# SPDX-License-Identifier: MIT

import datetime
from typing import Any, Callable, Optional, cast

import pendulum

from tasklist import configuration, time
from tasklist.model.entity_id import EntityId
from tasklist.model.history import HistoryEntry
from tasklist.model.priority import Priority
from tasklist.model.sort_config import SortDirection, SortKey
from tasklist.model.status import Status
from tasklist.model.task import Task, TaskFields
from tasklist.repository.document_store import (
    Document,
    DocumentStore,
    StoreError,
    Subscription,
)
from tasklist.repository.yaml_document_store import YamlDocumentStore

_INSTANT_FIELDS = ("due_date", "created_at", "updated_at")


def _instant_to_native(value: pendulum.DateTime) -> str:
    # Always UTC so stored strings order chronologically
    return time.datetime_to_iso_str(value.in_tz("UTC"))


def _instant_from_native(value: Any) -> pendulum.DateTime:
    # YAML may hand back an already-parsed timestamp
    if isinstance(value, datetime.datetime):
        return time.python_to_pendulum_utc(value)
    return time.datetime_from_str(str(value))


def _history_value_to_native(field: str, value: Any) -> Any:
    if value is None:
        return None
    if field == "due_date":
        return _instant_to_native(value)
    if field == "priority":
        return str(value)
    return value


def _history_value_from_native(field: str, value: Any) -> Any:
    if value is None:
        return None
    if field == "due_date":
        return _instant_from_native(value)
    if field == "priority":
        return Priority(value)
    if field == "completed":
        return bool(value)
    return value


def history_entry_to_document(entry: HistoryEntry) -> Document:
    field = entry["field"]
    return {
        "timestamp": _instant_to_native(entry["timestamp"]),
        "field": field,
        "old_value": _history_value_to_native(field, entry["old_value"]),
        "new_value": _history_value_to_native(field, entry["new_value"]),
    }


def history_entry_from_document(document: Document) -> HistoryEntry:
    field = document["field"]
    return cast(
        HistoryEntry,
        {
            "timestamp": _instant_from_native(document["timestamp"]),
            "field": field,
            "old_value": _history_value_from_native(field, document.get("old_value")),
            "new_value": _history_value_from_native(field, document.get("new_value")),
        },
    )


def task_fields_to_document(fields: TaskFields) -> Document:
    document: Document = dict(fields)
    for field in _INSTANT_FIELDS:
        if field in document:
            document[field] = _instant_to_native(document[field])
    if "priority" in document:
        document["priority"] = str(document["priority"])
    if "status" in document:
        document["status"] = str(document["status"])
    if "history" in document:
        document["history"] = [
            history_entry_to_document(entry) for entry in document["history"]
        ]
    return document


def task_from_document(document: Document) -> Task:
    return {
        "id": document["id"],
        "title": document["title"],
        "description": document.get("description"),
        "priority": Priority(document["priority"]),
        "due_date": _instant_from_native(document["due_date"]),
        "status": Status(document.get("status", Status.PENDING)),
        "completed": bool(document.get("completed", False)),
        "created_at": _instant_from_native(document["created_at"]),
        "updated_at": _instant_from_native(document["updated_at"]),
        "history": [
            history_entry_from_document(entry) for entry in document.get("history") or []
        ],
    }


class TaskRepository:
    """
    Typed access to the task collection of a document store.

    The store keeps timestamps as ISO-8601 strings; everything handed out by
    this repository carries pendulum instants and enum members instead.
    """

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self._store = store

    @property
    def store(self) -> DocumentStore:
        if self._store is None:
            self._store = YamlDocumentStore(configuration.DATA_TASKS_DIR)
        return self._store

    def __to_task(self, document: Document) -> Task:
        try:
            return task_from_document(document)
        except (KeyError, ValueError, TypeError) as e:
            raise StoreError(f"malformed task {document.get('id')}: {e!r}") from e

    def add_task(self, fields: TaskFields) -> EntityId:
        return self.store.add(task_fields_to_document(fields))

    def update_task(self, id: EntityId, fields: TaskFields) -> None:
        self.store.update(id, task_fields_to_document(fields))

    def delete_task(self, id: EntityId) -> None:
        self.store.delete(id)

    def find_task(self, id: EntityId) -> Optional[Task]:
        document = self.store.get(id)
        if document is None:
            return None
        return self.__to_task(document)

    def get_all_tasks(self) -> list[Task]:
        return [self.__to_task(document) for document in self.store.documents()]

    def subscribe(
        self,
        order_by: SortKey,
        direction: SortDirection,
        on_tasks: Callable[[list[Task]], None],
        on_error: Callable[[StoreError], None],
    ) -> Subscription:
        def on_snapshot(documents: list[Document]) -> None:
            try:
                tasks = [self.__to_task(document) for document in documents]
            except StoreError as e:
                on_error(e)
                return
            on_tasks(tasks)

        return self.store.subscribe(
            str(order_by),
            on_snapshot,
            on_error,
            descending=direction == SortDirection.DESC,
        )


TASK_REPO = TaskRepository()
