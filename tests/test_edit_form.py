# tests/test_edit_form.py

from __future__ import annotations

import pendulum
import pytest

from tasklist.errors import PersistenceError, ValidationError
from tasklist.model.priority import Priority
from tasklist.service.edit_form import EditForm
from tasklist.service.task import create_task
from tasklist.time import datetime_from_local_date_str

NOW = pendulum.datetime(2024, 2, 1, tz="UTC")


@pytest.fixture()
def task(repository, notifier):
    return create_task(
        repository,
        "Pay rent",
        "to landlord",
        Priority.HIGH,
        datetime_from_local_date_str("2024-01-01"),
        notifier,
    )


def test_form_starts_with_task_values(repository, notifier, task) -> None:
    form = EditForm(repository, task, notifier)
    assert form.title == "Pay rent"
    assert form.description == "to landlord"
    assert form.priority == "High"
    assert form.due_date == "2024-01-01"
    assert form.submitting is False
    assert form.closed is False


def test_successful_submit_closes_form(repository, notifier, task) -> None:
    form = EditForm(repository, task, notifier)
    form.priority = "low"

    updated = form.submit(now=NOW)

    assert updated is not None
    assert updated["priority"] == Priority.LOW
    assert form.closed is True
    stored = repository.find_task(task["id"])
    assert [e["field"] for e in stored["history"]] == ["priority"]


def test_unchanged_due_date_is_not_recorded(repository, notifier, task) -> None:
    form = EditForm(repository, task, notifier)
    form.title = "Pay rent today"
    form.submit(now=NOW)

    stored = repository.find_task(task["id"])
    assert [e["field"] for e in stored["history"]] == ["title"]


def test_validation_failure_keeps_form_open(repository, notifier, store, task) -> None:
    store.writes.clear()
    form = EditForm(repository, task, notifier)
    form.title = "   "

    with pytest.raises(ValidationError):
        form.submit(now=NOW)

    assert form.closed is False
    assert form.submitting is False
    assert form.title == "   "
    assert store.writes == []


def test_failed_write_keeps_values_for_retry(repository, notifier, store, task) -> None:
    form = EditForm(repository, task, notifier)
    form.description = "by transfer"
    store.fail_writes = True

    with pytest.raises(PersistenceError):
        form.submit(now=NOW)

    assert form.closed is False
    assert form.submitting is False
    assert form.description == "by transfer"
    assert notifier.errors == ["Failed to update task"]

    store.fail_writes = False
    updated = form.submit(now=NOW)
    assert updated["description"] == "by transfer"
    assert form.closed is True


def test_submit_while_in_flight_is_ignored(repository, notifier, store, task) -> None:
    form = EditForm(repository, task, notifier)
    form.title = "Pay rent twice?"
    nested = []
    store.on_update = lambda id, fields: nested.append(form.submit(now=NOW))

    form.submit(now=NOW)

    assert nested == [None]
    stored = repository.find_task(task["id"])
    assert len(stored["history"]) == 1


def test_closed_form_refuses_submit(repository, notifier, task) -> None:
    form = EditForm(repository, task, notifier)
    form.cancel()
    with pytest.raises(RuntimeError):
        form.submit(now=NOW)


def test_untouched_due_date_survives_timezone_change(repository, notifier) -> None:
    due = pendulum.datetime(2024, 1, 1, tz="America/New_York")
    task = create_task(repository, "Pay rent", None, Priority.HIGH, due, notifier)

    with pendulum.test_local_timezone(pendulum.timezone("Europe/Berlin")):
        form = EditForm(repository, task, notifier)
        form.description = "by transfer"
        form.submit(now=NOW)

    stored = repository.find_task(task["id"])
    assert [e["field"] for e in stored["history"]] == ["description"]
    assert stored["due_date"] == due


def test_changed_due_date_is_parsed_in_local_timezone(repository, notifier, task) -> None:
    with pendulum.test_local_timezone(pendulum.timezone("Europe/Berlin")):
        form = EditForm(repository, task, notifier)
        form.due_date = "2024-02-10"
        form.submit(now=NOW)

    stored = repository.find_task(task["id"])
    assert [e["field"] for e in stored["history"]] == ["due_date"]
    assert stored["due_date"] == pendulum.datetime(2024, 2, 9, 23, 0, tz="UTC")
