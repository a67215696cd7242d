# tests/test_task_list_view.py

from __future__ import annotations

import logging

import pendulum
import pytest

from tasklist.errors import SubscriptionError
from tasklist.model.priority import Priority
from tasklist.model.sort_config import SortDirection, SortKey
from tasklist.service.task import create_task
from tasklist.view.task_list import TaskListView


def _add(repository, notifier, title, day=1, priority=Priority.MEDIUM):
    return create_task(
        repository,
        title,
        None,
        priority,
        pendulum.datetime(2024, 1, day, tz="UTC"),
        notifier,
    )


def test_subscription_held_only_while_open(repository, notifier, store) -> None:
    view = TaskListView(repository, notifier)
    assert store.subscription_count == 0

    with view:
        assert view.is_open
        assert store.subscription_count == 1

    assert not view.is_open
    assert store.subscription_count == 0


def test_subscription_released_when_body_raises(repository, notifier, store) -> None:
    with pytest.raises(KeyError):
        with TaskListView(repository, notifier):
            raise KeyError("boom")
    assert store.subscription_count == 0


def test_every_write_rerenders_current_page(repository, notifier) -> None:
    pages = []
    with TaskListView(repository, notifier, on_change=pages.append) as view:
        assert pages[-1].total_count == 0
        _add(repository, notifier, "Buy milk", day=2)
        _add(repository, notifier, "Pay rent", day=1)
        assert [t["title"] for t in view.current_page().tasks] == ["Pay rent", "Buy milk"]

    assert len(pages) == 3
    assert pages[-1].total_count == 2


def test_no_callbacks_after_close(repository, notifier) -> None:
    pages = []
    with TaskListView(repository, notifier, on_change=pages.append):
        pass
    _add(repository, notifier, "Later")
    assert len(pages) == 1


def test_search_sort_and_paging_update_the_page(repository, notifier) -> None:
    for n in range(12):
        _add(repository, notifier, f"Task {n}", day=n + 1)
    _add(repository, notifier, "Buy MILK", day=20, priority=Priority.HIGH)

    with TaskListView(repository, notifier, page_size=5) as view:
        assert view.current_page().total_pages == 3

        view.set_page(3)
        assert view.current_page().page == 3
        view.set_page_size(10)
        assert view.page == 1

        view.set_search("milk")
        page = view.current_page()
        assert [t["title"] for t in page.tasks] == ["Buy MILK"]

        view.set_search("")
        view.set_sort_config(
            {"primary": SortKey.PRIORITY, "secondary": None, "direction": SortDirection.ASC}
        )
        assert view.current_page().tasks[0]["title"] == "Buy MILK"


def test_changing_primary_sort_resubscribes(repository, notifier, store) -> None:
    with TaskListView(repository, notifier) as view:
        first = view._subscription
        view.set_sort_config(
            {
                "primary": SortKey.DUE_DATE,
                "secondary": SortKey.PRIORITY,
                "direction": SortDirection.ASC,
            }
        )
        assert view._subscription is first

        view.set_sort_config(
            {"primary": SortKey.DUE_DATE, "secondary": None, "direction": SortDirection.DESC}
        )
        assert view._subscription is not first
        assert first.active is False
        assert store.subscription_count == 1
    assert store.subscription_count == 0


def test_find_task_in_current_collection(repository, notifier) -> None:
    task = _add(repository, notifier, "Pay rent")
    with TaskListView(repository, notifier) as view:
        assert view.find_task(task["id"])["title"] == "Pay rent"
        assert view.find_task("nope") is None


def test_load_failure_releases_and_reports(repository, notifier, store, caplog) -> None:
    store.fail_reads = True
    with caplog.at_level(logging.ERROR):
        with TaskListView(repository, notifier) as view:
            assert not view.is_open
            with pytest.raises(SubscriptionError):
                view.current_page()

    assert notifier.errors == ["Failed to load tasks"]
    assert "Task subscription failed" in caplog.text
    assert store.subscription_count == 0


def test_error_after_open_releases_subscription(repository, notifier, store) -> None:
    with TaskListView(repository, notifier) as view:
        assert store.subscription_count == 1
        store.fail_reads = True
        store.publish()

        assert not view.is_open
        assert store.subscription_count == 0
        with pytest.raises(SubscriptionError):
            view.current_page()
