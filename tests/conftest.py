# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tasklist import configuration
from tasklist.repository.configuration import CONFIGURATION_REPO
from tasklist.repository.id_map import ID_MAP_REPO
from tasklist.repository.task import TASK_REPO, TaskRepository
from tasklist.view import state as view_state

from .fakes import FakeNotifier, InMemoryDocumentStore


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def repository(store: InMemoryDocumentStore) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def data_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Point every configured location at a temporary directory and hand the
    module-level repositories a clean slate.
    """
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_TASKS_DIR", data_path / "tasks")
    monkeypatch.setattr(configuration, "DATA_ID_MAP_PATH", data_path / "id_map.yaml")

    monkeypatch.setattr(TASK_REPO, "_store", None)
    monkeypatch.setattr(ID_MAP_REPO, "_id_map", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)

    view_state.set_show_header(False)
    view_state.set_clear_ids(True)
    return data_path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
