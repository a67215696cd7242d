# tests/test_terminal.py

from __future__ import annotations

from yaml import safe_load

from tasklist import configuration
from tasklist.terminal.app import app
from tasklist.view import state as view_state


def invoke(runner, *args, input=None):
    return runner.invoke(app, list(args), input=input)


def add(runner, title="Pay rent", *extra):
    result = invoke(runner, "task", "add", title, "--due", "2024-01-01", *extra)
    assert result.exit_code == 0, result.output
    return result


def test_add_and_list(runner, data_path) -> None:
    result = add(runner, "Pay rent", "--priority", "high", "-d", "Transfer")
    assert "Task created successfully" in result.output
    assert "Pay rent" in result.output

    result = invoke(runner, "task", "ls")
    assert result.exit_code == 0, result.output
    assert "Pay rent" in result.output
    assert "Showing 1 to 1 of 1 tasks" in result.output
    assert "Page 1 of 1" in result.output
    assert list((data_path / "tasks").glob("*.yaml"))


def test_empty_list(runner, data_path) -> None:
    result = invoke(runner, "task", "list")
    assert result.exit_code == 0, result.output
    assert "Showing 0 to 0 of 0 tasks" in result.output
    assert "Page 1 of 1" in result.output


def test_list_search_and_paging(runner, data_path) -> None:
    for n in range(6):
        add(runner, f"Chore {n}")
    add(runner, "Buy milk")

    result = invoke(runner, "task", "list", "--search", "MILK")
    assert "Buy milk" in result.output
    assert "Chore" not in result.output
    assert "Showing 1 to 1 of 1 tasks" in result.output

    result = invoke(runner, "task", "list", "--page-size", "5", "--page", "9")
    assert result.exit_code == 0, result.output
    assert "Showing 6 to 7 of 7 tasks" in result.output
    assert "Page 2 of 2" in result.output


def test_complete_then_history(runner, data_path) -> None:
    add(runner)
    invoke(runner, "task", "list")

    result = invoke(runner, "task", "complete", "1")
    assert result.exit_code == 0, result.output
    assert "Task completed" in result.output
    assert "Completed" in result.output

    result = invoke(runner, "task", "history", "1")
    assert result.exit_code == 0, result.output
    assert "Changed completed from False to True" in result.output


def test_history_of_untouched_task(runner, data_path) -> None:
    add(runner)
    result = invoke(runner, "task", "h", "1")
    assert "No changes recorded." in result.output


def test_edit_description(runner, data_path) -> None:
    add(runner)
    result = invoke(runner, "task", "edit", "1", "--description", "Transfer to landlord")
    assert result.exit_code == 0, result.output
    assert "Task updated successfully" in result.output
    assert "Transfer to landlord" in result.output

    result = invoke(runner, "task", "history", "1")
    assert "Changed description from  to Transfer to landlord" in result.output


def test_edit_blank_title_is_rejected(runner, data_path) -> None:
    add(runner)
    result = invoke(runner, "task", "edit", "1", "--title", "  ")
    assert result.exit_code == 2
    assert "Title is required" in result.output


def test_delete_declined_then_confirmed(runner, data_path) -> None:
    add(runner)

    result = invoke(runner, "task", "delete", "1", input="n\n")
    assert result.exit_code == 0, result.output
    assert "Task not deleted" in result.output
    assert len(list((data_path / "tasks").glob("*.yaml"))) == 1

    result = invoke(runner, "task", "delete", "1", "--yes")
    assert result.exit_code == 0, result.output
    assert "Task deleted successfully" in result.output
    assert list((data_path / "tasks").glob("*.yaml")) == []


def test_unknown_task_id(runner, data_path) -> None:
    result = invoke(runner, "task", "show", "42")
    assert result.exit_code == 2


def test_add_requires_due_date(runner, data_path) -> None:
    result = invoke(runner, "task", "add", "No due")
    assert result.exit_code == 2


def test_add_rejects_bad_date(runner, data_path) -> None:
    result = invoke(runner, "task", "add", "Bad", "--due", "someday")
    assert result.exit_code == 2


def test_invalid_page_size(runner, data_path) -> None:
    result = invoke(runner, "task", "list", "--page-size", "7")
    assert result.exit_code == 2


def test_secondary_sort_must_differ(runner, data_path) -> None:
    result = invoke(runner, "task", "list", "--sort", "priority", "--then", "priority")
    assert result.exit_code == 2


def test_config_set_persists(runner, data_path) -> None:
    result = invoke(runner, "config", "set", "--page-size", "25", "--then", "priority")
    assert result.exit_code == 0, result.output
    assert "Configuration updated" in result.output

    saved = safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert saved["page_size"] == 25
    assert saved["sort_secondary"] == "priority"

    result = invoke(runner, "config", "view")
    assert "25" in result.output


def test_bracketed_text_is_shown_literally(runner, data_path) -> None:
    result = invoke(
        runner, "task", "add", "Fix [/b] tag", "--due", "2024-01-01", "-d", "see [red]log"
    )
    assert result.exit_code == 0, result.output
    assert "Fix [/b] tag" in result.output

    result = invoke(runner, "task", "list")
    assert result.exit_code == 0, result.output
    assert "Fix [/b] tag" in result.output
    assert "see [red]log" in result.output

    result = invoke(runner, "task", "edit", "1", "--title", "[bold]Fixed[/bold]")
    assert result.exit_code == 0, result.output

    result = invoke(runner, "task", "history", "1")
    assert result.exit_code == 0, result.output
    assert "Changed title from Fix [/b] tag to [bold]Fixed[/bold]" in result.output


def test_add_rejects_duration_as_due_date(runner, data_path) -> None:
    result = invoke(runner, "task", "add", "Later", "--due", "P1D")
    assert result.exit_code == 2
    assert not (data_path / "tasks").exists()


def _add_out_of_order(runner) -> None:
    invoke(runner, "task", "add", "Alpha", "--due", "2024-01-05")
    invoke(runner, "task", "add", "Beta", "--due", "2024-01-01")


def test_list_renumbers_ids_by_default(runner, data_path) -> None:
    _add_out_of_order(runner)
    invoke(runner, "task", "list")

    result = invoke(runner, "task", "show", "1")
    assert "Beta" in result.output


def test_no_clear_ids_keeps_existing_numbers(runner, data_path) -> None:
    _add_out_of_order(runner)
    result = invoke(runner, "--no-clear-ids", "task", "list")
    assert result.exit_code == 0, result.output
    assert view_state.get_clear_ids() is False

    result = invoke(runner, "task", "show", "1")
    assert "Alpha" in result.output
