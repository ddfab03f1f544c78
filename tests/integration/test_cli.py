"""Integration tests for the Typer CLI.

Each invocation builds its own service, so state is shared through the
JSON repository in a temporary data directory.
"""

import re

import pytest
from typer.testing import CliRunner

from todoapp import __version__
from todoapp.interfaces.cli import app

runner = CliRunner()

CREATED = re.compile(r"Created ([0-9a-f-]{36})")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("TODOAPP_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("TODOAPP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("TODOAPP_STORAGE", raising=False)
    monkeypatch.delenv("TODOAPP_ENVIRONMENT", raising=False)
    return tmp_path


def invoke(*args):
    return runner.invoke(app, ["--log-level", "warning", *args])


def add(title: str, *extra: str) -> str:
    result = invoke("add", title, *extra)
    assert result.exit_code == 0, result.output
    match = CREATED.search(result.output)
    assert match, result.output
    return match.group(1)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_add_and_show():
    todo_id = add("Buy groceries", "-p", "high", "-d", "Milk")

    result = invoke("show", todo_id)
    assert result.exit_code == 0
    assert "Buy groceries" in result.output
    assert "Milk" in result.output
    assert "high" in result.output


def test_add_empty_title_fails():
    result = invoke("add", "   ")
    assert result.exit_code == 1
    assert "[validation]" in result.output


def test_add_bad_due_date():
    result = invoke("add", "Deadline", "--due", "next tuesday")
    assert result.exit_code == 1
    assert "ISO-8601" in result.output


def test_list():
    empty = invoke("list")
    assert empty.exit_code == 0
    assert "No todos found." in empty.output

    add("First", "-p", "low")
    add("Second", "-p", "urgent")

    everything = invoke("list")
    assert "2 todo(s)" in everything.output

    urgent = invoke("list", "--priority", "urgent")
    assert "Second" in urgent.output
    assert "First" not in urgent.output


def test_lifecycle():
    todo_id = add("Write report")

    assert "Started" in invoke("start", todo_id).output
    completed = invoke("complete", todo_id)
    assert completed.exit_code == 0
    assert "Completed: Write report" in completed.output

    reopened = invoke("reopen", todo_id)
    assert "[pending]" in reopened.output

    assert invoke("cancel", todo_id).exit_code == 0
    rejected = invoke("complete", todo_id)
    assert rejected.exit_code == 1
    assert "[business_rule]" in rejected.output


def test_update():
    todo_id = add("Draft", "--due", "2099-01-01T09:00:00")

    result = invoke("update", todo_id, "--title", "Final", "--clear-due")
    assert result.exit_code == 0
    assert "Final" in result.output
    assert "Due:" not in result.output


def test_update_requires_a_field():
    todo_id = add("Nothing")
    result = invoke("update", todo_id)
    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_update_conflicting_due_options():
    todo_id = add("Conflict")
    result = invoke("update", todo_id, "--due", "2099-01-01T00:00:00", "--clear-due")
    assert result.exit_code == 1


def test_delete():
    todo_id = add("Temporary")
    assert invoke("delete", todo_id).exit_code == 0

    missing = invoke("show", todo_id)
    assert missing.exit_code == 1
    assert "[not_found]" in missing.output
