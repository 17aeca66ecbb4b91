"""Tests for the inspection CLI."""

import json

import pytest
from typer.testing import CliRunner

from jsonl_store.cli import app
from jsonl_store.jsonl_file import JsonlFile


@pytest.fixture(autouse=True)
def quiet_logs(clean_runtime, monkeypatch):
    """Keep skipped-line warnings off the captured output."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def people(jsonl_path):
    jf = JsonlFile(jsonl_path)
    jf.add_many(
        [
            {"name": "Alice", "age": 25, "admin": True},
            {"name": "Bob", "age": 30, "admin": False},
            {"name": "Cara", "age": 30, "admin": False},
        ]
    )
    return jsonl_path


def test_help(runner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for cmd in ("count", "first", "last", "find", "delete", "stats"):
        assert cmd in result.output


def test_count(runner, people, write_text):
    result = runner.invoke(app, ["count", str(people)])
    assert result.exit_code == 0
    assert result.output.strip() == "3"
    write_text(people, people.read_text() + "\nbroken")
    assert runner.invoke(app, ["count", str(people)]).output.strip() == "3"
    assert runner.invoke(app, ["count", str(people), "--raw"]).output.strip() == "4"


def test_first_and_last_json(runner, people):
    first = runner.invoke(app, ["first", str(people), "--json"])
    assert first.exit_code == 0
    assert json.loads(first.output) == {"name": "Alice", "age": 25, "admin": True}
    last = runner.invoke(app, ["last", str(people), "--json"])
    assert json.loads(last.output)["name"] == "Cara"


def test_first_on_empty_file_fails(runner, tmp_path):
    result = runner.invoke(app, ["first", str(tmp_path / "empty.jsonl")])
    assert result.exit_code == 1
    assert "File is empty" in result.output


def test_find_parses_json_values(runner, people):
    result = runner.invoke(app, ["find", str(people), "--where", "age=30", "--json"])
    assert result.exit_code == 0
    names = [json.loads(line)["name"] for line in result.output.splitlines()]
    assert names == ["Bob", "Cara"]

    limited = runner.invoke(app, ["find", str(people), "--where", "age=30", "--limit", "1", "--json"])
    assert len(limited.output.splitlines()) == 1

    by_bool = runner.invoke(app, ["find", str(people), "--where", "admin=true", "--json"])
    assert [json.loads(line)["name"] for line in by_bool.output.splitlines()] == ["Alice"]

    by_text = runner.invoke(app, ["find", str(people), "--where", "name=Bob", "--json"])
    assert json.loads(by_text.output)["age"] == 30


def test_find_no_match_message(runner, people):
    result = runner.invoke(app, ["find", str(people), "--where", "name=Zed"])
    assert result.exit_code == 0
    assert "No matching records" in result.output


def test_find_rejects_bad_where(runner, people):
    result = runner.invoke(app, ["find", str(people), "--where", "nonsense"])
    assert result.exit_code == 2


def test_delete(runner, people):
    result = runner.invoke(app, ["delete", str(people), "--where", "age=30", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"deleted": 2}
    assert [r["name"] for r in JsonlFile(people).iter_records()] == ["Alice"]


def test_stats(runner, people, write_text):
    write_text(people, people.read_text() + "\n\nbroken\n[1]")
    result = runner.invoke(app, ["stats", str(people), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"records": 3, "blank": 1, "malformed": 1, "non_object": 1}
    table = runner.invoke(app, ["stats", str(people)])
    assert table.exit_code == 0
    assert "malformed" in table.output


def test_bad_env_setting_exits_cleanly(runner, people, monkeypatch):
    monkeypatch.setenv("JSONL_STORE_BATCH_SIZE", "abc")
    result = runner.invoke(app, ["count", str(people)])
    assert result.exit_code == 1
    assert "error" in result.output
    assert "Traceback" not in result.output


def test_console_is_shared():
    from jsonl_store.cli import _console
    from jsonl_store.infrastructure.logging import get_console

    assert _console() is get_console()
