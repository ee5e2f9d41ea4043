"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from tui_adapters.cli.app import create_app, split_keys


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSplitKeys:
    """Tests for split_keys."""

    def test_split(self) -> None:
        assert split_keys("h,i,enter") == ["h", "i", "enter"]
        assert split_keys("a,,comma") == ["a", "comma"]
        assert split_keys("") == []


class TestCli:
    """Tests for the CLI commands."""

    def test_kinds(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["kinds"])
        assert result.exit_code == 0
        for kind in ("chat", "input", "menu", "spinner", "viewport"):
            assert kind in result.output

    def test_replay_json(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["replay", "input", "--keys", "h,i,enter", "--id", "name", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["kind"] == "input"
        assert [d["signal"] for d in data["deliveries"]] == ["HANDLED", "HANDLED", "HANDLED"]
        assert data["deliveries"][2]["notifications"] == [
            {"source": "name", "name": "INPUT_ENTER_PRESSED", "payload": {"value": "hi"}},
        ]
        assert data["state"] == {"name": ""}

    def test_replay_unfocused(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["replay", "input", "--keys", "a", "--unfocused", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["deliveries"][0]["signal"] == "IGNORED"

    def test_replay_with_view(self, runner: CliRunner) -> None:
        props = json.dumps({"items": ["apple", "banana"]})
        result = runner.invoke(create_app(), ["replay", "list", "--props", props, "--keys", "down", "--view"])
        assert result.exit_code == 0
        assert "LIST_SELECTION_CHANGED" in result.output
        assert "▶ banana" in result.output

    def test_replay_actions_in_json(self, runner: CliRunner) -> None:
        props = json.dumps({"bindings": [{"key": "ctrl+s", "action": {"process": "save"}}]})
        result = runner.invoke(create_app(), ["replay", "textarea", "--props", props, "--keys", "ctrl+s", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["actions"] == [{"source": "component", "process": "save", "method": ""}]

    def test_bindings(self, runner: CliRunner) -> None:
        props = json.dumps({"bindings": [{"key": "ctrl+s", "event": "SAVE", "description": "Save"}]})
        result = runner.invoke(create_app(), ["bindings", "input", "--props", props])
        assert result.exit_code == 0
        assert "Ctrl+S" in result.output
        assert "Save" in result.output

    def test_bindings_empty(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["bindings", "list"])
        assert result.exit_code == 0
        assert "No bindings configured" in result.output

    def test_unknown_kind(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["replay", "slider"])
        assert result.exit_code == 1
        assert "Unknown component kind" in result.output

    def test_invalid_props(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["replay", "input", "--props", "{broken"])
        assert result.exit_code == 1

    def test_invalid_key(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["replay", "input", "--keys", "hyper+x"])
        assert result.exit_code == 1
        assert "Unknown modifier" in result.output

    def test_invalid_log_level(self, runner: CliRunner) -> None:
        result = runner.invoke(create_app(), ["--log-level", "chatty", "kinds"])
        assert result.exit_code == 1
