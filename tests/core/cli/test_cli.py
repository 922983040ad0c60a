"""Tests for the CLI entry point and commands."""

import json

import pytest
from click.testing import CliRunner
from loguru import logger

from moodmorph.core.cli import main
from moodmorph.core.storage import LocalStorage


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli(runner, tmp_path):
    """Invoke the CLI against a throwaway data directory."""

    def _invoke(*args, input=None, env=None):
        base = [
            "--config",
            str(tmp_path / "missing-config.yaml"),
            "--data-dir",
            str(tmp_path / "data"),
        ]
        return runner.invoke(main, [*base, *args], input=input, env={"COLUMNS": "200", **(env or {})})

    return _invoke


@pytest.fixture
def store(tmp_path):
    return lambda: LocalStorage(base_path=str(tmp_path / "data" / "store"))


def _current_id(store):
    return store().get("moodmorph_current_user")["id"]


def _legacy_file(tmp_path, *ids):
    path = tmp_path / "legacy.json"
    entries = [
        {
            "id": entry_id,
            "date": "2024-01-05T09:30:00.000Z",
            "action": f"imported {entry_id}",
            "emotion": "Sad",
            "intensity": 4,
            "reaction": "",
            "result": "",
        }
        for entry_id in ids
    ]
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


class TestCliGroup:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "MoodMorph" in result.output
        for command in ("init", "profiles", "log", "list", "import", "export", "purge", "insights"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_requires_profile(self, cli):
        result = cli("log", "-t", "missed the bus")
        assert result.exit_code == 1
        assert "moodmorph init" in result.output

    def test_bad_language_config(self, cli):
        result = cli("list", env={"MOODMORPH_UI__LANGUAGE": "de"})
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestProfileCommands:
    def test_init(self, cli, store):
        result = cli("init", "Sara")
        assert result.exit_code == 0
        assert "Created profile 'Sara'" in result.output
        assert store().get("moodmorph_current_user")["name"] == "Sara"

    def test_init_blank_name(self, cli):
        result = cli("init", "  ")
        assert result.exit_code == 1

    def test_list_marks_current(self, cli, store):
        cli("init", "Sara")
        cli("init", "Ali")
        result = cli("profiles", "list")
        assert result.exit_code == 0
        assert f"* {_current_id(store)}  Ali" in result.output
        assert "  Sara" in result.output

    def test_switch(self, cli, store):
        cli("init", "Sara")
        sara_id = _current_id(store)
        cli("init", "Ali")

        result = cli("profiles", "switch", sara_id)
        assert result.exit_code == 0
        assert "Switched to 'Sara'" in result.output
        assert _current_id(store) == sara_id

    def test_switch_unknown(self, cli):
        cli("init", "Sara")
        result = cli("profiles", "switch", "nope")
        assert result.exit_code == 1

    def test_delete_current_falls_back(self, cli, store):
        cli("init", "Sara")
        cli("init", "Ali")
        ali_id = _current_id(store)

        result = cli("profiles", "delete", ali_id, "--yes")
        assert result.exit_code == 0
        assert "Current profile: 'Sara'" in result.output

    def test_delete_asks_for_confirmation(self, cli, store):
        cli("init", "Sara")
        result = cli("profiles", "delete", _current_id(store), input="n\n")
        assert "Aborted" in result.output
        assert store().get("moodmorph_current_user")["name"] == "Sara"

    def test_delete_last(self, cli, store):
        cli("init", "Sara")
        result = cli("profiles", "delete", _current_id(store), "--yes")
        assert "No profiles left" in result.output
        assert store().get("moodmorph_current_user") is None


class TestEntryCommands:
    @pytest.fixture(autouse=True)
    def _profile(self, cli):
        cli("init", "Sara")

    def test_log_and_list(self, cli):
        result = cli("log", "-t", "missed the bus", "-e", "frustrated", "-i", "6", "-r", "walked")
        assert result.exit_code == 0
        assert "Logged entry" in result.output

        listed = cli("list")
        assert listed.exit_code == 0
        assert "missed the bus" in listed.output
        assert "Frustrated" in listed.output

    def test_list_search(self, cli):
        cli("log", "-t", "missed the bus")
        assert "missed the bus" in cli("list", "-s", "bus").output
        assert "No entries" in cli("list", "-s", "train").output

    def test_log_on_other_day(self, cli):
        cli("log", "-t", "new year walk", "--date", "2024-01-01")
        assert "No entries" in cli("list", "-s", "walk").output
        assert "new year walk" in cli("list", "--date", "2024-01-01").output
        assert "new year walk" in cli("list", "--all-dates").output

    def test_log_rejects_bad_intensity(self, cli):
        result = cli("log", "-t", "x", "-i", "11")
        assert result.exit_code == 2

    def test_bad_date(self, cli):
        result = cli("list", "--date", "yesterday")
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output

    def test_edit_by_prefix(self, cli, store):
        cli("log", "-t", "missed the bus", "-i", "3")
        entry_id = store().get(f"moodmorph_entries_{_current_id(store)}")[0]["id"]

        result = cli("edit", entry_id[:8], "-t", "caught the bus", "-i", "2")
        assert result.exit_code == 0
        stored = store().get(f"moodmorph_entries_{_current_id(store)}")[0]
        assert stored["action"] == "caught the bus"
        assert stored["intensity"] == 2

    def test_edit_nothing(self, cli, store):
        cli("log", "-t", "x")
        entry_id = store().get(f"moodmorph_entries_{_current_id(store)}")[0]["id"]
        assert "Nothing to change" in cli("edit", entry_id).output

    def test_rm(self, cli, store):
        cli("log", "-t", "x")
        entry_id = store().get(f"moodmorph_entries_{_current_id(store)}")[0]["id"]
        result = cli("rm", entry_id)
        assert result.exit_code == 0
        assert store().get(f"moodmorph_entries_{_current_id(store)}") == []

    def test_rm_unknown(self, cli):
        result = cli("rm", "zzzz")
        assert result.exit_code == 1
        assert "No entry matches" in result.output

    def test_stats(self, cli):
        assert "No entries yet" in cli("stats").output
        cli("log", "-t", "missed the bus", "-e", "Sad", "-i", "8")
        result = cli("stats")
        assert "Entries:            1" in result.output
        assert "missed the bus" in result.output

    def test_insights_without_entries(self, cli):
        result = cli("insights")
        assert result.exit_code == 0
        assert "No entries to analyze yet." in result.output

    def test_insights_logs_client_settings(self, cli, tmp_path):
        result = cli("insights", env={"MOODMORPH_LLM__MODEL": "gpt-4o-mini"})
        assert result.exit_code == 0
        logger.remove()

        log_text = (tmp_path / "data" / "logs" / "moodmorph.log").read_text(encoding="utf-8")
        assert "Insight client:" in log_text
        assert "'model': 'gpt-4o-mini'" in log_text


class TestDataCommands:
    @pytest.fixture(autouse=True)
    def _profile(self, cli):
        cli("init", "Sara")

    def test_export_package(self, cli, tmp_path):
        cli("log", "-t", "missed the bus")
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        result = cli("export", "--range", "all", "-o", str(out_dir))
        assert result.exit_code == 0
        assert "Exported 1 entries" in result.output

        (path,) = out_dir.glob("MoodMorph_sara_*.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["user"]["name"] == "Sara"
        assert data["entries"][0]["action"] == "missed the bus"

    def test_export_legacy(self, cli, tmp_path):
        cli("log", "-t", "x")
        target = tmp_path / "dump.json"
        result = cli("export", "--legacy", "-o", str(target))
        assert result.exit_code == 0
        assert isinstance(json.loads(target.read_text(encoding="utf-8")), list)

    def test_export_custom_needs_dates(self, cli):
        result = cli("export", "--range", "custom", "--start", "2024-01-01")
        assert result.exit_code == 2

    def test_export_failure(self, cli, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        result = cli("export", "-o", str(blocker / "out.json"))
        assert result.exit_code == 1
        assert "Export failed" in result.output

    def test_import_legacy(self, cli, tmp_path):
        path = _legacy_file(tmp_path, "l1", "l2")
        result = cli("import", str(path))
        assert result.exit_code == 0
        assert "Data imported successfully. (2 new entries)" in result.output

        again = cli("import", str(path))
        assert "No new entries found in the file." in again.output

    def test_import_invalid(self, cli, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"hello": "world"}', encoding="utf-8")
        result = cli("import", str(path))
        assert result.exit_code == 1
        assert "Invalid data file." in result.output

    def test_import_other_profile(self, cli, tmp_path, store):
        sara_id = _current_id(store)
        package = {
            "user": {"id": "ali-1", "name": "Ali", "created": "2024-01-01T00:00:00.000Z"},
            "entries": [],
            "exportedAt": "2024-01-02T00:00:00.000Z",
            "appVersion": "1.0.0",
        }
        path = tmp_path / "ali.json"
        path.write_text(json.dumps(package), encoding="utf-8")

        result = cli("import", str(path), "--no-switch")
        assert result.exit_code == 0
        assert _current_id(store) == sara_id

        result = cli("import", str(path), input="y\n")
        assert "Switch to this profile now?" in result.output
        assert _current_id(store) == "ali-1"

    def test_purge_all(self, cli):
        cli("log", "-t", "a")
        cli("log", "-t", "b")
        result = cli("purge", "--range", "all", "--yes")
        assert result.exit_code == 0
        assert "Selected data has been deleted. (2 entries)" in result.output

    def test_purge_7d_removes_recent(self, cli, tmp_path):
        cli("log", "-t", "today")
        cli("import", str(_legacy_file(tmp_path, "old")))

        result = cli("purge", "--range", "7d", "--yes")
        assert "(1 entries)" in result.output
        listed = cli("list", "--all-dates")
        assert "imported old" in listed.output
        assert "today" not in listed.output

    def test_purge_aborted(self, cli, store):
        cli("log", "-t", "a")
        result = cli("purge", "--range", "all", input="n\n")
        assert "Aborted" in result.output
        assert len(store().get(f"moodmorph_entries_{_current_id(store)}")) == 1
