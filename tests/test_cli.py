"""Tests for the run.py command-line launcher."""

import json

import pytest

from run import build_parser, main


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    # Register the variables apply_environment() sets so they are removed after
    for name in ("TWINE_DOCUMENTS_DIR", "TWINE_APP_DATA_DIR", "TWINE_LANGUAGE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    config = {
        "paths": {
            "documents_dir": str(tmp_path / "Documents"),
            "app_data_dir": str(tmp_path / "userData"),
        },
        "locale": {"language": "en"},
        "backup": {"max_backups": 2},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config))
    return str(path)


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_backup_max_backups(self):
        args = build_parser().parse_args(["backup", "--max-backups", "5"])
        assert args.command == "backup"
        assert args.max_backups == 5


class TestCommands:
    def test_path(self, config_path, tmp_path, capsys):
        assert main(["-c", config_path, "path"]) == 0
        out = capsys.readouterr().out.strip()
        assert out == str(tmp_path / "Documents" / "Twine" / "Stories")

    def test_create_and_backup(self, config_path, tmp_path):
        stories = tmp_path / "Documents" / "Twine" / "Stories"
        assert main(["-c", config_path, "create"]) == 0
        assert stories.is_dir()

        (stories / "a.json").write_text("{}")
        assert main(["-c", config_path, "backup"]) == 0
        backups = list((tmp_path / "Documents" / "Twine" / "Backups").iterdir())
        assert len(backups) == 1
        assert (backups[0] / "a.json").exists()

    def test_lock_and_unlock(self, config_path, tmp_path):
        main(["-c", config_path, "create"])
        assert main(["-c", config_path, "lock"]) == 0
        assert main(["-c", config_path, "unlock"]) == 0

    def test_lock_missing_directory_fails(self, config_path):
        assert main(["-c", config_path, "lock"]) == 1

    def test_backup_missing_directory_fails(self, config_path):
        assert main(["-c", config_path, "backup"]) == 1

    def test_save_and_load_json(self, config_path, capsys):
        assert main(["-c", config_path, "save-json", "prefs.json", '{"a": 1}']) == 0
        capsys.readouterr()
        assert main(["-c", config_path, "load-json", "prefs.json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"a": 1}

    def test_load_missing_json_fails(self, config_path):
        assert main(["-c", config_path, "load-json", "missing.json"]) == 1

    def test_save_invalid_json_fails(self, config_path):
        assert main(["-c", config_path, "save-json", "prefs.json", "{oops"]) == 1

    def test_missing_config_exits(self):
        with pytest.raises(SystemExit):
            main(["-c", "/nonexistent/config.json", "path"])
