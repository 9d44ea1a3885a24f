"""Tests for CLI argument parsing and headless commands."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from cli import check_config, init_config, list_binds, load_binds, parse_args
from store import DEFAULT_RECORDS, BindConfigFile


class TestParseArgs:
    """Test parse_args() function."""

    def test_no_args_opens_editor(self, monkeypatch, tmp_path):
        """No arguments edits the default config."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        parsed = parse_args([])
        assert parsed.action == "edit"
        assert parsed.config_path == tmp_path / "overbind" / "OverBind_conf.json"

    def test_reads_sys_argv(self):
        with patch.object(sys, "argv", ["overbind", "--list"]):
            assert parse_args().action == "list"

    def test_config_path_resolved(self, tmp_path):
        parsed = parse_args(["--config", str(tmp_path / "binds.json")])
        assert parsed.config_path == (tmp_path / "binds.json").resolve()

    def test_relative_config_path(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        parsed = parse_args(["--config", "binds.json"])
        assert parsed.config_path.is_absolute()
        assert parsed.config_path.name == "binds.json"

    @pytest.mark.parametrize("flag,action", [("--check", "check"), ("--list", "list"), ("--init", "init")])
    def test_actions(self, flag, action):
        assert parse_args([flag]).action == action

    def test_actions_exclusive(self, capsys):
        """Only one headless action at a time."""
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--check", "--list"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "overbind" in capsys.readouterr().out

    def test_help_lists_headless_flags(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--help"])
        out = capsys.readouterr().out
        assert "--check" in out
        assert "--init" in out


class TestHeadless:
    """Test the headless commands."""

    def test_check_valid(self, config_file, capsys):
        assert check_config(config_file) == 0
        out = capsys.readouterr().out
        assert "7 binds" in out
        assert "1 SOCD pairs" in out
        assert "mash trigger group present" in out

    def test_check_unresolvable(self, config_path, capsys):
        """A config that decodes but cannot be saved again fails the check."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps([{"keycode": "51", "result_type": "keyboard", "result_value": 255}]))
        assert check_config(BindConfigFile(config_path)) == 1
        assert "cannot be saved" in capsys.readouterr().err

    def test_load_invalid_exits(self, config_path, capsys):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps([{"keycode": "51", "result_type": "turbo", "result_value": 1}]))
        with pytest.raises(SystemExit) as exc_info:
            load_binds(BindConfigFile(config_path))
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Invalid bind config" in err
        assert "turbo" in err

    def test_load_missing_exits(self, config_path):
        with pytest.raises(SystemExit):
            load_binds(BindConfigFile(config_path))

    def test_list(self, config_file, capsys):
        assert list_binds(config_file) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "[0] Keyboard: Q -> E"
        assert lines[2] == "[2] SOCD: Left -> Right  (linked to 3)"
        assert len(lines) == 7

    def test_list_empty(self, config_path, capsys):
        store = BindConfigFile(config_path)
        store.save_records([])
        assert list_binds(store) == 0
        assert "No binds configured." in capsys.readouterr().out

    def test_init_writes_default(self, config_path, capsys):
        store = BindConfigFile(config_path)
        assert init_config(store) == 0
        assert store.load_records() == DEFAULT_RECORDS
        assert "Wrote default config" in capsys.readouterr().out

    def test_init_keeps_existing(self, config_file, sample_records, capsys):
        assert init_config(config_file) == 0
        assert config_file.load_records() == sample_records
        assert "already exists" in capsys.readouterr().out

    def test_init_unwritable(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert init_config(BindConfigFile(Path(blocker) / "conf.json")) == 1
        assert "Could not write default config" in capsys.readouterr().err
