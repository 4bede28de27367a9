"""Tests for tracker.lib.config and tracker.lib.envparse modules."""

from pathlib import Path
from unittest.mock import patch

import pytest

from tracker.lib import envparse
from tracker.lib.config import (
    CONFIG_KEYS,
    DEFAULT_DB_PATH,
    VALID_LOG_LEVELS,
    load_config,
)


class TestParseEnv:
    """Tests for envparse.parse_env."""

    def test_parses_keys_and_strips_quotes(self):
        env = envparse.parse_env('DB_PATH="data/db.json"\nLOG_LEVEL=\'INFO\'\n')
        assert env == {"DB_PATH": "data/db.json", "LOG_LEVEL": "INFO"}

    def test_skips_comments_and_blank_lines(self):
        env = envparse.parse_env("# tracker settings\n\nLOG_LEVEL=DEBUG\n")
        assert env == {"LOG_LEVEL": "DEBUG"}

    def test_accepts_export_prefix(self):
        assert envparse.parse_env("export DB_PATH=db.json") == {"DB_PATH": "db.json"}

    def test_rejects_line_without_equals(self):
        with pytest.raises(ValueError, match="line 1: Invalid syntax"):
            envparse.parse_env("DB_PATH")

    def test_rejects_lowercase_key(self):
        with pytest.raises(ValueError, match="Invalid key 'db_path'"):
            envparse.parse_env("db_path=x")

    @pytest.mark.parametrize("value,kind", [
        ("$(rm -rf /)", "shell expansion"),
        ("`id`", "backtick"),
        ("${HOME}/db.json", "shell expansion"),
        ("a;b", "command chaining"),
        ("a | b", "command chaining"),
        ("a && b", "command chaining"),
    ])
    def test_rejects_shell_patterns(self, value, kind):
        with pytest.raises(ValueError, match=f"Forbidden {kind} in value for DB_PATH"):
            envparse.parse_env(f"DB_PATH={value}")

    def test_load_env_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            envparse.load_env(tmp_path / "tracker.env")

    def test_unknown_key_kept_with_warning(self, caplog):
        env = envparse.parse_env("DBPATH=db.json\n", known_keys=("DB_PATH",), source="tracker.env")
        assert env == {"DBPATH": "db.json"}
        assert "Unknown key 'DBPATH' in tracker.env line 1" in caplog.text

    def test_no_key_check_without_known_keys(self, caplog):
        envparse.parse_env("ANYTHING=1\n")
        assert caplog.text == ""

    def test_repeated_key_last_wins_with_warning(self, caplog):
        env = envparse.parse_env("LOG_LEVEL=INFO\nLOG_LEVEL=DEBUG\n")
        assert env == {"LOG_LEVEL": "DEBUG"}
        assert "LOG_LEVEL set more than once" in caplog.text

    def test_errors_name_the_file(self, tmp_path):
        env_file = tmp_path / "tracker.env"
        env_file.write_text("# ok\nDB_PATH\n")
        with pytest.raises(ValueError) as exc_info:
            envparse.load_env(env_file)
        assert str(exc_info.value).startswith(f"{env_file} line 2:")


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_env_file(self, tmp_path):
        config = load_config(cwd=tmp_path)
        assert config.db_path == tmp_path / DEFAULT_DB_PATH
        assert config.log_level == "WARNING"
        assert config.log_file is None

    def test_reads_env_file_from_cwd(self, tmp_path):
        (tmp_path / "tracker.env").write_text('DB_PATH="tracker.json"\nLOG_LEVEL=info\n')
        config = load_config(cwd=tmp_path)
        assert config.db_path == tmp_path / "tracker.json"
        assert config.log_level == "INFO"

    def test_relative_paths_resolve_against_env_file(self, tmp_path):
        conf_dir = tmp_path / "conf"
        conf_dir.mkdir()
        env_file = conf_dir / "custom.env"
        env_file.write_text("DB_PATH=db/tracker.json\nLOG_FILE=logs/tracker.log\n")

        config = load_config(env_file)

        assert config.db_path == conf_dir / "db" / "tracker.json"
        assert config.log_file == conf_dir / "logs" / "tracker.log"

    def test_absolute_db_path_kept(self, tmp_path):
        env_file = tmp_path / "tracker.env"
        env_file.write_text(f"DB_PATH={tmp_path / 'abs.json'}\n")
        assert load_config(env_file).db_path == tmp_path / "abs.json"

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.env")

    def test_invalid_log_level_defaults_with_warning(self, tmp_path, caplog):
        env_file = tmp_path / "tracker.env"
        env_file.write_text("LOG_LEVEL=loud\n")
        config = load_config(env_file)
        assert config.log_level == "WARNING"
        assert "Unknown LOG_LEVEL 'LOUD'" in caplog.text

    def test_unknown_key_warns(self, tmp_path, caplog):
        env_file = tmp_path / "tracker.env"
        env_file.write_text("DBPATH=elsewhere.json\n")
        config = load_config(env_file)
        assert config.db_path == tmp_path / DEFAULT_DB_PATH
        assert "Unknown key 'DBPATH'" in caplog.text

    @patch("tracker.lib.config.envparse.load_env")
    def test_uses_envparse(self, mock_load_env):
        mock_load_env.return_value = {"LOG_LEVEL": "ERROR"}
        config = load_config(Path("/fake/tracker.env"))
        mock_load_env.assert_called_once_with(Path("/fake/tracker.env"), known_keys=CONFIG_KEYS)
        assert config.log_level == "ERROR"
        assert config.db_path == Path("/fake") / DEFAULT_DB_PATH


class TestValidLogLevels:
    """Test VALID_LOG_LEVELS constant."""

    def test_contains_standard_levels(self):
        assert "DEBUG" in VALID_LOG_LEVELS
        assert "WARNING" in VALID_LOG_LEVELS
        assert len(VALID_LOG_LEVELS) == 5
