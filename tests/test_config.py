"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from typesel import config as config_module
from typesel.config import TypeselConfig, load_config, parse_bool, parse_log_level
from typesel.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at a temp file and clear typesel env vars."""
    global_path = tmp_path / "global" / "config.toml"
    monkeypatch.setattr(config_module, "_GLOBAL_CONFIG_PATH", global_path)
    for var in ("TYPESEL_ALL", "TYPESEL_LOG_LEVEL", "TYPESEL_GO", "GOPATH"):
        monkeypatch.delenv(var, raising=False)
    return global_path


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)
        assert config == TypeselConfig(project_dir=tmp_path)
        assert config.all_structs is False
        assert config.log_level == "INFO"
        assert config.go_command == "go"

    def test_project_file(self, tmp_path: Path) -> None:
        (tmp_path / ".typesel.toml").write_text(
            'all_structs = true\nlog_level = "debug"\ngopath = "/opt/go"\n', encoding="utf-8"
        )
        config = load_config(tmp_path)
        assert config.all_structs is True
        assert config.log_level == "DEBUG"
        assert config.debug is True
        assert config.gopath == "/opt/go"

    def test_project_overrides_global(self, tmp_path: Path, isolated_env: Path) -> None:
        isolated_env.parent.mkdir(parents=True)
        isolated_env.write_text('go_command = "go1.22"\nall_structs = true\n', encoding="utf-8")
        (tmp_path / ".typesel.toml").write_text("all_structs = false\n", encoding="utf-8")

        config = load_config(tmp_path)

        assert config.go_command == "go1.22"
        assert config.all_structs is False

    def test_env_overrides_files(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".typesel.toml").write_text("all_structs = false\n", encoding="utf-8")
        monkeypatch.setenv("TYPESEL_ALL", "yes")
        monkeypatch.setenv("TYPESEL_LOG_LEVEL", "warning")
        monkeypatch.setenv("GOPATH", "/home/dev/go")

        config = load_config(tmp_path)

        assert config.all_structs is True
        assert config.log_level == "WARNING"
        assert config.gopath == "/home/dev/go"

    def test_invalid_toml_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / ".typesel.toml").write_text("all_structs = [", encoding="utf-8")
        assert load_config(tmp_path).all_structs is False

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        (tmp_path / ".typesel.toml").write_text('log_level = "chatty"\n', encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown log level"):
            load_config(tmp_path)


class TestParsers:
    @pytest.mark.parametrize("value", [True, "true", "1", "YES", "on"])
    def test_truthy(self, value: object) -> None:
        assert parse_bool(value, "k") is True

    @pytest.mark.parametrize("value", [False, "false", "0", "no", "off"])
    def test_falsy(self, value: object) -> None:
        assert parse_bool(value, "k") is False

    def test_bad_bool(self) -> None:
        with pytest.raises(ConfigError, match="TYPESEL_ALL"):
            parse_bool("maybe", "TYPESEL_ALL")

    def test_log_level(self) -> None:
        assert parse_log_level(" error ") == "ERROR"
