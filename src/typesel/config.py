"""Configuration management for typesel.

Settings are loaded from three sources in order of priority:
1. Environment variables (highest priority)
2. Project-level config: .typesel.toml
3. Global config: ~/.config/typesel/config.toml (lowest priority)

Command-line flags are applied on top by the CLI.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

from typesel.exceptions import ConfigError

console = Console(stderr=True)

_GLOBAL_CONFIG_DIR = Path.home() / ".config" / "typesel"
_GLOBAL_CONFIG_PATH = _GLOBAL_CONFIG_DIR / "config.toml"
_PROJECT_CONFIG_NAME = ".typesel.toml"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})
_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off", ""})


@dataclass
class TypeselConfig:
    """typesel configuration.

    Attributes:
        project_dir: Directory the configuration was loaded for.
        all_structs: Select every struct type unless it carries the ignore pragma.
        log_level: Diagnostics verbosity (DEBUG, INFO, WARNING, ERROR).
        go_command: Go toolchain binary, used to ask for the default GOPATH.
        gopath: GOPATH override (empty = $GOPATH, then ``go env GOPATH``).
    """

    project_dir: Path = field(default_factory=Path.cwd)
    all_structs: bool = False
    log_level: str = "INFO"
    go_command: str = "go"
    gopath: str = ""

    @property
    def debug(self) -> bool:
        """True when per-unit diagnostics should be printed."""
        return self.log_level == "DEBUG"


def load_config(project_dir: Path) -> TypeselConfig:
    """Load configuration from env vars, project config, and global config.

    Priority: env vars > .typesel.toml > ~/.config/typesel/config.toml

    Args:
        project_dir: Directory to look for .typesel.toml in.

    Returns:
        A fully resolved TypeselConfig instance.

    Raises:
        ConfigError: If a setting has an invalid value.
    """
    config = TypeselConfig(project_dir=project_dir)

    # Layer 1: Global config (lowest priority)
    _apply_toml(config, _load_toml(_GLOBAL_CONFIG_PATH))

    # Layer 2: Project config
    _apply_toml(config, _load_toml(project_dir / _PROJECT_CONFIG_NAME))

    # Layer 3: Environment variables (highest priority)
    _apply_env(config)

    return config


def parse_bool(value: Any, key: str) -> bool:
    """Interpret a TOML or environment value as a boolean.

    Raises:
        ConfigError: If the value is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_log_level(value: Any) -> str:
    """Normalise a log level name.

    Raises:
        ConfigError: If the level is unknown.
    """
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        valid = ", ".join(sorted(_LOG_LEVELS))
        raise ConfigError(f"Unknown log level {value!r} (valid: {valid})")
    return level


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file, returning an empty dict if missing or invalid."""
    if not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not parse {path}: {exc}")
        return {}


def _apply_toml(config: TypeselConfig, settings: dict[str, Any]) -> None:
    """Merge TOML settings into a TypeselConfig."""
    if "all_structs" in settings:
        config.all_structs = parse_bool(settings["all_structs"], "all_structs")
    if "log_level" in settings:
        config.log_level = parse_log_level(settings["log_level"])
    if "go_command" in settings:
        config.go_command = str(settings["go_command"])
    if "gopath" in settings:
        config.gopath = str(settings["gopath"])


def _apply_env(config: TypeselConfig) -> None:
    """Override config with environment variables where set."""
    if all_structs := os.environ.get("TYPESEL_ALL"):
        config.all_structs = parse_bool(all_structs, "TYPESEL_ALL")
    if log_level := os.environ.get("TYPESEL_LOG_LEVEL"):
        config.log_level = parse_log_level(log_level)
    if go_command := os.environ.get("TYPESEL_GO"):
        config.go_command = go_command
    if gopath := os.environ.get("GOPATH"):
        config.gopath = gopath
