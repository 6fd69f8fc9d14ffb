"""Configuration management using TOML + environment variables."""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

from options_window.errors import ConfigError

CONFIG_DIR = Path.home() / ".options-window"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_TERMINAL = "i3-sensible-terminal"


@dataclass
class TerminalConfig:
    command: str = DEFAULT_TERMINAL
    # Placed before the link path on the terminal's command line.
    args: list[str] = field(default_factory=lambda: ["-v", "-e"])


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = ""


@dataclass
class AppConfig:
    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _string(section: dict, key: str, default: str) -> str:
    value = section.get(key.rsplit(".", 1)[-1], default)
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got {type(value).__name__}")
    return value


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overrides."""
    config = AppConfig()
    config_file = path or CONFIG_FILE

    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Could not read {config_file}: {e}") from e

        terminal = _section(data, "terminal")
        config.terminal.command = _string(terminal, "terminal.command", config.terminal.command)
        args = terminal.get("args", config.terminal.args)
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ConfigError("terminal.args must be a list of strings")
        config.terminal.args = list(args)

        logging_cfg = _section(data, "logging")
        config.logging.level = _string(logging_cfg, "logging.level", config.logging.level)
        config.logging.file = _string(logging_cfg, "logging.file", config.logging.file)

    # Environment variable overrides
    if env_terminal := os.environ.get("OPTIONS_WINDOW_TERMINAL"):
        config.terminal.command = env_terminal
    if (env_args := os.environ.get("OPTIONS_WINDOW_TERMINAL_ARGS")) is not None:
        config.terminal.args = shlex.split(env_args)
    if env_log_level := os.environ.get("OPTIONS_WINDOW_LOG_LEVEL"):
        config.logging.level = env_log_level
    if env_log_file := os.environ.get("OPTIONS_WINDOW_LOG_FILE"):
        config.logging.file = env_log_file

    return config


# Global singleton
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or load the global config singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
