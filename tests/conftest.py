"""Shared test fixtures."""

from __future__ import annotations

import os
import sys

import pytest

import options_window.config as cfg_module
from options_window.config import TerminalConfig, reset_config

ENV_VARS = (
    "OPTIONS_WINDOW_TERMINAL",
    "OPTIONS_WINDOW_TERMINAL_ARGS",
    "OPTIONS_WINDOW_LOG_LEVEL",
    "OPTIONS_WINDOW_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config file and environment."""
    config_file = tmp_path / "config" / "config.toml"
    monkeypatch.setattr(cfg_module, "CONFIG_FILE", config_file)
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield config_file
    reset_config()


@pytest.fixture
def runtime_dir(tmp_path, monkeypatch):
    run_dir = tmp_path / "run"
    run_dir.mkdir()
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(run_dir))
    return run_dir


@pytest.fixture
def fake_executable(tmp_path, monkeypatch):
    """An executable standing in for the installed console script."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    exe = bin_dir / "options-window"
    exe.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(exe, 0o755)
    monkeypatch.setattr(sys, "argv", [str(exe)])
    return exe.resolve()


@pytest.fixture
def terminal_config():
    return TerminalConfig(command="xterm", args=["-e"])
