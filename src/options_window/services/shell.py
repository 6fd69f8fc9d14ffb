"""Execution strategies for button commands.

Not all terminal emulators handle ``-e`` the same way, so the command text is
never handed to the terminal. Instead a temporary script holding the command
and a symlink to this program are created, and the terminal is asked to run
the link. The program recognises the link's ``.cmd`` ending when it starts
(see ``options_window.relaunch``) and runs the script, which removes itself
before running the command.
"""

from __future__ import annotations

import logging
import os
import secrets
import shutil
import string
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from options_window import PROGRAM_NAME
from options_window.config import TerminalConfig, get_config

if TYPE_CHECKING:
    from options_window.models import Command

logger = logging.getLogger(__name__)

SHELL = "/bin/sh"
SCRIPT_SUFFIX = ".sh"
LINK_SUFFIX = ".cmd"
SUFFIX_LENGTH = 30

_ALPHANUMERIC = string.ascii_letters + string.digits


def exec_in_shell(command: Command) -> subprocess.Popen:
    """Run the command through ``/bin/sh -c``, inheriting stdio."""
    logger.info("Spawning shell command: %s", command.command)
    return subprocess.Popen([SHELL, "-c", command.command])


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def artifact_paths(directory: Path, suffix: str) -> tuple[Path, Path]:
    """Return the (script, link) pair sharing ``suffix``."""
    stem = f"{PROGRAM_NAME}_{suffix}"
    return directory / f"{stem}{SCRIPT_SUFFIX}", directory / f"{stem}{LINK_SUFFIX}"


def runtime_dir() -> Path:
    if xdg := os.environ.get("XDG_RUNTIME_DIR"):
        return Path(xdg)
    return Path(tempfile.gettempdir())


def current_executable() -> Path:
    """Resolve the executable that re-enters this program when run.

    ``sys.executable`` is the interpreter, so the link must target the
    console script instead: normally ``sys.argv[0]``, otherwise the
    installed script on ``PATH`` (e.g. under ``python -m``).
    """
    argv0 = Path(sys.argv[0]).resolve()
    if argv0.is_file() and os.access(argv0, os.X_OK):
        return argv0
    found = shutil.which(PROGRAM_NAME)
    if found:
        return Path(found).resolve()
    raise FileNotFoundError(f"Cannot locate the {PROGRAM_NAME} executable to relaunch")


def write_script(script_path: Path, command_text: str) -> None:
    """Write the self-deleting script. Fails if the path already exists."""
    fd = os.open(script_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o700)
    with os.fdopen(fd, "wb") as f:
        # The umask may have masked the creation mode.
        os.fchmod(f.fileno(), 0o700)
        f.write(b"#!/bin/sh\n")
        f.write(b"rm " + os.fsencode(script_path) + b"\n")
        f.write(os.fsencode(command_text) + b"\n")


def prepare_relaunch(command: Command, directory: Path | None = None) -> tuple[Path, Path]:
    """Create the script and the link for one terminal execution."""
    directory = directory or runtime_dir()
    target = current_executable()
    script_path, link_path = artifact_paths(directory, random_suffix())
    write_script(script_path, command.command)
    logger.debug("Wrote script %s", script_path)
    os.symlink(target, link_path)
    logger.debug("Linked %s", link_path)
    return script_path, link_path


def exec_in_terminal(command: Command, *, terminal: TerminalConfig | None = None) -> subprocess.Popen:
    """Run the command interactively inside the configured terminal emulator."""
    terminal = terminal or get_config().terminal
    _, link_path = prepare_relaunch(command)
    argv = [terminal.command, *terminal.args, str(link_path)]
    logger.info("Spawning terminal: %s", " ".join(argv))
    return subprocess.Popen(argv)
