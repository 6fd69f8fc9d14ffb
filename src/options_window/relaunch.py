"""Second phase of terminal execution.

When a terminal emulator runs the ``.cmd`` link created by
``options_window.services.shell``, this program starts again with the link as
``argv[0]``. In that case no dialog is shown: the link is removed and the
paired script is run to completion.
"""

from __future__ import annotations

import logging
import os
import subprocess
from enum import Enum

from options_window.errors import RelaunchError
from options_window.services.shell import LINK_SUFFIX, SHELL

logger = logging.getLogger(__name__)


class LaunchMode(str, Enum):
    NORMAL = "normal"
    SCRIPT_RELAUNCH = "script-relaunch"


def classify(argv0: str) -> LaunchMode:
    if argv0.endswith(LINK_SUFFIX):
        return LaunchMode.SCRIPT_RELAUNCH
    return LaunchMode.NORMAL


def script_path_for_link(link: str) -> str:
    """Map ``<name>_<suffix>.cmd`` to ``<name>_<suffix>.sh``."""
    return link[:-3] + "sh"


def remove_link(link: str) -> None:
    try:
        os.remove(link)
    except OSError as e:
        logger.warning("Couldn't delete link %s: %s", link, e)


def run_script(script: str) -> int:
    """Run the script with ``/bin/sh`` and wait for it."""
    try:
        proc = subprocess.Popen([SHELL, script])
    except OSError as e:
        raise RelaunchError(f"Couldn't spawn child process: {e}") from e
    try:
        return proc.wait()
    except OSError as e:
        raise RelaunchError(f"Error during child's execution: {e}") from e


def run_relaunch(argv0: str) -> int:
    """Clean up the link at ``argv0`` and run its script. Returns its exit status."""
    remove_link(argv0)
    script = script_path_for_link(argv0)
    logger.info("Running script %s", script)
    returncode = run_script(script)
    logger.debug("Script %s exited with %s", script, returncode)
    return returncode
