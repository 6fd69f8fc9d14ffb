"""Data models for options-window."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from enum import Enum

from options_window.errors import ActionError
from options_window.services.shell import exec_in_shell, exec_in_terminal

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "This could be your text!"


class MessageType(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class Strategy(str, Enum):
    """How a command is started."""

    TERMINAL = "terminal"
    SHELL = "shell"


@dataclass(frozen=True)
class Command:
    """Opaque shell text bound to an execution strategy."""

    command: str
    strategy: Strategy = Strategy.TERMINAL

    def spawn(self) -> subprocess.Popen:
        if self.strategy is Strategy.TERMINAL:
            return exec_in_terminal(self)
        return exec_in_shell(self)

    def execute(self) -> None:
        """Start the command without waiting for it.

        A failure to spawn is not recoverable: it means the action or the
        environment is misconfigured.
        """
        try:
            self.spawn()
        except OSError as e:
            logger.exception("Failed to spawn child process for %r", self.command)
            raise ActionError(f"Failed to spawn child process: {e}") from e


@dataclass(frozen=True)
class Button:
    label: str
    command: Command
    icon: str | None = None


@dataclass(frozen=True)
class Configuration:
    """Everything the dialog needs, derived once from the command line."""

    message: str = DEFAULT_MESSAGE
    message_type: MessageType = MessageType.ERROR
    exit_after_action: bool = False
    buttons: tuple[Button, ...] = field(default_factory=tuple)
