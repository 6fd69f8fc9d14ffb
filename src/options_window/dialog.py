"""Console presentation of the dialog."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from options_window.models import Button, Configuration, MessageType

logger = logging.getLogger(__name__)

MESSAGE_STYLES: dict[MessageType, tuple[str, str]] = {
    MessageType.WARNING: ("Warning", "yellow"),
    MessageType.ERROR: ("Error", "red"),
}

CANCEL_CHOICE = 0


class Dialog:
    """Show the message and let the user trigger button actions."""

    def __init__(self, config: Configuration, console: Console | None = None) -> None:
        self.config = config
        self.console = console or Console()

    def activate(self, button: Button) -> bool:
        """Execute the button's command. Returns True if the dialog should close."""
        logger.info("Button activated: %s", button.label)
        button.command.execute()
        return self.config.exit_after_action

    def actions(self) -> list[Callable[[], bool]]:
        return [partial(self.activate, button) for button in self.config.buttons]

    def render(self) -> None:
        title, style = MESSAGE_STYLES[self.config.message_type]
        self.console.print(Panel(escape(self.config.message), title=title, border_style=style))
        for index, button in enumerate(self.config.buttons, start=1):
            icon = f" [dim]({escape(button.icon)})[/dim]" if button.icon else ""
            self.console.print(f"  [bold]{index}[/bold]  {escape(button.label)}{icon}")
        self.console.print(f"  [bold]{CANCEL_CHOICE}[/bold]  Cancel [dim](window-close)[/dim]")

    def run(self) -> None:
        """Prompt until Cancel, end of input, or an action that closes the dialog.

        Spawned commands are not waited for.
        """
        self.render()
        actions = self.actions()
        while True:
            try:
                choice = typer.prompt("Action", type=int, default=CANCEL_CHOICE)
            except typer.Abort:
                return
            if not CANCEL_CHOICE <= choice <= len(actions):
                self.console.print(f"[red]Choose a number between {CANCEL_CHOICE} and {len(actions)}.[/red]")
                continue
            if choice == CANCEL_CHOICE:
                return
            if actions[choice - 1]():
                return
