"""Command line tokenizer producing a Configuration."""

from __future__ import annotations

from collections.abc import Sequence

from options_window.errors import ParseError
from options_window.models import DEFAULT_MESSAGE, Button, Command, Configuration, MessageType, Strategy

BUTTON_FLAGS: dict[str, Strategy] = {
    "-b": Strategy.TERMINAL,
    "--button": Strategy.TERMINAL,
    "-B": Strategy.SHELL,
    "--button-no-terminal": Strategy.SHELL,
}


def _get(args: Sequence[str], pos: int) -> str | None:
    return args[pos] if pos < len(args) else None


def _parse_button(args: Sequence[str], pos: int, strategy: Strategy) -> tuple[Button, int]:
    """Read ``LABEL ACTION [ICON]`` after the flag at ``pos``.

    Returns the button and the position of its last consumed token. The
    icon is only taken when the next token does not look like a flag.
    """
    pos += 1
    label = _get(args, pos)
    if label is None:
        raise ParseError.missing_argument("Missing label for Button.")
    pos += 1
    action = _get(args, pos)
    if action is None:
        raise ParseError.missing_argument("Missing action for Button.")

    icon = _get(args, pos + 1)
    if icon is not None and icon.startswith("-"):
        icon = None
    if icon is not None:
        pos += 1

    return Button(label=label, command=Command(action, strategy), icon=icon), pos


def parse_args(args: Sequence[str]) -> Configuration:
    """Build a Configuration from ``args`` (``args[0]`` is the program name).

    Raises ParseError on the first problem, including help/version requests.
    """
    message = DEFAULT_MESSAGE
    message_type = MessageType.ERROR
    exit_after_action = False
    buttons: list[Button] = []

    pos = 1
    while pos < len(args):
        arg = args[pos]
        if arg in ("-m", "--message"):
            pos += 1
            value = _get(args, pos)
            if value is None:
                raise ParseError.missing_argument("Required argument for -m is missing.")
            message = value
        elif arg in ("-t", "--type"):
            pos += 1
            value = _get(args, pos)
            if value is None:
                raise ParseError.missing_argument("Required argument for -t is missing.")
            if value.lower() == "warning":
                message_type = MessageType.WARNING
            elif value.lower() == "error":
                message_type = MessageType.ERROR
            else:
                raise ParseError.wrong_argument(
                    f"Parameter for -t ({value}) was neither warning nor error."
                )
        elif arg in BUTTON_FLAGS:
            button, pos = _parse_button(args, pos, BUTTON_FLAGS[arg])
            buttons.append(button)
        elif arg == "--exit-after-action":
            exit_after_action = True
        elif arg in ("-f", "--font"):
            # Accepted for compatibility; fonts are not handled.
            pos += 1
        elif arg in ("-h", "--help"):
            raise ParseError.help_requested()
        elif arg in ("-v", "--version"):
            raise ParseError.version_requested()
        else:
            raise ParseError.wrong_argument(f"Unexpected argument: {arg}")
        pos += 1

    return Configuration(
        message=message,
        message_type=message_type,
        exit_after_action=exit_after_action,
        buttons=tuple(buttons),
    )
