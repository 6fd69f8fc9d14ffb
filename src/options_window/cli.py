"""CLI entry point using typer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from options_window import PROGRAM_NAME, __version__
from options_window.config import AppConfig, get_config
from options_window.dialog import Dialog
from options_window.errors import (
    ActionError,
    ConfigError,
    ExitCode,
    ParseError,
    ParseErrorType,
    RelaunchError,
)
from options_window.parser import parse_args
from options_window.relaunch import LaunchMode, classify, run_relaunch

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=PROGRAM_NAME,
    help="Show a message with buttons that run shell commands.",
    add_completion=False,
)
console = Console()

USAGE_SHORT = (
    f"Usage: {PROGRAM_NAME} [-h] [-v] [-b label action [icon]]... "
    "[-B label action [icon]]... [-t warning|error] [-m message] [-f font]"
)

USAGE_LONG = f"""\
Usage:
  {PROGRAM_NAME} [OPTION]...

Options:
  -h, --help                                     Prints help information
  -v, --version                                  Prints version information
  -b, --button LABEL ACTION [ICON]               Creates a button that runs ACTION in a terminal.
  -B, --button-no-terminal LABEL ACTION [ICON]   Creates a button that runs ACTION directly.
  -m, --message MSG                              Sets the window caption
  -t, --type warning|error                       Default: error. Defines the window icon
  -f, --font FONT                                Accepted for compatibility, ignored
  --exit-after-action                            Program exits after a button press"""


def _plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def show_version() -> None:
    _plain(f"{PROGRAM_NAME} {__version__}")


def handle_parse_error(error: ParseError) -> ExitCode:
    if error.error_type is ParseErrorType.HELP_REQUESTED:
        show_version()
        _plain(USAGE_LONG)
        return ExitCode.SUCCESS
    if error.error_type is ParseErrorType.VERSION_REQUESTED:
        show_version()
        return ExitCode.SUCCESS
    _plain(f"Error while parsing command line: {error}")
    _plain(USAGE_SHORT)
    return ExitCode.USAGE_ERROR


def setup_logging(config: AppConfig) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.logging.file:
        log_path = Path(config.logging.file).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path)))
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def _error(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def relaunch(link: str) -> ExitCode:
    """Run the script paired with ``link``.

    Configuration problems never stop this: the link and the script must
    still be cleaned up.
    """
    try:
        config = get_config()
    except ConfigError as e:
        _error(str(e))
        config = AppConfig()
    try:
        setup_logging(config)
    except OSError as e:
        _error(f"Could not open log file: {e}")
        setup_logging(AppConfig())

    try:
        run_relaunch(link)
    except RelaunchError:
        logger.exception("Relaunched script failed")
        return ExitCode.RUNTIME_ERROR
    return ExitCode.SUCCESS


def run(argv: list[str]) -> ExitCode:
    """Run the program for ``argv`` (``argv[0]`` is the invocation path)."""
    if classify(argv[0]) is LaunchMode.SCRIPT_RELAUNCH:
        return relaunch(argv[0])

    try:
        config = get_config()
    except ConfigError as e:
        _error(str(e))
        return ExitCode.RUNTIME_ERROR
    try:
        setup_logging(config)
    except OSError as e:
        _error(f"Could not open log file: {e}")
        return ExitCode.RUNTIME_ERROR

    try:
        dialog_config = parse_args(argv)
    except ParseError as e:
        return handle_parse_error(e)

    try:
        Dialog(dialog_config, console).run()
    except ActionError:
        # Already logged where the spawn failed.
        return ExitCode.RUNTIME_ERROR
    return ExitCode.SUCCESS


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": [],
    }
)
def launch() -> None:
    """Show the dialog, or run a relaunched script."""
    # The option parser drops tokens such as a bare "--", so parse_args
    # reads the process arguments itself.
    code = run(list(sys.argv))
    raise typer.Exit(int(code))


def main() -> None:
    app(prog_name=PROGRAM_NAME)


if __name__ == "__main__":
    main()
