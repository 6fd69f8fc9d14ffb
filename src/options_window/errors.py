"""Error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    USAGE_ERROR = 1
    RUNTIME_ERROR = 2


class ParseErrorType(Enum):
    HELP_REQUESTED = "help"
    VERSION_REQUESTED = "version"
    MISSING_ARGUMENT = "missing"
    WRONG_ARGUMENT = "wrong"


@dataclass(eq=False)
class ParseError(Exception):
    """Raised by the argument parser.

    Help and version requests travel through the same exception so callers
    handle a single outcome type; ``is_informational`` tells them apart from
    real usage errors.
    """

    error_type: ParseErrorType
    message: str = ""

    def __str__(self) -> str:
        return self.message

    @property
    def is_informational(self) -> bool:
        return self.error_type in (ParseErrorType.HELP_REQUESTED, ParseErrorType.VERSION_REQUESTED)

    @classmethod
    def missing_argument(cls, message: str) -> ParseError:
        return cls(ParseErrorType.MISSING_ARGUMENT, message)

    @classmethod
    def wrong_argument(cls, message: str) -> ParseError:
        return cls(ParseErrorType.WRONG_ARGUMENT, message)

    @classmethod
    def help_requested(cls) -> ParseError:
        return cls(ParseErrorType.HELP_REQUESTED)

    @classmethod
    def version_requested(cls) -> ParseError:
        return cls(ParseErrorType.VERSION_REQUESTED)


class OptionsWindowError(Exception):
    """Base class for runtime failures that end the process."""


class ActionError(OptionsWindowError):
    """A button action could not be started."""


class RelaunchError(OptionsWindowError):
    """The relaunched script could not be run to completion."""


class ConfigError(OptionsWindowError):
    """The configuration file could not be read."""
