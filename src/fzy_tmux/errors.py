"""Exceptions raised by fzy-tmux.

Every fatal condition derives from FzyTmuxError so the CLI can report it
with a single handler. RelayWriteError is the one recoverable error: the
input forwarder logs it and keeps the driver going.
"""

from pathlib import Path


class FzyTmuxError(Exception):
    """Base exception for all fzy-tmux failures."""

    pass


class MissingEnvironmentError(FzyTmuxError):
    """Raised when a required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"{variable} variable not found; not running inside a tmux session?")
        self.variable = variable


class ConfigError(FzyTmuxError):
    """Raised when configuration values from the environment are invalid."""

    pass


class TempDirectoryError(FzyTmuxError):
    """Raised when the private temporary directory cannot be created."""

    pass


class PipeCreationError(FzyTmuxError):
    """Raised when a named pipe cannot be created."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to create FIFO `{path}`: {reason}")
        self.path = path


class LauncherSpawnError(FzyTmuxError):
    """Raised when the multiplexer process cannot be started."""

    pass


class RelayWriteError(FzyTmuxError):
    """Raised when forwarding standard input to the picker fails."""

    pass


class RelayReadError(FzyTmuxError):
    """Raised when copying the picker's output to standard output fails."""

    pass


class InvalidExitEncodingError(FzyTmuxError):
    """Raised when the reported exit code is not valid UTF-8 text."""

    pass


class InvalidExitValueError(FzyTmuxError):
    """Raised when the reported exit code is not an integer."""

    pass
