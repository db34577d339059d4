"""Open a tmux split pane running the picker wired to the FIFOs."""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from fzy_tmux.errors import LauncherSpawnError
from fzy_tmux.models import DEFAULT_LINES, DEFAULT_PICKER, PickerConfig, Rendezvous

log = logging.getLogger(__name__)

SUCCESS_MARKER = "0"
FAILURE_MARKER = "1"

# Pane-local options applied before splitting; without remain-on-exit off
# the pane would linger after the picker finishes.
WINDOW_OPTIONS = (
    ("synchronize-panes", "off"),
    ("remain-on-exit", "off"),
)


def _single_quote(path: Path) -> str:
    """Render ``path`` as a single-quoted shell literal."""
    return "'" + str(path).replace("'", "'\"'\"'") + "'"


def build_pane_command(
    fifos: Rendezvous,
    args: Sequence[str] = (),
    picker: str = DEFAULT_PICKER,
    lines: int = DEFAULT_LINES,
) -> str:
    """Return the shell command line executed inside the new pane."""
    invocation = " ".join(
        [shlex.quote(picker), "--lines", str(lines), *(shlex.quote(arg) for arg in args)]
    )
    ret = _single_quote(fifos.status)
    return (
        f"{invocation} < {_single_quote(fifos.input)} > {_single_quote(fifos.output)} 2>&1"
        f" && echo {SUCCESS_MARKER} > {ret} || echo {FAILURE_MARKER} > {ret}"
    )


def build_multiplexer_argv(executable: str, pane_command: str) -> list[str]:
    """Return the tmux argv: option tweaks and split-window in one call."""
    argv = [executable]
    for option, value in WINDOW_OPTIONS:
        argv.extend(["set-window-option", option, value, ";"])
    argv.extend(["split-window", pane_command])
    return argv


def launch_pane(
    fifos: Rendezvous,
    token: str,
    args: Sequence[str],
    config: PickerConfig,
) -> subprocess.Popen:
    """Ask tmux to split the window and run the picker in the new pane.

    The multiplexer runs with an environment holding nothing but the
    session token, and with its own standard streams discarded. It is not
    waited for: the picker's outcome arrives through the ``ret`` FIFO.
    """
    executable = shutil.which(config.multiplexer)
    if executable is None:
        raise LauncherSpawnError(f"failed to execute `{config.multiplexer}` command: not found")

    pane_command = build_pane_command(fifos, args, picker=config.picker, lines=config.lines)
    argv = build_multiplexer_argv(executable, pane_command)
    log.debug("argv=%s", argv)
    try:
        return subprocess.Popen(
            argv,
            env={config.session_variable: token},
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise LauncherSpawnError(f"failed to execute `{config.multiplexer}` command: {e}") from e
