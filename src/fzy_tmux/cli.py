"""Command-line interface for fzy-tmux.

All arguments are handed to the picker untouched; the driver itself is
configured through FZY_TMUX_* environment variables only.
"""

import logging
import os
import sys

from fzy_tmux.config import load_config
from fzy_tmux.driver import run
from fzy_tmux.errors import FzyTmuxError, RelayReadError

log = logging.getLogger("fzy_tmux")

FATAL_EXIT_CODE = 2
INTERRUPTED_EXIT_CODE = 130


def _stdin_fd() -> int | None:
    """Return the fd behind sys.stdin, or None when there is no usable one."""
    if sys.stdin is None:
        return None
    try:
        return sys.stdin.fileno()
    except (OSError, ValueError):
        return None


def _stdout_buffer():
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        raise RelayReadError("standard output is not available")
    return buffer


def main(argv: list[str] | None = None) -> int:
    """Run the picker in a tmux pane and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config()
        logging.basicConfig(
            level=logging.DEBUG if config.debug else logging.WARNING,
            format="%(name)s %(levelname)s: %(message)s",
        )
        log.debug("args=%r", args)
        stdout = _stdout_buffer()
        stdin_fd = _stdin_fd()
        if stdin_fd is None:
            log.debug("standard input is closed")
        return run(args, os.environ, stdin_fd, stdout, config)
    except FzyTmuxError as e:
        print(f"fzy-tmux: error: {e}", file=sys.stderr)
        return FATAL_EXIT_CODE
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
