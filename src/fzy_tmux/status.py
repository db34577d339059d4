"""Read the picker's exit status reported through the ``ret`` FIFO."""

import logging
import re
from pathlib import Path

from fzy_tmux.errors import FzyTmuxError, InvalidExitEncodingError, InvalidExitValueError

log = logging.getLogger(__name__)

EXIT_STATUS_RE = re.compile(r"[+-]?[0-9]+")
EXIT_STATUS_MIN = -(2**31)
EXIT_STATUS_MAX = 2**31 - 1


def parse_exit_status(data: bytes) -> int:
    """Decode the raw ``ret`` contents into an exit code."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidExitEncodingError(
            f"failed to parse reported exit code: invalid string {data!r}"
        ) from e

    value = text.rstrip()
    if not EXIT_STATUS_RE.fullmatch(value):
        raise InvalidExitValueError(f"failed to parse reported exit code: {value!r}")
    code = int(value)
    if not EXIT_STATUS_MIN <= code <= EXIT_STATUS_MAX:
        raise InvalidExitValueError(f"reported exit code out of range: {value!r}")
    return code


def read_exit_status(path: Path) -> int:
    """Block until the pane writes ``ret``, then return the parsed code."""
    try:
        with open(path, "rb") as fifo:
            data = fifo.read()
    except OSError as e:
        raise FzyTmuxError(f"failed to read from exit code FIFO `{path}`: {e}") from e
    log.debug("ret=%r", data)
    return parse_exit_status(data)
