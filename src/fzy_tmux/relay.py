"""Copy bytes between the driver's standard streams and the FIFOs.

Opening a FIFO blocks until the other side opens it too. The pane's shell
opens ``in`` before ``out``, so the driver must follow the same order.
"""

import logging
import os
import threading
from pathlib import Path
from typing import BinaryIO

from fzy_tmux.errors import RelayReadError, RelayWriteError

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def open_input_pipe(path: Path) -> int:
    """Open the ``in`` FIFO for writing, blocking until the pane reads it."""
    try:
        return os.open(path, os.O_WRONLY)
    except OSError as e:
        raise RelayWriteError(f"failed to open stdin FIFO `{path}`: {e}") from e


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def forward_input(stdin_fd: int, fifo_fd: int) -> None:
    """Copy ``stdin_fd`` into ``fifo_fd`` until end of input.

    Errors are logged rather than raised: the picker may legitimately stop
    reading early, and that must not keep its output from being relayed.
    ``fifo_fd`` is closed on return so the picker sees end of input.
    """
    try:
        while True:
            chunk = os.read(stdin_fd, CHUNK_SIZE)
            if not chunk:
                break
            _write_all(fifo_fd, chunk)
    except OSError as e:
        log.warning("%s", RelayWriteError(f"failed to pipe standard input: {e}"))
    finally:
        os.close(fifo_fd)


def start_input_forwarder(stdin_fd: int, fifo_fd: int) -> threading.Thread:
    """Run forward_input on a daemon thread that is never joined."""
    thread = threading.Thread(
        target=forward_input,
        args=(stdin_fd, fifo_fd),
        name="fzy-tmux-stdin",
        daemon=True,
    )
    thread.start()
    return thread


def copy_output(path: Path, stdout: BinaryIO) -> int:
    """Copy the ``out`` FIFO to ``stdout`` until the picker closes it."""
    try:
        fifo = open(path, "rb", buffering=0)
    except OSError as e:
        raise RelayReadError(f"failed to open stdout FIFO `{path}`: {e}") from e

    total = 0
    with fifo:
        try:
            while True:
                chunk = fifo.read(CHUNK_SIZE)
                if not chunk:
                    break
                stdout.write(chunk)
                total += len(chunk)
            stdout.flush()
        except OSError as e:
            raise RelayReadError(f"failed to copy standard output: {e}") from e
    log.debug("relayed %d bytes of output", total)
    return total
