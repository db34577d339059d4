"""Private temporary directory holding the FIFOs shared with the pane."""

import logging
import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fzy_tmux.errors import PipeCreationError, TempDirectoryError
from fzy_tmux.models import Rendezvous

log = logging.getLogger(__name__)

FIFO_MODE = stat.S_IRWXU
DIRECTORY_PREFIX = "fzy-tmux-"


def make_fifo(path: Path, mode: int = FIFO_MODE) -> None:
    """Create a named pipe at ``path`` or raise PipeCreationError."""
    try:
        os.mkfifo(path, mode)
    except OSError as e:
        raise PipeCreationError(path, e.strerror or str(e)) from e


@contextmanager
def rendezvous(prefix: str = DIRECTORY_PREFIX) -> Iterator[Rendezvous]:
    """Create the ``in``/``out``/``ret`` FIFOs and remove them on exit.

    The directory comes from ``tempfile`` (mode 0700, random name) and is
    deleted together with its contents however the block is left.
    Pipes created before a failing one are removed with the directory.
    """
    try:
        tmp = tempfile.TemporaryDirectory(prefix=prefix)
    except OSError as e:
        raise TempDirectoryError(f"failed to create temporary directory: {e}") from e

    with tmp as tmp_dir:
        fifos = Rendezvous.in_directory(Path(tmp_dir))
        for fifo in fifos.paths():
            make_fifo(fifo)
        log.debug("created FIFOs in %s", tmp_dir)
        yield fifos
    log.debug("removed %s", tmp_dir)
