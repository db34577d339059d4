"""Drive one picker session from environment lookup to exit status.

Lifecycle: Init -> EnvironmentResolved -> RendezvousCreated ->
PaneLaunched -> RelayActive -> ExitCodeReceived -> Terminated(code).
"""

import logging
import os
import signal
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import BinaryIO

from fzy_tmux.launcher import launch_pane
from fzy_tmux.models import PickerConfig
from fzy_tmux.relay import copy_output, open_input_pipe, start_input_forwarder
from fzy_tmux.rendezvous import rendezvous
from fzy_tmux.session import read_session_token
from fzy_tmux.status import read_exit_status

log = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_exit(signum, _frame):
    raise SystemExit(128 + signum)


@contextmanager
def _exit_on_termination() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into SystemExit so cleanup handlers run."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {signum: signal.signal(signum, _raise_exit) for signum in TERMINATION_SIGNALS}
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def run(
    args: Sequence[str],
    environ: Mapping[str, str],
    stdin_fd: int | None,
    stdout: BinaryIO,
    config: PickerConfig,
) -> int:
    """Run the picker in a new pane and return its reported exit code.

    ``stdin_fd`` is forwarded to the picker from a background thread that
    is left running if the picker stops reading; without one the picker
    sees end of input right away. The picker's combined output is written
    to ``stdout``. The FIFO directory is gone by the time this returns or
    raises.
    """
    token = read_session_token(environ, config.session_variable)
    log.debug("state=EnvironmentResolved token=%s", token)

    with _exit_on_termination(), rendezvous() as fifos:
        log.debug("state=RendezvousCreated dir=%s", fifos.directory)

        pane = launch_pane(fifos, token, args, config)
        log.debug("state=PaneLaunched pid=%d", pane.pid)

        fifo_in = open_input_pipe(fifos.input)
        if stdin_fd is None:
            log.debug("no standard input to forward")
            os.close(fifo_in)
        else:
            start_input_forwarder(stdin_fd, fifo_in)
        log.debug("state=RelayActive")
        copy_output(fifos.output, stdout)

        code = read_exit_status(fifos.status)
        log.debug("state=ExitCodeReceived code=%d", code)

        # The pane shell has written ret, so the tmux client is done too.
        pane.wait()

    return code
