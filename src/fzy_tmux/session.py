"""Extract the tmux session identifier forwarded to the picker pane."""

from collections.abc import Mapping

from fzy_tmux.errors import MissingEnvironmentError
from fzy_tmux.models import DEFAULT_SESSION_VARIABLE


def filter_session_token(value: str) -> str:
    """Keep only the first two comma-separated fields of a TMUX value.

    The variable looks like ``<socket>,<server pid>,<session index>``. The
    trailing field identifies the current client and must not be handed
    to the new pane, or tmux resolves the wrong session.
    """
    fields = value.split(",", 2)
    return ",".join(fields[:2])


def read_session_token(
    environ: Mapping[str, str], variable: str = DEFAULT_SESSION_VARIABLE
) -> str:
    """Return the sanitized session token from the environment."""
    raw = environ.get(variable)
    if raw is None:
        raise MissingEnvironmentError(variable)
    return filter_session_token(raw)
