"""Model package for fzy-tmux."""

from fzy_tmux.models.picker_config import (
    DEFAULT_LINES,
    DEFAULT_MULTIPLEXER,
    DEFAULT_PICKER,
    DEFAULT_SESSION_VARIABLE,
    PickerConfig,
)
from fzy_tmux.models.rendezvous import Rendezvous

__all__ = [
    "DEFAULT_LINES",
    "DEFAULT_MULTIPLEXER",
    "DEFAULT_PICKER",
    "DEFAULT_SESSION_VARIABLE",
    "PickerConfig",
    "Rendezvous",
]
