"""Configuration model for fzy-tmux."""

from pydantic import BaseModel, Field

DEFAULT_PICKER = "fzy"
DEFAULT_LINES = 50
DEFAULT_MULTIPLEXER = "tmux"
DEFAULT_SESSION_VARIABLE = "TMUX"


class PickerConfig(BaseModel):
    """Runtime configuration for fzy-tmux."""

    picker: str = Field(default=DEFAULT_PICKER, min_length=1)
    lines: int = Field(default=DEFAULT_LINES, ge=1)
    multiplexer: str = Field(default=DEFAULT_MULTIPLEXER, min_length=1)
    session_variable: str = DEFAULT_SESSION_VARIABLE
    debug: bool = False
