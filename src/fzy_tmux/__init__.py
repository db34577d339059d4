"""Run a fuzzy picker in a new tmux pane and relay its I/O through FIFOs."""

__version__ = "0.1.0"
