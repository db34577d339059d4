"""Tests for fzy_tmux.driver.

The end-to-end tests swap tmux for a shell script that runs the
split-window command directly, so the FIFO protocol is exercised for real.
"""

import io
import os
import signal
import tempfile
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import fzy_tmux.driver
from fzy_tmux.driver import _exit_on_termination, _raise_exit, run
from fzy_tmux.errors import (
    InvalidExitValueError,
    LauncherSpawnError,
    MissingEnvironmentError,
)
from fzy_tmux.models import PickerConfig
from fzy_tmux.rendezvous import rendezvous

pytestmark = pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires named pipes")

TMUX = "/tmp/tmux-1000/default,22830,9"


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return path


def _fake_tmux(tmp_path: Path) -> tuple[Path, Path]:
    """Return (script, log); the script records $TMUX and runs the last arg."""
    log = tmp_path / "tmux.log"
    script = _write_script(
        tmp_path / "tmux",
        f"printf '%s\\n' \"$TMUX\" > '{log}'\n"
        "for arg; do last=$arg; done\n"
        'exec /bin/sh -c "$last"\n',
    )
    return script, log


def _stdin_with(tmp_path: Path, data: bytes) -> int:
    path = tmp_path / "stdin"
    path.write_bytes(data)
    return os.open(path, os.O_RDONLY)


def _join_forwarder() -> None:
    for thread in threading.enumerate():
        if thread.name == "fzy-tmux-stdin":
            thread.join(timeout=5)


@pytest.fixture
def tmp_root(tmp_path, monkeypatch):
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


def _run(tmp_path, picker_body: str, stdin: bytes = b"", args=()) -> tuple[int, bytes, Path]:
    tmux, log = _fake_tmux(tmp_path)
    picker = _write_script(tmp_path / "picker", picker_body)
    config = PickerConfig(picker=str(picker), multiplexer=str(tmux))
    stdin_fd = _stdin_with(tmp_path, stdin)
    stdout = io.BytesIO()
    try:
        code = run(list(args), {"TMUX": TMUX}, stdin_fd, stdout, config)
    finally:
        _join_forwarder()
        os.close(stdin_fd)
    return code, stdout.getvalue(), log


class TestEndToEnd:
    def test_relays_input_and_output(self, tmp_path, tmp_root):
        code, out, _ = _run(tmp_path, 'read line\necho "got: $line"\n', stdin=b"hello\n")
        assert code == 0
        assert out == b"got: hello\n"

    def test_failing_picker_reports_one(self, tmp_path, tmp_root):
        code, out, _ = _run(tmp_path, "exit 1\n")
        assert code == 1
        assert out == b""

    def test_exit_code_collapses_to_one(self, tmp_path, tmp_root):
        code, _, _ = _run(tmp_path, "exit 130\n")
        assert code == 1

    def test_stderr_is_relayed_with_stdout(self, tmp_path, tmp_root):
        code, out, _ = _run(tmp_path, "echo out\necho err >&2\n")
        assert code == 0
        assert out == b"out\nerr\n"

    def test_forwards_arguments_to_picker(self, tmp_path, tmp_root):
        code, out, _ = _run(tmp_path, 'echo "$@"\n', args=["--query", "foo bar"])
        assert code == 0
        assert out == b"--lines 50 --query foo bar\n"

    def test_tmux_receives_filtered_token(self, tmp_path, tmp_root):
        _, _, log = _run(tmp_path, "true\n")
        assert log.read_text() == "/tmp/tmux-1000/default,22830\n"

    def test_picker_ignoring_input_does_not_block(self, tmp_path, tmp_root):
        code, out, _ = _run(tmp_path, "echo done\n", stdin=b"x" * 200_000)
        assert code == 0
        assert out == b"done\n"

    def test_rendezvous_removed_after_run(self, tmp_path, tmp_root):
        _run(tmp_path, "true\n")
        assert list(tmp_root.iterdir()) == []

    def test_closed_stdin_gives_picker_end_of_input(self, tmp_path, tmp_root):
        tmux, _ = _fake_tmux(tmp_path)
        picker = _write_script(
            tmp_path / "picker", 'if read line; then echo "got: $line"; else echo eof; fi\n'
        )
        config = PickerConfig(picker=str(picker), multiplexer=str(tmux))
        stdout = io.BytesIO()

        code = run([], {"TMUX": TMUX}, None, stdout, config)

        assert code == 0
        assert stdout.getvalue() == b"eof\n"
        assert list(tmp_root.iterdir()) == []

    def test_tmux_client_is_reaped(self, tmp_path, tmp_root, monkeypatch):
        launched = []
        real_launch = fzy_tmux.driver.launch_pane

        def recording_launch(*args, **kwargs):
            pane = real_launch(*args, **kwargs)
            launched.append(pane)
            return pane

        monkeypatch.setattr("fzy_tmux.driver.launch_pane", recording_launch)
        _run(tmp_path, "true\n")

        assert len(launched) == 1
        assert launched[0].returncode == 0


class TestFailures:
    def test_missing_tmux_variable(self, tmp_root):
        with pytest.raises(MissingEnvironmentError):
            run([], {}, 0, io.BytesIO(), PickerConfig())
        assert list(tmp_root.iterdir()) == []

    def test_unavailable_multiplexer(self, tmp_path, tmp_root):
        config = PickerConfig(multiplexer=str(tmp_path / "no-such-tmux"))
        with pytest.raises(LauncherSpawnError):
            run([], {"TMUX": TMUX}, 0, io.BytesIO(), config)
        assert list(tmp_root.iterdir()) == []

    def test_malformed_exit_status(self, tmp_path, tmp_root, monkeypatch):
        def fake_launch(fifos, token, args, config):
            def pane():
                with open(fifos.input, "rb"), open(fifos.output, "wb") as out:
                    out.write(b"partial\n")
                with open(fifos.status, "wb") as ret:
                    ret.write(b"abc")

            threading.Thread(target=pane, daemon=True).start()
            return MagicMock(pid=4242)

        monkeypatch.setattr("fzy_tmux.driver.launch_pane", fake_launch)
        stdin_fd = _stdin_with(tmp_path, b"")
        stdout = io.BytesIO()
        try:
            with pytest.raises(InvalidExitValueError, match="'abc'"):
                run([], {"TMUX": TMUX}, stdin_fd, stdout, PickerConfig())
        finally:
            _join_forwarder()
            os.close(stdin_fd)
        assert stdout.getvalue() == b"partial\n"
        assert list(tmp_root.iterdir()) == []


class TestTerminationSignals:
    def test_handlers_installed_and_restored(self):
        before = signal.getsignal(signal.SIGTERM)
        with _exit_on_termination():
            assert signal.getsignal(signal.SIGTERM) is _raise_exit
            assert signal.getsignal(signal.SIGHUP) is _raise_exit
        assert signal.getsignal(signal.SIGTERM) == before

    def test_sigterm_removes_rendezvous(self, tmp_root):
        with pytest.raises(SystemExit) as exc_info:
            with _exit_on_termination(), rendezvous():
                signal.raise_signal(signal.SIGTERM)
        assert exc_info.value.code == 128 + signal.SIGTERM
        assert list(tmp_root.iterdir()) == []
