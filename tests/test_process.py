"""Tests for running external commands and collecting their output."""
import io
import os
import sys
import time

import pytest

from package_image.core.process import build_env, collect_output, run_command
from package_image.exceptions import CommandStartError, ExitStatusError, StreamError


class SlowSink(io.StringIO):
    """Sink that takes its time for every write."""

    def write(self, text):
        time.sleep(0.001)
        return super().write(text)


class FailingSink(io.StringIO):
    """Sink that rejects every write."""

    def write(self, text):
        raise IOError("disk full")


def python(script):
    return sys.executable, ["-c", script]


def test_run_command_keeps_line_order_per_stream():
    """
    Test interleaved output on both streams while stdout is read slowly.
    Expected: every line arrives in its sink, in the order it was written.
    """
    # Arrange - child writes far more than a pipe buffer to stderr
    exe, args = python(
        "import sys\n"
        "for i in range(2000):\n"
        "    print(f'out {i}', flush=True)\n"
        "    print(f'err {i} ' + 'x' * 100, file=sys.stderr, flush=True)\n"
    )
    stdout, stderr = SlowSink(), io.StringIO()

    # Act - run child
    run_command(exe, args, stdout=stdout, stderr=stderr)

    # Assert - complete and ordered
    assert stdout.getvalue().splitlines() == [f"out {i}" for i in range(2000)]
    assert stderr.getvalue().splitlines() == [f"err {i} " + "x" * 100 for i in range(2000)]


def test_run_command_normalizes_line_endings():
    """
    Test CRLF, empty lines and a missing final newline.
    Expected: one trailing newline per line, empty lines kept.
    """
    # Arrange - raw bytes on stdout
    exe, args = python("import sys; sys.stdout.buffer.write(b'a\\r\\n\\nb')")
    stdout = io.StringIO()

    # Act - run child
    run_command(exe, args, stdout=stdout, stderr=io.StringIO())

    # Assert - normalized
    assert stdout.getvalue() == "a\n\nb\n"


def test_run_command_nonzero_exit():
    """
    Test a child exiting with status 3.
    Expected: ExitStatusError with the status, output still collected.
    """
    # Arrange - failing child
    exe, args = python("import sys; print('about to fail'); sys.exit(3)")
    stdout = io.StringIO()

    # Act & Assert - error carries the status
    with pytest.raises(ExitStatusError) as excinfo:
        run_command(exe, args, stdout=stdout, stderr=io.StringIO())
    assert excinfo.value.returncode == 3
    assert "exit status 3" in str(excinfo.value)
    assert stdout.getvalue() == "about to fail\n"


def test_run_command_reports_both_failing_streams():
    """
    Test both sinks failing.
    Expected: StreamError listing stdout and stderr.
    """
    # Arrange - child writes to both streams
    exe, args = python("import sys; print('o'); print('e', file=sys.stderr)")

    # Act & Assert - both failures reported
    with pytest.raises(StreamError) as excinfo:
        run_command(exe, args, stdout=FailingSink(), stderr=FailingSink())
    assert set(excinfo.value.errors) == {"stdout", "stderr"}
    assert "scan stdout" in str(excinfo.value)
    assert "scan stderr" in str(excinfo.value)


def test_run_command_reports_only_failing_stream():
    """
    Test only the stdout sink failing.
    Expected: StreamError lists stdout only, stderr still fully collected.
    """
    # Arrange - child writes to both streams
    exe, args = python("import sys; print('o'); print('e1', file=sys.stderr); print('e2', file=sys.stderr)")
    stderr = io.StringIO()

    # Act & Assert - only stdout reported
    with pytest.raises(StreamError) as excinfo:
        run_command(exe, args, stdout=FailingSink(), stderr=stderr)
    assert set(excinfo.value.errors) == {"stdout"}
    assert stderr.getvalue() == "e1\ne2\n"


def test_run_command_layers_env_over_inherited(monkeypatch):
    """
    Test extra environment entries.
    Expected: child sees the extra entry and the inherited ones.
    """
    # Arrange - inherited and extra variable
    monkeypatch.setenv("PKG_TEST_INHERITED", "parent")
    exe, args = python("import os; print(os.environ['PKG_TEST_INHERITED'], os.environ['PKG_TEST_EXTRA'])")
    stdout = io.StringIO()

    # Act - run with KEY=VALUE entries
    run_command(exe, args, env=["PKG_TEST_EXTRA=child"], stdout=stdout, stderr=io.StringIO())

    # Assert - both visible
    assert stdout.getvalue() == "parent child\n"


def test_run_command_uses_working_directory(tmp_path):
    """
    Test running in a given directory.
    Expected: child reports that directory as its cwd.
    """
    # Arrange - child prints its cwd
    exe, args = python("import os; print(os.getcwd())")
    stdout = io.StringIO()

    # Act - run in tmp_path
    run_command(exe, args, cwd=tmp_path, stdout=stdout, stderr=io.StringIO())

    # Assert - same directory
    assert os.path.realpath(stdout.getvalue().strip()) == os.path.realpath(tmp_path)


def test_run_command_missing_executable():
    """
    Test an executable that does not exist.
    Expected: CommandStartError naming the executable.
    """
    # Arrange - no setup needed

    # Act & Assert - start failure
    with pytest.raises(CommandStartError, match="start no-such-tool-7f3a"):
        run_command("no-such-tool-7f3a", ["--version"])


def test_collect_output_from_plain_pipes():
    """
    Test collecting from in-memory pipes.
    Expected: lines copied, pipes closed afterwards.
    """
    # Arrange - byte pipes
    out_pipe, err_pipe = io.BytesIO(b"x\ny\n"), io.BytesIO(b"")
    stdout, stderr = io.StringIO(), io.StringIO()

    # Act - collect
    collect_output(out_pipe, err_pipe, stdout, stderr)

    # Assert - copied and closed
    assert stdout.getvalue() == "x\ny\n"
    assert stderr.getvalue() == ""
    assert out_pipe.closed and err_pipe.closed


def test_build_env_rejects_malformed_entries():
    """
    Test an environment entry without '='.
    Expected: ValueError.
    """
    # Arrange - no setup needed

    # Act & Assert - rejected
    with pytest.raises(ValueError, match="KEY=VALUE"):
        build_env(["NOT_AN_ENTRY"])
