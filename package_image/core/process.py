"""Run external commands, streaming their output line by line.

Both output pipes of the child are drained concurrently and completely
before the exit status is awaited. Waiting first would let a child with
a full pipe buffer block forever.
"""

import os
import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import IO, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import CommandStartError, ExitStatusError, StreamError

EnvSpec = Union[Mapping[str, str], Sequence[str], None]


def _split_env_entry(entry: str) -> Tuple[str, str]:
    key, sep, value = entry.partition("=")
    if not sep or not key:
        raise ValueError(f"invalid environment entry {entry!r}, want KEY=VALUE")
    return key, value


def build_env(env: EnvSpec = None) -> Dict[str, str]:
    """Layer ``env`` on top of the inherited environment.

    Args:
        env: Mapping or ``KEY=VALUE`` strings; later entries win.

    Returns:
        Complete environment for the child process.
    """
    merged = dict(os.environ)
    if env is None:
        return merged
    items = env.items() if isinstance(env, Mapping) else (_split_env_entry(e) for e in env)
    for key, value in items:
        merged[key] = value
    return merged


def scan(pipe: IO[bytes], sink: IO[str]) -> None:
    """Copy ``pipe`` to ``sink`` one line at a time until end of stream."""
    for raw in iter(pipe.readline, b""):
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        sink.write(raw.decode("utf-8", errors="replace") + "\n")
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()


def _drain(pipe: IO[bytes], sink: IO[str]) -> None:
    try:
        scan(pipe, sink)
    finally:
        pipe.close()


def collect_output(
    stdout_pipe: IO[bytes],
    stderr_pipe: IO[bytes],
    stdout_sink: IO[str],
    stderr_sink: IO[str],
    command: Sequence[str] = ("<command>",),
) -> None:
    """Drain both pipes in parallel into their sinks.

    Blocks until both readers are finished, even if one of them fails
    early. Each reader owns its pipe and sink, so nothing is shared.

    Raises:
        StreamError: One or both streams failed; only failing streams
            are listed.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="collect-output") as pool:
        futures = {
            "stdout": pool.submit(_drain, stdout_pipe, stdout_sink),
            "stderr": pool.submit(_drain, stderr_pipe, stderr_sink),
        }
        wait(futures.values())

    errors = {
        name: future.exception()
        for name, future in futures.items()
        if future.exception() is not None
    }
    if errors:
        raise StreamError(command, errors)


def run_command(
    executable: str,
    args: Sequence[str] = (),
    *,
    env: EnvSpec = None,
    cwd: Optional[Union[str, Path]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> None:
    """Run ``executable`` with ``args`` and stream its output.

    Arguments are passed verbatim, never through a shell.

    Args:
        executable: Program name on PATH or absolute path.
        args: Arguments for the program.
        env: Extra environment entries layered over ``os.environ``.
        cwd: Working directory; inherited when empty.
        stdout: Sink for standard output lines (default ``sys.stdout``).
        stderr: Sink for standard error lines (default ``sys.stderr``).

    Raises:
        CommandStartError: The process could not be started.
        StreamError: Reading the output failed.
        ExitStatusError: The process exited with a non-zero status.
    """
    command = [executable, *args]
    stdout_sink = sys.stdout if stdout is None else stdout
    stderr_sink = sys.stderr if stderr is None else stderr

    try:
        process = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=build_env(env),
            cwd=str(cwd) if cwd else None,
        )
    except OSError as exc:
        raise CommandStartError(command, exc) from exc

    try:
        collect_output(process.stdout, process.stderr, stdout_sink, stderr_sink, command)
    except StreamError:
        # Nobody reads the pipes anymore, so the child could block forever.
        if process.poll() is None:
            process.kill()
        process.wait()
        raise

    returncode = process.wait()
    if returncode != 0:
        raise ExitStatusError(command, returncode)
