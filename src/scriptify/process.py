"""Execute collaborator: run a built binary with forwarded streams.

Streams backed by a real file descriptor are handed to the child as-is.
In-memory streams (``io.BytesIO``, ``io.StringIO``) are fed and collected
through pipes; bytes are written unmodified, text streams receive UTF-8.
Piped output is written back after the child exits, stdout first, so when
stdout and stderr are the same in-memory object their interleaving is lost.
A ``None`` stream is connected to the null device.
"""

from __future__ import annotations

import io
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Any

from scriptify import fs
from scriptify.errors import ExecutionError


def execute(
    binary: str | Path,
    args: Sequence[str] = (),
    stdin: IO[Any] | None = None,
    stdout: IO[Any] | None = None,
    stderr: IO[Any] | None = None,
) -> int:
    """Run *binary* with *args* and return its exit status.

    The child's own non-zero exit is a return value, not an error.
    :class:`ExecutionError` means there was nothing to run, it could not
    be started, or it left no exit status.
    """
    found, is_dir = fs.exists(binary)
    if not found or is_dir:
        raise ExecutionError(
            "Binary to execute was not found.",
            hint="The build output may have been removed after building.",
            context={"operation": "execute", "binary": str(binary)},
        )

    stdin_target, stdin_data = _source(stdin)
    stdout_target = _sink(stdout)
    stderr_target = _sink(stderr)
    command = [os.path.abspath(binary), *args]
    try:
        process = subprocess.Popen(
            command,
            stdin=stdin_target,
            stdout=stdout_target,
            stderr=stderr_target,
        )
    except OSError as exc:
        raise ExecutionError(
            "Unable to start binary.",
            context={"operation": "execute", "binary": str(binary), "error": str(exc)},
        ) from exc

    out, err = process.communicate(stdin_data)
    if stdout_target == subprocess.PIPE:
        _write(stdout, out)
    if stderr_target == subprocess.PIPE:
        _write(stderr, err)

    returncode = process.returncode
    if returncode is None or returncode < 0:
        raise ExecutionError(
            "Binary terminated without an exit status.",
            hint="The process was killed by a signal.",
            context={
                "operation": "execute",
                "binary": str(binary),
                "signal": str(-returncode) if returncode is not None else "",
            },
        )
    return returncode


def _fileno(stream: IO[Any]) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _source(stream: IO[Any] | None) -> tuple[int, bytes | None]:
    if stream is None:
        return subprocess.DEVNULL, None
    fd = _fileno(stream)
    if fd is not None:
        return fd, None
    data = stream.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return subprocess.PIPE, data


def _sink(stream: IO[Any] | None) -> int:
    if stream is None:
        return subprocess.DEVNULL
    fd = _fileno(stream)
    if fd is None:
        return subprocess.PIPE
    # Anything already buffered must reach the descriptor before the child writes.
    stream.flush()
    return fd


def _write(stream: IO[Any] | None, data: bytes | None) -> None:
    if stream is None or not data:
        return
    if isinstance(stream, io.TextIOBase):
        stream.write(data.decode("utf-8", errors="replace"))
    else:
        stream.write(data)
    stream.flush()
