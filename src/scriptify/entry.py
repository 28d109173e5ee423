"""Process-level entry points.

Every ``run_*`` function here reads ``sys.argv[1:]`` as the script's
arguments, wires the process's own standard streams, and **exits the
process** with the script's exit code. Use
:class:`scriptify.orchestrator.Orchestrator` directly to get a result
back instead.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Any, NoReturn

from scriptify.errors import ErrorCode
from scriptify.options import ScriptOptions, default_options
from scriptify.orchestrator import Orchestrator, RunResult


def report(result: RunResult, stderr: IO[Any] | None = None) -> int:
    """Print any pipeline error and return the process exit code.

    A pipeline failure never exits 0: when the run carries no exit code
    of its own, 1 is returned.
    """
    if result.error is None:
        return result.exit_code

    stream = stderr if stderr is not None else sys.stderr
    if result.error.code == ErrorCode.COMPILE.value:
        text = str(result.error)
    else:
        text = f"Fatal: {result.error}"
    if not text.endswith("\n"):
        text += "\n"
    if isinstance(stream, io.TextIOBase):
        stream.write(text)
    else:
        stream.write(text.encode("utf-8"))
    stream.flush()
    return result.exit_code or 1


def exit_with(result: RunResult, stderr: IO[Any] | None = None) -> NoReturn:
    sys.exit(report(result, stderr))


def run_script(
    path: str | Path,
    *,
    args: Sequence[str] | None = None,
    options: ScriptOptions | None = None,
    orchestrator: Orchestrator | None = None,
) -> NoReturn:
    """Copy, compile, and run *path*, then exit the process."""
    opts = options or default_options()
    result = (orchestrator or Orchestrator()).run_scripts([path], _args(args), opts)
    exit_with(result, opts.stderr)


def run_directory(
    path: str | Path,
    *,
    args: Sequence[str] | None = None,
    options: ScriptOptions | None = None,
    orchestrator: Orchestrator | None = None,
) -> NoReturn:
    """Compile and run the package directory *path*, then exit the process."""
    opts = options or default_options()
    result = (orchestrator or Orchestrator()).run_directory(path, _args(args), opts)
    exit_with(result, opts.stderr)


def run_first_found(
    *candidates: str | Path,
    args: Sequence[str] | None = None,
    options: ScriptOptions | None = None,
    orchestrator: Orchestrator | None = None,
) -> NoReturn:
    """Run the first of *candidates* that exists, then exit the process."""
    opts = options or default_options()
    result = (orchestrator or Orchestrator()).run_first_found(candidates, _args(args), opts)
    exit_with(result, opts.stderr)


def run_first_found_or_directory(
    use_directory: bool,
    *candidates: str | Path,
    args: Sequence[str] | None = None,
    options: ScriptOptions | None = None,
    orchestrator: Orchestrator | None = None,
) -> NoReturn:
    """Run the first existing script or directory, then exit the process.

    With *use_directory*, matching ``tool/tool.go`` builds the ``tool``
    directory rather than that single file.
    """
    opts = options or default_options()
    result = (orchestrator or Orchestrator()).run_first_found_or_directory(
        candidates,
        _args(args),
        opts,
        use_directory=use_directory,
    )
    exit_with(result, opts.stderr)


def _args(args: Sequence[str] | None) -> list[str]:
    return list(args) if args is not None else sys.argv[1:]


__all__ = [
    "exit_with",
    "report",
    "run_directory",
    "run_first_found",
    "run_first_found_or_directory",
    "run_script",
]
