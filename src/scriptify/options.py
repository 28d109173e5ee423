"""Run configuration."""

from __future__ import annotations

import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

DEFAULT_TEMP_ROOT = Path(tempfile.gettempdir()) / "scriptify"


@dataclass(frozen=True, slots=True)
class ScriptOptions:
    temp_root: Path = DEFAULT_TEMP_ROOT
    stdin: IO[Any] | None = None
    stdout: IO[Any] | None = None
    stderr: IO[Any] | None = None
    # None means the process's current directory at run time.
    working_dir: Path | None = None


def default_options(temp_root: str | Path | None = None) -> ScriptOptions:
    """Options wired to this process's standard streams."""
    return ScriptOptions(
        temp_root=Path(temp_root) if temp_root is not None else DEFAULT_TEMP_ROOT,
        stdin=sys.stdin,
        stdout=sys.stdout,
        stderr=sys.stderr,
    )
