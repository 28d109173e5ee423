"""Compile collaborator: turns staged sources into a binary via ``go build``."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from scriptify.errors import CompileError, FilesystemError, ValidationError
from scriptify.resolve import has_extension


class Compiler(Protocol):
    extension: str

    def compile(self, output: Path, sources: Sequence[Path]) -> None:
        """Build *sources* into the binary at *output*."""

    def compile_directory(self, output: Path, directory: Path) -> None:
        """Build the package in *directory* into the binary at *output*."""


@dataclass(slots=True)
class GoCompiler:
    tool: str = "go"
    flags: tuple[str, ...] = ()
    extension: str = ".go"

    def compile(self, output: Path, sources: Sequence[Path]) -> None:
        # go build reports vague errors for odd file names, so check first.
        for source in sources:
            if not has_extension(source, self.extension):
                raise ValidationError(
                    "source must have go extension",
                    hint=f"Stage the script as a {self.extension} file before building.",
                    context={"operation": "compile", "source": str(source)},
                )
        command = (self.tool, "build", *self.flags, "-o", str(output), *(str(s) for s in sources))
        self._run(command, cwd=None)

    def compile_directory(self, output: Path, directory: Path) -> None:
        if not Path(directory).is_dir():
            raise ValidationError(
                "Directory build requires an existing directory.",
                context={"operation": "compile_directory", "directory": str(directory)},
            )
        # The build runs inside the directory, so the output must be absolute.
        command = (self.tool, "build", *self.flags, "-o", os.path.abspath(output), ".")
        self._run(command, cwd=Path(directory))

    def _run(self, command: tuple[str, ...], *, cwd: Path | None) -> None:
        if shutil.which(self.tool) is None:
            raise FilesystemError(
                f"Build tool `{self.tool}` was not found in PATH.",
                hint="Install the Go toolchain and ensure it is available before running scripts.",
                context={"operation": "compile", "tool": self.tool},
            )
        try:
            result = subprocess.run(
                list(command),
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise FilesystemError(
                "Unable to start the build tool.",
                context={"operation": "compile", "command": " ".join(command), "error": str(exc)},
            ) from exc

        if result.returncode != 0:
            raise CompileError(
                result.stderr,
                exit_code=result.returncode,
                context={"operation": "compile", "command": " ".join(command)},
            )
