"""Script pipeline: resolve, stage, build, clean up, execute.

Each run walks ``RESOLVING -> STAGING -> BUILDING -> CLEANING_UP ->
EXECUTING -> DONE`` and stops at the first failing stage. The outcome is
always a :class:`RunResult`; nothing is raised and the process is never
exited from here (see :mod:`scriptify.entry` for that).

Two failure classes never mix: ``RunResult.error`` is set only when the
pipeline itself failed, while a built program that exits non-zero is
reported through ``RunResult.exit_code`` with ``error`` left as ``None``.

Runs are not locked. Two runs with the same identity share a binary path
and generated source names and may overwrite each other's staged files.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import IO, Any

from scriptify import fs
from scriptify.compiler import Compiler, GoCompiler
from scriptify.errors import FilesystemError, ScriptifyError
from scriptify.observability import StructuredLogger
from scriptify.options import ScriptOptions
from scriptify.process import execute
from scriptify.resolve import find_first_existing, find_first_existing_or_directory
from scriptify.staging import (
    BuildTarget,
    ScriptPath,
    clean_scripts,
    compute_build_target,
    copy_scripts,
    plan_many,
)

Executor = Callable[[Path, Sequence[str], IO[Any] | None, IO[Any] | None, IO[Any] | None], int]


class RunStage(StrEnum):
    RESOLVING = "resolving"
    STAGING = "staging"
    BUILDING = "building"
    CLEANING_UP = "cleaning_up"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class BuildSuccess:
    binary_path: Path


@dataclass(frozen=True, slots=True)
class BuildFailure:
    """``exit_code`` mirrors the compiler's status, or 0 for non-compiler failures."""

    exit_code: int
    message: str
    error: ScriptifyError


BuildOutcome = BuildSuccess | BuildFailure


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    exit_code: int
    error: ScriptifyError | None = None


@dataclass(frozen=True, slots=True)
class RunResult:
    exit_code: int
    error: ScriptifyError | None = None
    stage: RunStage = RunStage.DONE
    failed_stage: RunStage | None = None
    binary_path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error is not None else None


class _StageFailed(Exception):
    def __init__(self, stage: RunStage, error: ScriptifyError) -> None:
        super().__init__(str(error))
        self.stage = stage
        self.error = error


@dataclass(slots=True)
class Orchestrator:
    compiler: Compiler = field(default_factory=GoCompiler)
    executor: Executor = execute
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run_scripts(
        self,
        scripts: Sequence[str | Path],
        args: Sequence[str],
        options: ScriptOptions,
    ) -> RunResult:
        """Copy, compile, and run the given script sources."""
        return self._run(
            lambda: ([self._anchor(s, options) for s in scripts], False),
            args,
            options,
        )

    def run_directory(
        self,
        directory: str | Path,
        args: Sequence[str],
        options: ScriptOptions,
    ) -> RunResult:
        """Compile the package in *directory* in place and run it."""
        return self._run(
            lambda: ([self._anchor(directory, options)], True),
            args,
            options,
        )

    def run_first_found(
        self,
        candidates: Sequence[str | Path],
        args: Sequence[str],
        options: ScriptOptions,
    ) -> RunResult:
        """Run the first candidate script that exists."""

        def resolve() -> tuple[list[Path], bool]:
            found = find_first_existing([self._anchor(c, options) for c in candidates])
            return [found], False

        return self._run(resolve, args, options)

    def run_first_found_or_directory(
        self,
        candidates: Sequence[str | Path],
        args: Sequence[str],
        options: ScriptOptions,
        *,
        use_directory: bool,
    ) -> RunResult:
        """Run the first candidate script or directory that exists.

        With *use_directory*, a candidate file inside a subdirectory builds
        its whole directory, so ``tool/tool.go`` behaves like ``go build``
        run inside ``tool/``.
        """

        def resolve() -> tuple[list[Path], bool]:
            found, is_dir = find_first_existing_or_directory(
                candidates,
                use_directory=use_directory,
                working_dir=self._working_dir(options),
                extension=self.compiler.extension,
            )
            return [self._anchor(found, options)], is_dir

        return self._run(resolve, args, options)

    def build_scripts(self, target: BuildTarget, scripts: Sequence[ScriptPath]) -> BuildOutcome:
        sources = [script.generated for script in scripts]
        return self._build(lambda: self.compiler.compile(target.binary_path, sources), target)

    def build_directory(self, target: BuildTarget, directory: Path) -> BuildOutcome:
        return self._build(
            lambda: self.compiler.compile_directory(target.binary_path, directory),
            target,
        )

    def _run(
        self,
        resolve: Callable[[], tuple[list[Path], bool]],
        args: Sequence[str],
        options: ScriptOptions,
    ) -> RunResult:
        script_name: str | None = None
        binary_path: Path | None = None
        try:
            with self._stage(RunStage.RESOLVING, script_name):
                sources, is_directory = resolve()
            script_name = ", ".join(str(source) for source in sources)

            with self._stage(RunStage.STAGING, script_name):
                target = compute_build_target(
                    sources,
                    self._working_dir(options),
                    options.temp_root,
                )
                binary_path = target.binary_path
                fs.ensure_dir(options.temp_root)
                scripts: list[ScriptPath] = []
                if not is_directory:
                    scripts = plan_many(target.hash, sources, extension=self.compiler.extension)
                    copy_scripts(scripts)

            with self._stage(RunStage.BUILDING, script_name):
                if is_directory:
                    outcome = self.build_directory(target, sources[0])
                else:
                    outcome = self.build_scripts(target, scripts)
                if isinstance(outcome, BuildFailure):
                    # Generated sources are left behind after a failed build.
                    raise outcome.error

            with self._stage(RunStage.CLEANING_UP, script_name):
                clean_scripts(scripts)

            with self._stage(RunStage.EXECUTING, script_name):
                execution = self._execute(outcome.binary_path, args, options)
                if execution.error is not None:
                    raise execution.error
        except _StageFailed as failure:
            return RunResult(
                exit_code=0,
                error=failure.error,
                stage=RunStage.FAILED,
                failed_stage=failure.stage,
                binary_path=binary_path,
            )

        self.logger.log(
            operation="run_complete",
            stage=RunStage.DONE.value,
            script=script_name,
            message="Script finished.",
            extra={"exit_code": execution.exit_code},
        )
        return RunResult(exit_code=execution.exit_code, binary_path=binary_path)

    def _build(self, compile_: Callable[[], None], target: BuildTarget) -> BuildOutcome:
        try:
            compile_()
        except ScriptifyError as exc:
            return BuildFailure(
                exit_code=exc.exit_code,
                message=exc.message,
                error=exc,
            )
        except OSError as exc:
            error = _filesystem_error(exc, operation="compile")
            return BuildFailure(exit_code=0, message=error.message, error=error)
        return BuildSuccess(binary_path=target.binary_path)

    def _execute(
        self,
        binary_path: Path,
        args: Sequence[str],
        options: ScriptOptions,
    ) -> ExecutionOutcome:
        try:
            exit_code = self.executor(
                binary_path,
                list(args),
                options.stdin,
                options.stdout,
                options.stderr,
            )
        except ScriptifyError as exc:
            return ExecutionOutcome(exit_code=0, error=exc)
        return ExecutionOutcome(exit_code=exit_code)

    @contextmanager
    def _stage(self, stage: RunStage, script: str | None) -> Iterator[None]:
        self.logger.log(
            operation="stage_start",
            stage=stage.value,
            script=script,
            message=f"Entering {stage.value}.",
        )
        try:
            yield
        except ScriptifyError as exc:
            self._log_failure(stage, script, exc)
            raise _StageFailed(stage, exc) from exc
        except OSError as exc:
            error = _filesystem_error(exc, operation=stage.value)
            self._log_failure(stage, script, error)
            raise _StageFailed(stage, error) from exc
        self.logger.log(
            operation="stage_complete",
            stage=stage.value,
            script=script,
            message=f"Completed {stage.value}.",
        )

    def _log_failure(self, stage: RunStage, script: str | None, error: ScriptifyError) -> None:
        self.logger.log(
            operation="stage_failed",
            stage=stage.value,
            script=script,
            message=error.message,
            level="error",
            extra={"code": error.code},
        )

    def _working_dir(self, options: ScriptOptions) -> Path:
        if options.working_dir is not None:
            return Path(options.working_dir)
        return Path.cwd()

    def _anchor(self, path: str | Path, options: ScriptOptions) -> Path:
        # Relative paths stay relative to the process cwd unless a working dir is set.
        if options.working_dir is None:
            return Path(path)
        return Path(options.working_dir) / path


def _filesystem_error(exc: OSError, *, operation: str) -> FilesystemError:
    return FilesystemError(
        exc.strerror or str(exc),
        context={
            "operation": operation,
            "path": str(exc.filename) if exc.filename is not None else "",
        },
    )
