"""Public package entrypoint: build and run Go source files as scripts."""

from .compiler import Compiler, GoCompiler
from .entry import (
    exit_with,
    report,
    run_directory,
    run_first_found,
    run_first_found_or_directory,
    run_script,
)
from .errors import (
    CompileError,
    ErrorCode,
    ExecutionError,
    FilesystemError,
    ResolutionError,
    ScriptifyError,
    ValidationError,
)
from .hashing import hash_parts
from .options import ScriptOptions, default_options
from .orchestrator import (
    BuildFailure,
    BuildSuccess,
    ExecutionOutcome,
    Orchestrator,
    RunResult,
    RunStage,
)
from .process import execute
from .resolve import find_first_existing, find_first_existing_or_directory
from .staging import BuildTarget, ScriptPath, compute_build_target, plan_many, plan_single

__all__ = [
    "BuildFailure",
    "BuildSuccess",
    "BuildTarget",
    "CompileError",
    "Compiler",
    "ErrorCode",
    "ExecutionError",
    "ExecutionOutcome",
    "FilesystemError",
    "GoCompiler",
    "Orchestrator",
    "ResolutionError",
    "RunResult",
    "RunStage",
    "ScriptOptions",
    "ScriptPath",
    "ScriptifyError",
    "ValidationError",
    "compute_build_target",
    "default_options",
    "execute",
    "exit_with",
    "find_first_existing",
    "find_first_existing_or_directory",
    "hash_parts",
    "plan_many",
    "plan_single",
    "report",
    "run_directory",
    "run_first_found",
    "run_first_found_or_directory",
    "run_script",
]
