"""Shared test fixtures."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from _support import ShellCompiler

from scriptify.observability import StructuredLogger
from scriptify.options import ScriptOptions
from scriptify.orchestrator import Orchestrator


@pytest.fixture
def shell_compiler() -> ShellCompiler:
    return ShellCompiler()


@pytest.fixture
def orchestrator(shell_compiler: ShellCompiler) -> Orchestrator:
    """Pipeline wired to the shell stand-in compiler and a fresh logger."""
    return Orchestrator(compiler=shell_compiler, logger=StructuredLogger())


@pytest.fixture
def options(tmp_path: Path) -> ScriptOptions:
    return ScriptOptions(
        temp_root=tmp_path / "bin",
        stdin=None,
        stdout=io.BytesIO(),
        stderr=io.BytesIO(),
        working_dir=tmp_path,
    )
