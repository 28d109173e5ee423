"""End-to-end runs through ``go build``."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from scriptify.compiler import GoCompiler
from scriptify.errors import CompileError, ErrorCode, ValidationError
from scriptify.options import ScriptOptions
from scriptify.orchestrator import Orchestrator, RunStage


def _options(tmp_path: Path) -> ScriptOptions:
    return ScriptOptions(
        temp_root=tmp_path / "bin",
        stdout=io.BytesIO(),
        stderr=io.BytesIO(),
        working_dir=tmp_path,
    )


def test_go_build_produces_binary(tmp_path: Path, go_fixtures: Path) -> None:
    output = tmp_path / "out" / "exit15"
    output.parent.mkdir()

    GoCompiler().compile(output, [go_fixtures / "exit15.go"])

    assert output.exists()


def test_go_build_rejects_sources_without_extension(tmp_path: Path, go_fixtures: Path) -> None:
    with pytest.raises(ValidationError) as excinfo:
        GoCompiler().compile(tmp_path / "bin", [go_fixtures / "exit15"])

    assert "go" in str(excinfo.value)
    assert "extension" in str(excinfo.value)


def test_go_build_returns_build_error_information(tmp_path: Path, go_fixtures: Path) -> None:
    with pytest.raises(CompileError) as excinfo:
        GoCompiler().compile(tmp_path / "bin", [go_fixtures / "synerr.go"])

    assert excinfo.value.exit_code != 0
    assert "syntax error" in str(excinfo.value)


def test_run_extensionless_go_script(tmp_path: Path, go_fixtures: Path) -> None:
    options = _options(tmp_path)

    result = Orchestrator().run_scripts([go_fixtures / "exit15"], [], options)

    assert (result.exit_code, result.error) == (15, None)
    assert isinstance(options.stdout, io.BytesIO)
    assert isinstance(options.stderr, io.BytesIO)
    assert options.stdout.getvalue() == b"STDOUT: Exiting 15"
    assert options.stderr.getvalue() == b"STDERR: Exiting 15"
    assert sorted(p.name for p in go_fixtures.iterdir()) == [
        "exit15",
        "exit15.go",
        "synerr.go",
        "tool",
    ]


def test_run_syntax_error_reports_compile_error(tmp_path: Path, go_fixtures: Path) -> None:
    result = Orchestrator().run_scripts([go_fixtures / "synerr.go"], [], _options(tmp_path))

    assert result.exit_code == 0
    assert result.error is not None
    assert result.error_code == ErrorCode.COMPILE.value
    assert result.error.exit_code != 0
    assert "syntax error" in result.error.message
    assert result.failed_stage == RunStage.BUILDING


def test_rerun_reuses_binary_path(tmp_path: Path, go_fixtures: Path) -> None:
    orchestrator = Orchestrator()

    first = orchestrator.run_scripts([go_fixtures / "exit15.go"], [], _options(tmp_path))
    second = orchestrator.run_scripts([go_fixtures / "exit15.go"], [], _options(tmp_path))

    assert first.error is None
    assert second.error is None
    assert first.binary_path == second.binary_path
    assert second.exit_code == 15


def test_run_package_directory(tmp_path: Path, go_fixtures: Path) -> None:
    options = ScriptOptions(temp_root=tmp_path / "bin", working_dir=go_fixtures)

    result = Orchestrator().run_first_found_or_directory(
        ["tool/main.go"],
        [],
        options,
        use_directory=True,
    )

    assert (result.exit_code, result.error) == (15, None)
