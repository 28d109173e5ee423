import io
from pathlib import Path

import pytest
from _support import EXIT15_SCRIPT, posix_only, write_script

from scriptify.errors import ExecutionError
from scriptify.process import execute

pytestmark = posix_only


def test_execute_returns_exit_status(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "exit15.sh", EXIT15_SCRIPT, executable=True)

    assert execute(binary, [], None, io.BytesIO(), io.BytesIO()) == 15


def test_execute_passes_args(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "exitarg.sh", '#!/bin/sh\nexit "$1"\n', executable=True)

    assert execute(binary, ["25"], None, None, None) == 25


def test_execute_returns_zero_on_success(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "ok.sh", "#!/bin/sh\nexit 0\n", executable=True)

    assert execute(binary) == 0


def test_execute_pipes_stdout_and_stderr_exactly(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "exit15.sh", EXIT15_SCRIPT, executable=True)
    stdout = io.BytesIO()
    stderr = io.BytesIO()

    execute(binary, [], None, stdout, stderr)

    assert stdout.getvalue() == b"STDOUT: Exiting 15"
    assert stderr.getvalue() == b"STDERR: Exiting 15"


def test_execute_writes_text_streams(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "exit15.sh", EXIT15_SCRIPT, executable=True)
    stdout = io.StringIO()
    stderr = io.StringIO()

    execute(binary, [], None, stdout, stderr)

    assert stdout.getvalue() == "STDOUT: Exiting 15"
    assert stderr.getvalue() == "STDERR: Exiting 15"


def test_execute_pipes_stdin(tmp_path: Path) -> None:
    binary = write_script(
        tmp_path / "echoinput.sh",
        "#!/bin/sh\nprintf 'Echoing %s' \"$(cat)\"\n",
        executable=True,
    )
    stdout = io.BytesIO()

    execute(binary, [], io.BytesIO(b"Writing to STDIN"), stdout, None)

    assert stdout.getvalue() == b"Echoing Writing to STDIN"


def test_execute_hands_real_files_to_the_child(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "exit15.sh", EXIT15_SCRIPT, executable=True)
    out_path = tmp_path / "out.txt"
    err_path = tmp_path / "err.txt"

    with out_path.open("wb") as stdout, err_path.open("wb") as stderr:
        exit_code = execute(binary, [], None, stdout, stderr)

    assert exit_code == 15
    assert out_path.read_bytes() == b"STDOUT: Exiting 15"
    assert err_path.read_bytes() == b"STDERR: Exiting 15"


def test_execute_fails_fast_when_binary_is_missing(tmp_path: Path) -> None:
    with pytest.raises(ExecutionError) as excinfo:
        execute(tmp_path / "missing", [], None, None, None)

    assert excinfo.value.code == "E_EXECUTION"
    assert excinfo.value.context["binary"] == str(tmp_path / "missing")


def test_execute_reports_spawn_failures(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "not-executable", "#!/bin/sh\nexit 0\n")

    with pytest.raises(ExecutionError) as excinfo:
        execute(binary, [], None, None, None)

    assert "Unable to start" in str(excinfo.value)


def test_execute_reports_signal_termination_as_error(tmp_path: Path) -> None:
    binary = write_script(tmp_path / "killed.sh", "#!/bin/sh\nkill -9 $$\n", executable=True)

    with pytest.raises(ExecutionError) as excinfo:
        execute(binary, [], None, None, None)

    assert excinfo.value.context["signal"] == "9"


def test_execute_shared_in_memory_stream_gets_stdout_then_stderr(tmp_path: Path) -> None:
    binary = write_script(
        tmp_path / "interleave.sh",
        "#!/bin/sh\nprintf 'err1' >&2\nprintf 'out1'\nprintf 'err2' >&2\n",
        executable=True,
    )
    shared = io.BytesIO()

    execute(binary, [], None, shared, shared)

    assert shared.getvalue() == b"out1err1err2"
