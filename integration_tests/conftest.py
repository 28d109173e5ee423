"""Shared fixtures for tests that drive the real Go toolchain."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

EXIT15_SOURCE = """package main

import (
	"fmt"
	"os"
)

func main() {
	fmt.Fprint(os.Stdout, "STDOUT: Exiting 15")
	fmt.Fprint(os.Stderr, "STDERR: Exiting 15")
	os.Exit(15)
}
"""

SYNERR_SOURCE = """package main

import "fmt"

func main() {
	fmt.Println("unterminated"
}
"""


@pytest.fixture(autouse=True)
def _require_go() -> None:
    if shutil.which("go") is None:
        pytest.skip("Go toolchain is not installed.")


@pytest.fixture
def go_fixtures(tmp_path: Path) -> Path:
    """Write Go script fixtures under *tmp_path*/fixtures and return that directory."""
    root = tmp_path / "fixtures"
    root.mkdir()
    (root / "exit15").write_text(EXIT15_SOURCE, encoding="utf-8")
    (root / "exit15.go").write_text(EXIT15_SOURCE, encoding="utf-8")
    (root / "synerr.go").write_text(SYNERR_SOURCE, encoding="utf-8")
    package = root / "tool"
    package.mkdir()
    (package / "go.mod").write_text("module example.com/tool\n\ngo 1.21\n", encoding="utf-8")
    (package / "main.go").write_text(EXIT15_SOURCE, encoding="utf-8")
    return root
