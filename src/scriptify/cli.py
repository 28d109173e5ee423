"""Command-line interface: ``scriptify SCRIPT [ARGS...]``."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from scriptify.entry import report
from scriptify.options import DEFAULT_TEMP_ROOT, default_options
from scriptify.orchestrator import Orchestrator, RunResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptify",
        description="Build a Go source file or package directory and run it.",
    )
    parser.add_argument("script", help="Script file, or package directory with --dir.")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to the script.")
    parser.add_argument(
        "--temp-root",
        default=str(DEFAULT_TEMP_ROOT),
        help="Directory holding compiled binaries (default: %(default)s).",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dir", action="store_true", help="Build SCRIPT as a package directory.")
    mode.add_argument(
        "--use-dir",
        action="store_true",
        help="Build the enclosing directory when SCRIPT lives in a subdirectory.",
    )
    parser.add_argument(
        "--fallback",
        action="append",
        default=[],
        metavar="PATH",
        help="Candidate tried when SCRIPT does not exist. Repeatable, in priority order.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages.")
    return parser


def run(
    argv: Sequence[str] | None = None,
    *,
    orchestrator: Orchestrator | None = None,
) -> RunResult:
    """Parse *argv* and run the pipeline, returning its result."""
    parser = build_parser()
    ns = parser.parse_args(argv)
    if ns.dir and ns.fallback:
        parser.error("--fallback cannot be combined with --dir")
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    options = default_options(ns.temp_root)
    runner = orchestrator or Orchestrator()
    candidates = [ns.script, *ns.fallback]
    if ns.dir:
        return runner.run_directory(ns.script, ns.args, options)
    if ns.use_dir:
        return runner.run_first_found_or_directory(
            candidates,
            ns.args,
            options,
            use_directory=True,
        )
    if ns.fallback:
        return runner.run_first_found(candidates, ns.args, options)
    return runner.run_scripts([ns.script], ns.args, options)


def main(argv: Sequence[str] | None = None) -> int:
    return report(run(argv))
