"""Staging plan: compiler-acceptable source paths and build targets.

The compiled binary lands at ``<temp_root>/<hash>`` and is left there after
the run. Those binaries form an unmanaged, unbounded cache: nothing evicts
them, and staleness is left to the compiler's own build cache.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from scriptify import fs
from scriptify.errors import ValidationError
from scriptify.hashing import hash_parts
from scriptify.resolve import DEFAULT_EXTENSION, has_extension


@dataclass(frozen=True, slots=True)
class ScriptPath:
    original: Path
    generated: Path
    clean: bool = False


@dataclass(frozen=True, slots=True)
class BuildTarget:
    binary_path: Path
    hash: str


def plan_single(
    digest: str,
    original: str | Path,
    *,
    extension: str = DEFAULT_EXTENSION,
) -> ScriptPath:
    """Plan the generated path for one script source.

    Sources that already end in *extension* are used in place and never
    deleted. Otherwise the extension is appended; if that name is already
    taken, ``<dir>/<digest>-<name><extension>`` is used instead.
    """
    source = Path(original)
    if has_extension(source, extension):
        return ScriptPath(original=source, generated=source, clean=False)

    generated = Path(f"{source}{extension}")
    taken, _ = fs.exists(generated)
    if taken:
        # The alternate name is not checked for collisions.
        generated = source.parent / f"{digest}-{source.name}{extension}"
    return ScriptPath(original=source, generated=generated, clean=True)


def plan_many(
    digest: str,
    originals: Sequence[str | Path],
    *,
    extension: str = DEFAULT_EXTENSION,
) -> list[ScriptPath]:
    return [plan_single(digest, original, extension=extension) for original in originals]


def compute_build_target(
    sources: Sequence[str | Path],
    working_dir: str | Path,
    temp_root: str | Path,
) -> BuildTarget:
    """Derive the binary destination from the sources and working directory.

    The same sources run from the same directory always map to the same
    binary path; any other source set or directory maps elsewhere.
    """
    if not sources:
        raise ValidationError(
            "A source file is required.",
            context={"operation": "compute_build_target"},
        )
    digest = hash_parts([*(str(source) for source in sources), str(working_dir)])
    return BuildTarget(binary_path=Path(temp_root) / digest, hash=digest)


def copy_scripts(paths: Sequence[ScriptPath]) -> None:
    """Copy each original to its generated location, stopping at the first failure."""
    for script in paths:
        if script.original == script.generated:
            continue
        fs.copy_file(script.generated, script.original)


def clean_scripts(paths: Sequence[ScriptPath]) -> None:
    """Remove every generated source this run synthesized."""
    for script in paths:
        if script.clean:
            fs.remove_file(script.generated)
