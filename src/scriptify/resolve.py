"""Candidate script resolution.

Callers pass candidates in priority order (for example ``Builder`` before
``builder``) and get back the first one present on disk.

.. note::
    On case-insensitive filesystems two differently-cased candidates can
    both resolve to the same file; the first candidate wins and its
    spelling is returned, which may differ from the on-disk name.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from scriptify import fs
from scriptify.errors import ResolutionError, ValidationError

DEFAULT_EXTENSION = ".go"


def has_extension(path: str | Path, extension: str = DEFAULT_EXTENSION) -> bool:
    """Report whether the final path element ends in *extension*.

    Unlike ``Path.suffix``, a bare dotfile such as ``.go`` counts.
    """
    return Path(path).name.endswith(extension)


def find_first_existing(candidates: Sequence[str | Path]) -> Path:
    """Return the first candidate that exists and is not a directory."""
    names = _require_candidates(candidates, operation="find_first_existing")
    for candidate in candidates:
        found, is_dir = fs.exists(candidate)
        if found and not is_dir:
            return Path(candidate)
    raise ResolutionError(
        "Unable to find any script candidate.",
        candidates=names,
        hint="Create one of the candidate files or pass an existing path.",
        context={"operation": "find_first_existing"},
    )


def find_first_existing_or_directory(
    candidates: Sequence[str | Path],
    *,
    use_directory: bool,
    working_dir: str | Path,
    extension: str = DEFAULT_EXTENSION,
) -> tuple[Path, bool]:
    """Return ``(path, is_directory)`` for the first candidate on disk.

    With *use_directory*, a file candidate living in a subdirectory of
    *working_dir* resolves to that subdirectory, so the whole package is
    built. Such a file must carry *extension*, since the compiler ignores
    differently-named files in a package directory.
    """
    names = _require_candidates(candidates, operation="find_first_existing_or_directory")
    base = Path(working_dir)
    for candidate in candidates:
        path = Path(candidate)
        found, is_dir = fs.exists(base / path)
        if not found:
            continue
        if is_dir or not use_directory:
            return path, is_dir

        # Compare the lexical parent; a top-level symlink stays top-level.
        if (base / path).parent.resolve() == base.resolve():
            return path, False

        if not has_extension(path, extension):
            language = extension.lstrip(".")
            raise ValidationError(
                f"Script in a subdirectory must have the {extension} extension.",
                hint=(
                    f"The {language} compiler builds the whole directory and ignores "
                    f"files without the {extension} extension."
                ),
                context={
                    "operation": "find_first_existing_or_directory",
                    "candidate": str(path),
                },
            )
        return path.parent, True

    raise ResolutionError(
        "Unable to find any script or directory candidate.",
        candidates=names,
        hint="Create one of the candidate paths or pass an existing path.",
        context={"operation": "find_first_existing_or_directory", "working_dir": str(base)},
    )


def _require_candidates(candidates: Sequence[str | Path], *, operation: str) -> tuple[str, ...]:
    if not candidates:
        raise ValidationError(
            "At least one script candidate is required.",
            context={"operation": operation},
        )
    return tuple(str(candidate) for candidate in candidates)
