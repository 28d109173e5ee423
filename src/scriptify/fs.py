"""Filesystem collaborators: existence checks and byte-exact copies."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from scriptify.errors import FilesystemError


def exists(path: str | Path) -> tuple[bool, bool]:
    """Return ``(exists, is_directory)`` for *path*.

    A missing path is not an error; any other stat failure is.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False, False
    except OSError as exc:
        raise FilesystemError(
            "Unable to stat path.",
            context={"operation": "exists", "path": str(path), "error": str(exc)},
        ) from exc
    return True, stat.S_ISDIR(st.st_mode)


def copy_file(dst: str | Path, src: str | Path) -> None:
    """Copy *src* to *dst* byte for byte, replacing *dst* if present."""
    try:
        shutil.copyfile(src, dst)
    except OSError as exc:
        raise FilesystemError(
            "Unable to copy script source.",
            context={"operation": "copy", "src": str(src), "dst": str(dst), "error": str(exc)},
        ) from exc


def ensure_dir(path: str | Path) -> Path:
    """Create *path* and all missing parents."""
    directory = Path(path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            "Unable to create directory.",
            context={"operation": "mkdir", "path": str(directory), "error": str(exc)},
        ) from exc
    return directory


def remove_file(path: str | Path) -> None:
    try:
        os.remove(path)
    except OSError as exc:
        raise FilesystemError(
            "Unable to remove generated script source.",
            context={"operation": "remove", "path": str(path), "error": str(exc)},
        ) from exc
