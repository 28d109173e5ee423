"""Script identity derivation."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence


def hash_parts(parts: Sequence[str]) -> str:
    """Return a fixed-width hex digest of *parts*, in order.

    Parts are NUL-joined so ``["ab", "c"]`` and ``["a", "bc"]`` differ.
    """
    canonical = "\0".join(parts)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
