"""Typed pipeline error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorCode(StrEnum):
    """Stable error identifiers, one per pipeline failure kind."""

    VALIDATION = "E_VALIDATION"
    RESOLUTION = "E_RESOLUTION"
    COMPILE = "E_COMPILE"
    IO = "E_IO"
    EXECUTION = "E_EXECUTION"


class ScriptifyError(Exception):
    """Base error class that carries code, optional hint, and context.

    ``exit_code`` is non-zero only for errors that mirror a failed
    compiler process.
    """

    code: str
    hint: str | None
    context: Mapping[str, str]
    exit_code: int = 0

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(ScriptifyError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class ResolutionError(ScriptifyError):
    """None of the candidate paths exist."""

    def __init__(
        self,
        message: str,
        *,
        candidates: tuple[str, ...] = (),
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        merged = dict(context or {})
        if candidates:
            merged.setdefault("candidates", ", ".join(candidates))
        super().__init__(message, code=ErrorCode.RESOLUTION, hint=hint, context=merged)
        self.candidates = candidates


class CompileError(ScriptifyError):
    """The external compiler exited non-zero.

    ``message`` is the compiler's diagnostic stream, verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.COMPILE, hint=hint, context=context)
        self.exit_code = exit_code

    def __str__(self) -> str:
        return f"Go build error:\n\n{self.message}"


class FilesystemError(ScriptifyError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.IO, hint=hint, context=context)


class ExecutionError(ScriptifyError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.EXECUTION, hint=hint, context=context)


__all__ = [
    "CompileError",
    "ErrorCode",
    "ExecutionError",
    "FilesystemError",
    "ResolutionError",
    "ScriptifyError",
    "ValidationError",
]
