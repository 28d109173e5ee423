"""Structured logging helpers for pipeline runs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.DEBUG,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(slots=True)
class StructuredLogger:
    """Keeps structured records and mirrors them to :mod:`logging`.

    Info records go to the stdlib logger at debug level, so a run is
    silent unless logging is configured verbosely.
    """

    name: str = "scriptify.pipeline"
    records: list[dict[str, Any]] = field(default_factory=list)

    def log(
        self,
        *,
        operation: str,
        stage: str | None,
        script: str | None,
        message: str,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "stage": stage,
            "script": script,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        logging.getLogger(self.name).log(
            _LEVELS.get(level, logging.INFO),
            "%s [%s] %s: %s",
            operation,
            stage or "-",
            script or "-",
            message,
        )

    def records_for_stage(self, stage: str) -> list[dict[str, Any]]:
        return [record for record in self.records if record.get("stage") == stage]

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(record, sort_keys=True, default=str) for record in self.records]
        output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return output_path
