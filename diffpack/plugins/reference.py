"""NDJSON trace of diff runs, shipped as the reference lifecycle plugin."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from diffpack.plugins.base import DiffEndEvent, DiffStartEvent, LifecyclePlugin


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Appends one JSON line per hook describing the diff being run.

    Start records carry both labels, the input sizes and whether the sides
    were swapped. End records carry the outcome: the stats summary and
    timing for ``ok`` runs, the error for ``error`` runs.
    """

    output_path: str = "runs/plugins/lifecycle-trace.ndjson"
    name: str = "lifecycle-trace"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._write(
            "on_diff_start",
            event.left_label,
            event.right_label,
            {
                "left_length": event.left_length,
                "right_length": event.right_length,
                "swapped": event.swapped,
            },
        )

    def on_diff_end(self, event: DiffEndEvent) -> None:
        if event.status == "ok":
            outcome: dict[str, Any] = {
                "status": "ok",
                "identical": event.identical,
                "summary": event.summary,
                "duration_ms": event.duration_ms,
            }
        else:
            outcome = {
                "status": event.status,
                "error": f"{event.error_type}: {event.error_message}",
            }
        self._write("on_diff_end", event.left_label, event.right_label, outcome)

    def _write(self, hook: str, left_label: str, right_label: str, fields: dict[str, Any]) -> None:
        record = {
            "hook": hook,
            "plugin": self.name,
            "left": left_label,
            "right": right_label,
            **fields,
        }
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=True, sort_keys=True) + "\n")
