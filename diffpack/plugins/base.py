"""Versioned plugin interfaces and diff lifecycle event payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "DIFFKIT_PLUGIN_CONFIG"

LifecycleStatus = Literal["ok", "error"]


@dataclass(frozen=True, slots=True)
class DiffStartEvent:
    left_label: str
    right_label: str
    left_length: int
    right_length: int
    swapped: bool


@dataclass(frozen=True, slots=True)
class DiffEndEvent:
    left_label: str
    right_label: str
    status: LifecycleStatus
    identical: bool | None = None
    summary: dict[str, int] | None = None
    duration_ms: float | None = None
    error_type: str | None = None
    error_message: str | None = None


class LifecyclePlugin:
    """Base no-op lifecycle plugin interface (API v1.x)."""

    api_version = PLUGIN_API_VERSION
    name = "lifecycle-plugin"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        return None

    def on_diff_end(self, event: DiffEndEvent) -> None:
        return None
