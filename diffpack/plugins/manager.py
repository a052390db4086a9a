"""Hook dispatch for diff lifecycle plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
import warnings

from diffpack.plugins.base import DiffEndEvent, DiffStartEvent

DiffEvent = DiffStartEvent | DiffEndEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    """A hook failure, tied to the diff that was running when it happened."""

    plugin_name: str
    hook: str
    left_label: str
    right_label: str
    error_type: str
    message: str

    @property
    def pair(self) -> str:
        return f"{self.left_label} -> {self.right_label}"

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "left_label": self.left_label,
            "right_label": self.right_label,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class PluginManager:
    """Runs ``on_diff_start``/``on_diff_end`` on every plugin.

    A plugin that raises never stops the diff or the other plugins: the
    failure is kept in ``diagnostics`` and reported as a ``RuntimeWarning``.
    """

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def diagnostics_for(self, left_label: str, right_label: str) -> list[PluginDiagnostic]:
        return [
            diagnostic
            for diagnostic in self.diagnostics
            if diagnostic.left_label == left_label and diagnostic.right_label == right_label
        ]

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._run_hook("on_diff_start", event)

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self._run_hook("on_diff_end", event)

    def _run_hook(self, hook: str, event: DiffEvent) -> None:
        for plugin in self.plugins:
            handler = getattr(plugin, hook, None)
            if handler is None:
                continue
            try:
                handler(event)
            except Exception as error:
                self._record_failure(plugin, hook, event, error)

    def _record_failure(
        self,
        plugin: object,
        hook: str,
        event: DiffEvent,
        error: Exception,
    ) -> None:
        diagnostic = PluginDiagnostic(
            plugin_name=str(getattr(plugin, "name", type(plugin).__name__)),
            hook=hook,
            left_label=event.left_label,
            right_label=event.right_label,
            error_type=type(error).__name__,
            message=str(error),
        )
        self.diagnostics.append(diagnostic)
        warnings.warn(
            f"diffkit plugin failure: plugin={diagnostic.plugin_name} hook={hook} "
            f"diff={diagnostic.pair} error={diagnostic.error_type}: {diagnostic.message}",
            RuntimeWarning,
            stacklevel=4,
        )
