"""Errors raised while configuring or loading diff lifecycle plugins."""

from __future__ import annotations


class PluginError(Exception):
    """Plugin layer failure surfaced to diffkit callers."""


class PluginConfigError(PluginError):
    """A plugin config payload has the wrong shape.

    ``source`` names the config file, or ``<memory>`` for in-process payloads.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class PluginLoadError(PluginError):
    """A configured entrypoint could not be imported, built or accepted."""

    def __init__(self, message: str, *, entrypoint: str | None = None) -> None:
        super().__init__(message)
        self.entrypoint = entrypoint
