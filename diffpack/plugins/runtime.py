"""Runtime plugin activation helpers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
import os
from pathlib import Path
from typing import Iterator

from diffpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from diffpack.plugins.loader import load_plugin_manager_from_file
from diffpack.plugins.manager import PluginManager

_ACTIVE_PLUGIN_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "diffpack_active_plugin_manager",
    default=None,
)
_EMPTY_PLUGIN_MANAGER = PluginManager(plugins=())

# (config path, config mtime, manager) for the env-configured plugins.
_ENV_CACHE: tuple[str, float, PluginManager] | None = None


def get_active_plugin_manager() -> PluginManager:
    """Resolve the plugin manager for the current context.

    An explicit ``use_plugin_manager`` override wins; otherwise the config
    named by ``DIFFKIT_PLUGIN_CONFIG`` is loaded and cached until the file
    changes on disk.
    """
    manager = _ACTIVE_PLUGIN_MANAGER.get()
    if manager is not None:
        return manager

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _EMPTY_PLUGIN_MANAGER

    global _ENV_CACHE
    mtime = Path(config_path).stat().st_mtime
    if _ENV_CACHE is not None and _ENV_CACHE[0] == config_path and _ENV_CACHE[1] == mtime:
        return _ENV_CACHE[2]

    loaded = load_plugin_manager_from_file(config_path)
    _ENV_CACHE = (config_path, mtime, loaded)
    return loaded


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    """Activate a plugin manager for the current context."""
    token = _ACTIVE_PLUGIN_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_PLUGIN_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    """Load plugins from a config file and activate them for the current context."""
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget the env-configured plugin manager (for tests)."""
    global _ENV_CACHE
    _ENV_CACHE = None
