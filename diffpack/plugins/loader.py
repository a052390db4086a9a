"""Versioned plugin configuration loader."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

from diffpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from diffpack.plugins.exceptions import PluginConfigError, PluginLoadError
from diffpack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled", "name"})


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Load a plugin manager from a JSON config file.

    Expected shape::

        {"config_version": 1,
         "plugins": [{"entrypoint": "module:attr", "options": {}, "enabled": true}]}

    A missing file raises ``FileNotFoundError`` unchanged.
    """
    config_path = Path(path)
    text = config_path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as error:
        raise PluginConfigError(
            f"Invalid plugin config JSON ({config_path}): {error}",
            source=str(config_path),
        ) from error
    return build_plugin_manager(raw, source=str(config_path))


def build_plugin_manager(raw: Any, *, source: str = "<memory>") -> PluginManager:
    """Build a plugin manager from an already-decoded config payload."""
    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({source}).", source=source)

    version = raw.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            "Unsupported plugin config version "
            f"{version!r}; expected {PLUGIN_CONFIG_VERSION}.",
            source=source,
        )

    entries = raw.get("plugins")
    if not isinstance(entries, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.", source=source)

    plugins: list[object] = []
    for index, entry in enumerate(entries, start=1):
        plugin = _load_entry(entry, index=index, source=source)
        if plugin is not None:
            plugins.append(plugin)
    return PluginManager(plugins=tuple(plugins))


def _load_entry(entry: Any, *, index: int, source: str) -> object | None:
    if not isinstance(entry, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.", source=source)

    unknown = sorted(set(entry) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}",
            source=source,
        )

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(
            f"Plugin entry #{index} key 'enabled' must be boolean.", source=source
        )
    if not enabled:
        return None

    entrypoint = entry.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'.",
            source=source,
        )

    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(
            f"Plugin entry #{index} key 'options' must be a JSON object.", source=source
        )

    name = entry.get("name")
    if name is not None and (not isinstance(name, str) or not name.strip()):
        raise PluginConfigError(
            f"Plugin entry #{index} key 'name' must be a non-empty string.", source=source
        )

    target = _resolve_entrypoint(entrypoint, index=index)
    plugin = _instantiate(target, entrypoint=entrypoint, options=options, index=index)
    _check_api_version(plugin, entrypoint=entrypoint, index=index)
    if name is not None:
        try:
            setattr(plugin, "name", name.strip())
        except AttributeError as error:
            raise PluginLoadError(
                f"Plugin entry #{index} '{entrypoint}' does not accept a name override.",
                entrypoint=entrypoint,
            ) from error
    return plugin


def _resolve_entrypoint(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to import module '{module_name}': {error}",
            entrypoint=entrypoint,
        ) from error

    target = getattr(module, attribute, None)
    if target is None:
        raise PluginLoadError(
            f"Plugin entry #{index} could not find attribute '{attribute}' in '{module_name}'.",
            entrypoint=entrypoint,
        )
    return target


def _instantiate(
    target: object,
    *,
    entrypoint: str,
    options: dict[str, Any],
    index: int,
) -> object:
    if not callable(target):
        if options:
            raise PluginLoadError(
                f"Plugin entry #{index} uses non-callable '{entrypoint}' and cannot accept options.",
                entrypoint=entrypoint,
            )
        return target

    try:
        return target(**options)
    except Exception as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to instantiate '{entrypoint}' "
            f"with options {sorted(options)}: {error}",
            entrypoint=entrypoint,
        ) from error


def _check_api_version(plugin: object, *, entrypoint: str, index: int) -> None:
    expected_major = PLUGIN_API_VERSION.split(".", 1)[0]
    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if declared.split(".", 1)[0] != expected_major:
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' declares unsupported api_version "
            f"{declared!r}; supported major version is {expected_major}.",
            entrypoint=entrypoint,
        )
