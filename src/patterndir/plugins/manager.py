"""Plugin manager -- discovery, loading, and lifecycle management.

This module contains :class:`PluginManager`, the central coordinator for the
plugin system. It discovers plugins registered as Python entry points,
applies enable/disable filtering from the global configuration, and builds a
:class:`~patterndir.plugins.hooks.PreparePipeline` whose hooks are the loaded
plugins' :meth:`~patterndir.plugins.base.Plugin.prepare_item` methods.

The entry-point group used for discovery is ``patterndir.plugins``.
Third-party packages register plugins by declaring an entry point under this
group in their ``pyproject.toml``::

    [project.entry-points."patterndir.plugins"]
    my-plugin = "my_package.plugin:MyPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Iterable, Optional

from patterndir.exceptions import PluginError
from patterndir.models import GlobalConfig
from patterndir.plugins.base import Plugin
from patterndir.plugins.hooks import PrepareHook, PreparePipeline

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "patterndir.plugins"
"""The entry-point group name used for plugin discovery."""


class PluginManager:
    """Discovers, loads, and manages the lifecycle of patterndir plugins.

    The *enabled* and *disabled* lists in
    :class:`~patterndir.models.PluginsConfig` act as an explicit
    allowlist/blocklist. When *enabled* is non-empty only those plugins are
    loaded; otherwise all discovered plugins that are **not** in *disabled*
    are loaded.

    Example:
        Typical usage::

            manager = PluginManager()
            manager.discover(global_config)
            pipeline = manager.build_pipeline()
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}

    def discover(self, config: GlobalConfig) -> list[str]:
        """Discover and load available plugins via Python entry points.

        Returns:
            Names of the plugins that were loaded. Plugins that fail to load
            are logged as warnings and skipped.
        """
        loaded_names: list[str] = []
        enabled_set = set(config.plugins.enabled)
        disabled_set = set(config.plugins.disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name
            if enabled_set and name not in enabled_set:
                logger.debug("Plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue

            try:
                plugin_cls = ep.load()
                plugin: Plugin = plugin_cls()
                self.load_plugin(name, plugin, config)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)

        return loaded_names

    def load_plugin(self, name: str, plugin: Plugin, config: GlobalConfig) -> None:
        """Initialise *plugin* and register it under *name*.

        Raises:
            PluginError: If a plugin with the same *name* is already loaded.
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' is already loaded")

        plugin.on_init(config)
        self._plugins[name] = plugin
        logger.info("Loaded plugin '%s' v%s", name, plugin.version)

    def get_plugin(self, name: str) -> Plugin:
        """Retrieve a loaded plugin by its registered name.

        Raises:
            PluginError: If no plugin with the given *name* is loaded.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not loaded") from None

    def list_plugins(self) -> list[dict[str, str]]:
        return [
            {
                "name": plugin.name,
                "version": plugin.version,
                "description": plugin.description,
            }
            for plugin in self._plugins.values()
        ]

    def hooks(self) -> list[PrepareHook]:
        """Return the loaded plugins' item hooks in registration order."""
        return [plugin.prepare_item for plugin in self._plugins.values()]

    def build_pipeline(self, extra_hooks: Optional[Iterable[PrepareHook]] = None) -> PreparePipeline:
        """Build a pipeline running plugin hooks first, then *extra_hooks*."""
        return PreparePipeline([*self.hooks(), *(extra_hooks or [])])

    def cleanup(self) -> None:
        """Clean up all loaded plugins and reset internal state.

        Exceptions from individual plugins are logged so that one plugin's
        failure does not prevent others from cleaning up.
        """
        for name, plugin in self._plugins.items():
            try:
                plugin.cleanup()
            except Exception as exc:
                logger.warning("Error cleaning up plugin '%s': %s", name, exc)
        self._plugins.clear()
