"""Item hooks and the plugin system for patterndir.

Hooks post-process every pattern item before it is returned. They reach the
pipeline two ways: passed directly to :class:`PreparePipeline`, or
contributed by plugins that third-party packages register in the
``patterndir.plugins`` entry-point group and :class:`PluginManager` loads.

Key classes:

* :class:`Plugin` -- Abstract base class that all plugins must extend.
* :class:`PluginManager` -- Discovers, loads, and manages plugin lifecycle.
* :class:`PreparePipeline` -- Projects records and runs hooks in order.
* :class:`HookContext` -- Request and raw record handed to each hook.

Example::

    from patterndir.plugins import PluginManager

    manager = PluginManager()
    manager.discover(global_config)
    pipeline = manager.build_pipeline()
"""

from patterndir.plugins.base import Plugin
from patterndir.plugins.hooks import HookContext, PrepareHook, PreparePipeline
from patterndir.plugins.manager import PluginManager

__all__ = ["Plugin", "HookContext", "PrepareHook", "PreparePipeline", "PluginManager"]
