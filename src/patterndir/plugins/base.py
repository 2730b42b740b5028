"""Abstract base class for patterndir plugins.

Every plugin must subclass :class:`Plugin` and implement the :attr:`name`
property. The remaining lifecycle hooks (``on_init``, ``prepare_item``,
``cleanup``) are optional -- default implementations are no-ops so plugins
only override what they need.

Plugins are registered as entry points in the ``patterndir.plugins`` group
and discovered at runtime by :class:`~patterndir.plugins.manager.PluginManager`.

Example:
    Minimal plugin implementation::

        class PreviewLinks(Plugin):
            @property
            def name(self) -> str:
                return "preview-links"

            def prepare_item(self, item, ctx):
                item["link"] = f"https://wordpress.org/patterns/pattern/{ctx.raw.model_extra.get('slug')}/"
                return item
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from patterndir.models import GlobalConfig
from patterndir.plugins.hooks import HookContext


class Plugin(ABC):
    """Base class for all patterndir plugins.

    The plugin lifecycle is:

    1. Instantiation -- the :class:`PluginManager` calls the no-arg constructor.
    2. :meth:`on_init` -- called once with the global configuration.
    3. :meth:`prepare_item` -- called once per item on every non-HEAD read.
    4. :meth:`cleanup` -- called once during shutdown.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for discovery and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    def on_init(self, config: GlobalConfig) -> None:
        """Called once when the plugin is loaded by the :class:`PluginManager`.

        Args:
            config: The global patterndir configuration.
        """

    def prepare_item(self, item: Any, ctx: HookContext) -> Any:
        """Transform one prepared pattern item.

        The returned value replaces the item for subsequent plugins in the
        chain. Runs identically for cached and freshly fetched patterns.

        Args:
            item: The item as left by the projection or the previous hook.
            ctx: The inbound request and the raw record behind *item*.

        Returns:
            The (possibly replaced) item.
        """
        return item

    def cleanup(self) -> None:
        """Called once during shutdown to release plugin resources."""
