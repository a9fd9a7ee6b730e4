"""
    Generic plugin discovery and loading via entry_points.

    Design Pattern: Service Locator / Registry
    ────────────────────────────────────────────
    Discovers installed renderer and graph-comparator plugins at runtime
    by scanning Python package entry_points.  Each plugin type uses a
    distinct entry-point group.

    ``PluginLoader[TPlugin]`` is generic over the plugin base class so the
    same loader serves ``RendererPlugin`` and ``GraphComparatorPlugin``.
"""
import importlib.metadata
import logging
from typing import TypeVar, Generic, Type, Dict, List, Optional

from graph_api.plugins.base import RendererPlugin, GraphComparatorPlugin

logger = logging.getLogger(__name__)

TPlugin = TypeVar('TPlugin')

# Entry-point group names (must match setup.py of plugin distributions)
RENDERER_EP_GROUP = 'graph_editor.renderer'
COMPARATOR_EP_GROUP = 'graph_editor.comparator'


class PluginLoader(Generic[TPlugin]):
    """
    Discovers all installed plugins of a given type from one entry-point
    group.

    Usage:
        loader = PluginLoader(RendererPlugin, 'graph_editor.renderer')
        plugins = loader.load_all()          # Dict[str, RendererPlugin]
        canvas = loader.get('canvas')        # Optional[RendererPlugin]
    """

    def __init__(self, plugin_base_class: Type[TPlugin], group: str):
        """
        Args:
            plugin_base_class: The ABC that every discovered plugin must subclass.
            group:             The entry-point group to scan.
        """
        self._base_class = plugin_base_class
        self._group = group
        self._plugins: Dict[str, TPlugin] = {}
        self._loaded = False

    def load_all(self) -> Dict[str, TPlugin]:
        """
        Discover and instantiate every plugin registered under the group.

        Plugins that fail to import, do not subclass the base class, or
        raise in their constructor are logged and skipped.

        Returns:
            Dict mapping entry-point name → plugin instance.
        """
        if self._loaded:
            return self._plugins

        for ep in importlib.metadata.entry_points(group=self._group):
            plugin = self._instantiate(ep)
            if plugin is not None:
                self._plugins[ep.name] = plugin

        self._loaded = True
        logger.debug("Group %s: %d plugin(s)", self._group, len(self._plugins))
        return self._plugins

    def _instantiate(self, ep) -> Optional[TPlugin]:
        try:
            plugin_cls = ep.load()
        except Exception as exc:
            logger.error("Failed to load plugin '%s': %s", ep.name, exc)
            return None
        if not (isinstance(plugin_cls, type) and issubclass(plugin_cls, self._base_class)):
            logger.warning("Plugin '%s' does not subclass %s; skipped.",
                           ep.name, self._base_class.__name__)
            return None
        try:
            plugin = plugin_cls()
        except Exception as exc:
            logger.error("Failed to load plugin '%s': %s", ep.name, exc)
            return None
        logger.info("Loaded plugin: %s (%s)", ep.name, plugin_cls.__name__)
        return plugin

    def get(self, name: str) -> Optional[TPlugin]:
        """Get a plugin by its entry-point name, or None."""
        return self.load_all().get(name)

    def get_names(self) -> List[str]:
        """Sorted names of every discovered plugin."""
        return sorted(self.load_all())

    def __repr__(self) -> str:
        return (
            f"PluginLoader(base={self._base_class.__name__}, "
            f"group='{self._group}', loaded={len(self._plugins)})"
        )


# ── Convenience factory functions ────────────────────────────────

def create_renderer_loader() -> PluginLoader[RendererPlugin]:
    """Create a loader for Renderer plugins."""
    return PluginLoader(RendererPlugin, RENDERER_EP_GROUP)


def create_comparator_loader() -> PluginLoader[GraphComparatorPlugin]:
    """Create a loader for graph comparator plugins."""
    return PluginLoader(GraphComparatorPlugin, COMPARATOR_EP_GROUP)
