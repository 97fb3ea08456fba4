# plugins/registry.py
"""Registry of output targets."""

import logging
from typing import Dict, List, Optional, Type

from core.errors import UnknownTargetError
from plugins.base import TargetPlugin

logger = logging.getLogger(__name__)


class TargetRegistry:
    """Closed mapping of target names and aliases to target plugins.

    Targets are registered in code; manifests are read from the plugin
    package, never from the workspace, so resolving a target performs no
    workspace or output I/O.
    """

    def __init__(self, plugin_classes: Optional[List[Type[TargetPlugin]]] = None):
        self._plugin_classes = plugin_classes
        self._plugins: Dict[str, TargetPlugin] = {}
        self._aliases: Dict[str, str] = {}
        self._loaded = False

    def _default_plugin_classes(self) -> List[Type[TargetPlugin]]:
        from plugins.javascript import JavaScriptTarget
        from plugins.swift import SwiftTarget
        from plugins.xml import XmlTarget
        return [JavaScriptTarget, SwiftTarget, XmlTarget]

    def load_plugins(self):
        """Instantiate all target plugins."""
        if self._loaded:
            return

        for plugin_class in self._plugin_classes or self._default_plugin_classes():
            plugin = plugin_class()
            name = plugin.name
            if name in self._plugins or name in self._aliases:
                raise ValueError(f"Target '{name}' registered twice")
            self._plugins[name] = plugin
            for alias in plugin.manifest.aliases:
                self._aliases[alias] = name
            logger.debug(f"Registered target {name} ({plugin.extension})")

        self._loaded = True

    def names(self, include_aliases: bool = False) -> List[str]:
        """Target names, optionally followed by their aliases."""
        self.load_plugins()
        names = list(self._plugins)
        if include_aliases:
            names.extend(self._aliases)
        return names

    def get(self, name: str) -> TargetPlugin:
        """Get a target by name or alias, failing for unknown names."""
        self.load_plugins()
        key = name.lower()
        key = self._aliases.get(key, key)
        plugin = self._plugins.get(key)
        if plugin is None:
            raise UnknownTargetError(name, self.names())
        return plugin

    def list_targets(self) -> List[Dict[str, object]]:
        """List all available targets."""
        self.load_plugins()
        return [
            {
                "name": plugin.name,
                "aliases": plugin.manifest.aliases,
                "description": plugin.manifest.description,
                "extension": plugin.extension,
                "frameworks": plugin.manifest.frameworks,
                "text_styles": plugin.manifest.supports_text_styles,
                "components": plugin.manifest.supports_components,
            }
            for plugin in self._plugins.values()
        ]


# Global registry instance
target_registry = TargetRegistry()
