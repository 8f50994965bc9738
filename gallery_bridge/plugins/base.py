"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, hooks, config schema).
PluginBase: abstract base class all plugins must subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:          Machine-readable slug, e.g. "gallery_bridge".
        version:       Semver string, e.g. "1.0.0".
        description:   Human-readable description shown in admin UI.
        author:        Plugin author.
        hooks:         Hook names this plugin subscribes to, mapped to the
                       priority it runs at (lower runs first).
        config_schema: JSON Schema fragments describing configurable options.
    """

    name: str
    version: str
    description: str
    author: str = "Gallery Bridge Team"
    hooks: dict[str, int] = field(default_factory=dict)
    config_schema: dict[str, Any] = field(default_factory=dict)


class PluginBase(ABC):
    """
    Abstract base class for all plugins.

    Subclasses must implement the `meta` property. Lifecycle methods default
    to no-ops. Everything runs synchronously inside the host's request.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    def on_load(self, config: dict[str, Any]) -> None:  # noqa: B027
        """Called once at registration with the plugin's config dict."""

    def on_unload(self) -> None:  # noqa: B027
        """Called when the plugin is removed from the dispatcher."""

    def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> Any:
        """
        Receive and process a hook event.

        Called by HookDispatcher.fire_hook() for each hook the plugin
        declared in PluginMeta.hooks.  Default implementation is a no-op.

        Args:
            hook_name: The hook constant, e.g. "source.init".
            payload:   Arbitrary data provided by the host.

        Returns:
            Any value (collected by fire_hook).
        """
        return None
