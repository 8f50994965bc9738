"""
Plugin Registry

HookDispatcher: stores registered plugins and dispatches host hooks to
subscribers in priority order.

Hooks are fire-and-forget: each subscriber's handle_hook() is called in
sequence; exceptions are caught, logged, and execution continues.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gallery_bridge.plugins.base import PluginBase

logger = logging.getLogger(__name__)


class HookDispatcher:
    """
    In-process registry of plugins and their hook subscriptions.

    Subscribers of a hook run by ascending priority; equal priorities run in
    registration order.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, PluginBase] = {}
        self._hook_subscriptions: dict[str, list[tuple[int, int, PluginBase]]] = defaultdict(list)
        self._sequence = 0

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin and index its hook subscriptions."""
        if plugin.meta.name in self._plugins:
            self.unregister(plugin.meta.name)
        self._plugins[plugin.meta.name] = plugin
        for hook, priority in plugin.meta.hooks.items():
            self._hook_subscriptions[hook].append((priority, self._sequence, plugin))
            self._hook_subscriptions[hook].sort(key=lambda entry: entry[:2])
            self._sequence += 1
        logger.info("Plugin registered: %s v%s", plugin.meta.name, plugin.meta.version)

    def unregister(self, name: str) -> PluginBase | None:
        """Remove a plugin and its subscriptions; returns the removed plugin, if any."""
        plugin = self._plugins.pop(name, None)
        if plugin is None:
            return None
        for hook in list(self._hook_subscriptions):
            self._hook_subscriptions[hook] = [entry for entry in self._hook_subscriptions[hook] if entry[2] is not plugin]
        plugin.on_unload()
        logger.info("Plugin unregistered: %s", name)
        return plugin

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, name: str) -> PluginBase | None:
        """Return the plugin with the given name, or None if not registered."""
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        """Return all registered plugins in registration order."""
        return list(self._plugins.values())

    def is_registered(self, name: str) -> bool:
        """Return True if a plugin with the given name has been registered."""
        return name in self._plugins

    def subscribers(self, hook_name: str) -> list[PluginBase]:
        """Return the plugins subscribed to a hook, in dispatch order."""
        return [plugin for _, _, plugin in self._hook_subscriptions.get(hook_name, [])]

    # ── Hook dispatch ─────────────────────────────────────────────────────────

    def fire_hook(self, hook_name: str, payload: dict[str, Any]) -> list[Any]:
        """
        Fire a hook to all subscribing plugins.

        Each plugin's handle_hook() is called in turn.  Exceptions are caught
        and logged; a misbehaving plugin never prevents others from running.

        Args:
            hook_name: Hook constant from gallery_bridge.plugins.hooks.
            payload:   Arbitrary data passed to each subscriber.

        Returns:
            List of return values from each subscriber that did not raise.
        """
        results: list[Any] = []
        for plugin in self.subscribers(hook_name):
            try:
                results.append(plugin.handle_hook(hook_name, payload))
            except Exception as exc:
                logger.warning(
                    "Plugin %s hook %s raised: %s",
                    plugin.meta.name,
                    hook_name,
                    exc,
                    extra={"hook": hook_name},
                )
        return results
