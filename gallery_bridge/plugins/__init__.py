"""
Gallery bridge plugin system

Public API:
    PluginMeta       — plugin metadata dataclass
    PluginBase       — abstract base class for all plugins
    HookDispatcher   — registry + prioritised hook dispatcher
    bootstrap        — register the bridge with a dispatcher
"""

from .base import PluginBase, PluginMeta
from .loader import bootstrap
from .registry import HookDispatcher

__all__ = ["HookDispatcher", "PluginBase", "PluginMeta", "bootstrap"]
