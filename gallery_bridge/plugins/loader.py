"""
Plugin Loader

Reads plugin configuration from the JSON file named by
`Settings.plugins_config_file` and registers the bridge with the host's hook
dispatcher once the host has finished setting up.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gallery_bridge.config import Settings, get_settings

if TYPE_CHECKING:
    from gallery_bridge.host.environment import HostEnvironment
    from gallery_bridge.plugins.registry import HookDispatcher

logger = logging.getLogger(__name__)

# ── Default plugin config ─────────────────────────────────────────────────────
_DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "gallery_bridge": {"enabled": True},
}


# ── Config I/O ────────────────────────────────────────────────────────────────


def load_plugins_config(path: str | Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load plugin configuration from disk.

    Returns defaults if the file does not exist or cannot be parsed.
    """
    config_file = Path(path or get_settings().plugins_config_file)
    if config_file.exists():
        try:
            return json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read plugins config: %s", exc)
    return copy.deepcopy(_DEFAULT_CONFIG)


# ── Startup initialisation ────────────────────────────────────────────────────


def bootstrap(
    dispatcher: HookDispatcher,
    host: HostEnvironment,
    settings: Settings | None = None,
    config: dict[str, dict[str, Any]] | None = None,
) -> bool:
    """
    Register the bridge with the host's hook dispatcher.

    The dependency notice is always registered. The bridge itself is only
    registered when every host capability is present and it is not disabled
    in the plugin config.

    Returns:
        True if the bridge was registered.
    """
    from gallery_bridge.plugins.dependencies import check_dependencies
    from gallery_bridge.plugins.gallery_plugin import DependencyNoticePlugin, GalleryBridgePlugin

    settings = settings or get_settings()
    config = config if config is not None else load_plugins_config(settings.plugins_config_file)

    dispatcher.register(DependencyNoticePlugin(host, settings))

    errors = check_dependencies(host, settings)
    if errors:
        logger.warning("Gallery bridge not loaded, missing dependencies: %s", "; ".join(errors))
        return False

    plugin = GalleryBridgePlugin(host, settings)
    plugin_config = config.get(plugin.meta.name, {})
    if not plugin_config.get("enabled", True):
        logger.info("Gallery bridge disabled in plugin config")
        return False

    plugin.on_load(plugin_config)
    dispatcher.register(plugin)
    return True
