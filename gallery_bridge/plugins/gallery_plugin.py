"""
Gallery Bridge Plugins

GalleryBridgePlugin listens to the host's schema initialisation hook and
publishes gallery fields through SchemaExtender. It subscribes at a
priority after the host's own field integration so the content types it
extends already exist.

DependencyNoticePlugin is registered even when the bridge is disabled; it
renders the admin notice listing missing host capabilities.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gallery_bridge.config import Settings, get_settings
from gallery_bridge.plugins.base import PluginBase, PluginMeta
from gallery_bridge.plugins.dependencies import check_dependencies, render_admin_notice
from gallery_bridge.plugins.hooks import HOOK_ADMIN_NOTICES, HOOK_SOURCE_INIT
from gallery_bridge.services.gallery_resolver import GalleryResolver
from gallery_bridge.services.schema_extender import SchemaExtender

if TYPE_CHECKING:
    from gallery_bridge.host.environment import HostEnvironment
    from gallery_bridge.models import GalleryFieldBinding

logger = logging.getLogger(__name__)


class GalleryBridgePlugin(PluginBase):
    """Publishes gallery fields as list-of-attachment schema attributes."""

    def __init__(self, host: HostEnvironment, settings: Settings | None = None) -> None:
        self.host = host
        self.settings = settings or get_settings()
        self._config: dict[str, Any] = {}
        self._meta = PluginMeta(
            name="gallery_bridge",
            version=self.settings.app_version,
            description="Exposes gallery fields as multiple-items sources for gallery, grid and slideshow elements",
            hooks={HOOK_SOURCE_INIT: self.settings.listener_priority},
        )

    @property
    def meta(self) -> PluginMeta:
        return self._meta

    def on_load(self, config: dict[str, Any]) -> None:
        self._config = config
        logger.debug("GalleryBridgePlugin loaded (field type=%s)", self.settings.gallery_field_type)

    def resolver(self) -> GalleryResolver:
        return GalleryResolver(
            value_store=self.host.value_store,
            image_predicate=self.host.image_predicate,
            id_resolver=self.host.id_resolver,
        )

    def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> list[GalleryFieldBinding] | None:
        if hook_name != HOOK_SOURCE_INIT:
            return None

        schema = payload.get("schema")
        if schema is None:
            logger.warning("%s fired without a schema; nothing registered", hook_name)
            return []

        extender = SchemaExtender(self.host.field_groups, self.resolver(), self.settings)
        return extender.extend(schema)


class DependencyNoticePlugin(PluginBase):
    """Renders the missing-dependency notice on the admin notices hook."""

    def __init__(self, host: HostEnvironment, settings: Settings | None = None) -> None:
        self.host = host
        self.settings = settings or get_settings()

    @property
    def meta(self) -> PluginMeta:
        return PluginMeta(
            name="gallery_bridge_notices",
            version=self.settings.app_version,
            description="Admin notice for missing gallery bridge dependencies",
            hooks={HOOK_ADMIN_NOTICES: self.settings.listener_priority},
        )

    def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> str:
        return render_admin_notice(check_dependencies(self.host, self.settings), self.settings)
