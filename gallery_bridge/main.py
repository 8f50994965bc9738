"""
Schema composition.

Wires the bridge into a hook dispatcher the way a host does at startup, then
fires the schema initialisation hook against a Strawberry schema registry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from gallery_bridge.config import Settings, get_settings
from gallery_bridge.graphql.registry import StrawberrySchemaRegistry
from gallery_bridge.logging_config import setup_structured_logging
from gallery_bridge.plugins.hooks import HOOK_SOURCE_INIT
from gallery_bridge.plugins.loader import bootstrap
from gallery_bridge.plugins.registry import HookDispatcher
from gallery_bridge.utils.casing import schema_type_name

if TYPE_CHECKING:
    import strawberry

    from gallery_bridge.host.environment import HostEnvironment

logger = logging.getLogger(__name__)


def create_schema(
    host: HostEnvironment,
    post_types: Iterable[str] = ("post", "page"),
    settings: Settings | None = None,
    dispatcher: HookDispatcher | None = None,
) -> strawberry.Schema:
    """
    Build a GraphQL schema exposing the gallery fields known to `host`.

    Args:
        host:       Host capabilities.
        post_types: Content types the host itself publishes, present in the
                    schema even without gallery fields.
        settings:   Bridge settings; defaults to the environment.
        dispatcher: Hook dispatcher to bootstrap into; a fresh one by default.
    """
    settings = settings or get_settings()
    dispatcher = dispatcher or HookDispatcher()

    if settings.debug:
        setup_structured_logging(log_level="DEBUG", json_format=settings.log_json)

    bootstrap(dispatcher, host, settings)

    registry = StrawberrySchemaRegistry(settings)
    for post_type in post_types:
        type_name = schema_type_name(post_type, settings.builtin_type_map)
        if type_name:
            registry.add_type(type_name)

    dispatcher.fire_hook(HOOK_SOURCE_INIT, {"schema": registry})
    logger.info("Schema built with types: %s", ", ".join(registry.type_names()) or "none")
    return registry.build_schema()
