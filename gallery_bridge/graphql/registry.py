"""
Strawberry Schema Registry

A SchemaRegistry that collects the attributes registered during the
`source.init` hook and builds a Strawberry schema from them: one object type
per content type, each with an `id` and its gallery attributes, and a Query
field per content type looking a record up by id.
"""

import logging
import re
from collections.abc import Callable
from typing import Any

import strawberry
from strawberry.schema.config import StrawberryConfig

from gallery_bridge.config import Settings, get_settings
from gallery_bridge.graphql.types import AttachmentType, attachment_to_type
from gallery_bridge.models import AttributeSpec
from gallery_bridge.utils.casing import to_snake_case

logger = logging.getLogger(__name__)

_GRAPHQL_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
_BUILTIN_TYPE_NAMES = frozenset({"Query", "Mutation", "Subscription", "String", "Int", "Float", "Boolean", "ID"})


class StrawberrySchemaRegistry:
    """
    Collects attribute registrations per content type.

    Registering the same attribute name twice on a type replaces the
    earlier registration.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._types: dict[str, dict[str, AttributeSpec]] = {}

    # ── Registration ──────────────────────────────────────────────────────────

    def add_type(self, type_name: str) -> None:
        """Declare a content type that exists even if no attribute is registered on it."""
        self._types.setdefault(type_name, {})

    def register_attribute(self, type_name: str, attribute_name: str, spec: AttributeSpec) -> None:
        attributes = self._types.setdefault(type_name, {})
        if attribute_name in attributes:
            logger.debug("Replacing %s.%s registration", type_name, attribute_name)
        attributes[attribute_name] = spec

    # ── Lookup ────────────────────────────────────────────────────────────────

    def type_names(self) -> list[str]:
        return list(self._types)

    def attributes(self, type_name: str) -> dict[str, AttributeSpec]:
        return dict(self._types.get(type_name, {}))

    # ── Schema building ───────────────────────────────────────────────────────

    def build_schema(self) -> strawberry.Schema:
        query_namespace: dict[str, Any] = {
            "__doc__": "Root query: look up content records by id.",
            "bridge_version": strawberry.field(resolver=self._version_resolver()),
        }

        for type_name, attributes in self._types.items():
            if not _GRAPHQL_NAME.match(type_name):
                logger.warning("Skipping type %r: not a valid GraphQL name", type_name)
                continue
            if self._is_reserved(type_name):
                logger.warning(
                    "Skipping type %s: name is reserved in the schema",
                    type_name,
                    extra={"type_name": type_name},
                )
                continue
            field_name = to_snake_case(type_name)
            if field_name in query_namespace:
                logger.warning(
                    "Skipping type %s: query field %s is already taken",
                    type_name,
                    field_name,
                    extra={"type_name": type_name},
                )
                continue
            object_type = self._object_type(type_name, attributes)
            query_namespace[field_name] = strawberry.field(
                resolver=_record_resolver(object_type),
                description=f"Get a single {type_name} by id.",
            )

        query = strawberry.type(type("Query", (), query_namespace))
        return strawberry.Schema(
            query=query,
            types=[AttachmentType],
            config=StrawberryConfig(auto_camel_case=False),
        )

    def _is_reserved(self, type_name: str) -> bool:
        return (
            type_name in _BUILTIN_TYPE_NAMES
            or type_name == self.settings.attachment_type
            or type_name.startswith("__")
        )

    def _version_resolver(self) -> Callable[[], str]:
        version = self.settings.app_version

        def bridge_version() -> str:
            return version

        return bridge_version

    def _object_type(self, type_name: str, attributes: dict[str, AttributeSpec]) -> type:
        namespace: dict[str, Any] = {
            "__annotations__": {"id": int},
            "__doc__": f"{type_name} content record.",
        }
        for attribute_name, spec in attributes.items():
            if not _GRAPHQL_NAME.match(attribute_name) or attribute_name == "id":
                logger.warning("Skipping %s.%s: not a usable field name", type_name, attribute_name)
                continue
            if spec.list_of != self.settings.attachment_type:
                logger.warning("Skipping %s.%s: unsupported element type %s", type_name, attribute_name, spec.list_of)
                continue
            namespace[attribute_name] = strawberry.field(
                resolver=_gallery_resolver(spec),
                description=spec.metadata.get("label"),
            )
        return strawberry.type(type(type_name, (), namespace), name=type_name)


def _gallery_resolver(spec: AttributeSpec) -> Callable[..., list[AttachmentType]]:
    resolve = spec.resolver

    def resolver(root) -> list[AttachmentType]:
        return [attachment_to_type(attachment_id) for attachment_id in resolve(root.id)]

    return resolver


def _record_resolver(object_type: type) -> Callable[..., Any]:
    def resolver(id: int) -> object_type | None:
        if id <= 0:
            return None
        return object_type(id=id)

    return resolver
