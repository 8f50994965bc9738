"""
Schema Extender

Walks the host's field groups once at schema initialisation and publishes
every gallery field as a list-of-attachments attribute on each content type
its group is assigned to.

Every failure is contained at the smallest unit: a malformed rule
contributes no post type, a malformed field or group contributes no
attributes, and a missing field registry disables the pass entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gallery_bridge.config import Settings, get_settings
from gallery_bridge.exceptions import MalformedRecordError, MissingDependencyError
from gallery_bridge.models import FieldDefinition, FieldGroup, GalleryFieldBinding, LocationRule
from gallery_bridge.utils.casing import schema_type_name, to_snake_case

if TYPE_CHECKING:
    from gallery_bridge.capabilities import FieldGroupRegistry, SchemaRegistry
    from gallery_bridge.services.gallery_resolver import GalleryResolver

logger = logging.getLogger(__name__)


def _parse(model: type, raw: Any, unit: str) -> Any:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecordError(unit, f"{exc.error_count()} validation error(s)") from exc


def post_types_for_group(group: FieldGroup) -> list[str]:
    """
    Return the post types a field group is assigned to.

    The location is a list of OR-groups of AND-ed rules; every
    `post_type == <value>` rule contributes its value. Duplicates are
    dropped, first occurrence wins the position.
    """
    post_types: list[str] = []
    for or_group in group.location or []:
        if not isinstance(or_group, Iterable) or isinstance(or_group, (str, bytes)):
            logger.debug("Skipping malformed location group in %s", group.key or group.title)
            continue
        for raw_rule in or_group:
            try:
                rule = _parse(LocationRule, raw_rule, "location rule")
            except MalformedRecordError as exc:
                logger.debug("Skipping rule in %s: %s", group.key or group.title, exc.message)
                continue
            if rule.targets_post_type() and rule.value not in post_types:
                post_types.append(rule.value)
    return post_types


class SchemaExtender:
    """
    Publishes gallery fields as schema attributes.

    Args:
        field_groups: Host field group registry. May be None when the host
                      plugin is not active; extend() is then a no-op.
        resolver:     GalleryResolver that published attributes delegate to.
        settings:     Naming and field type configuration.
    """

    def __init__(
        self,
        field_groups: FieldGroupRegistry | None,
        resolver: GalleryResolver,
        settings: Settings | None = None,
    ) -> None:
        self.field_groups = field_groups
        self.resolver = resolver
        self.settings = settings or get_settings()

    # ── Naming ────────────────────────────────────────────────────────────────

    def attribute_name(self, field_name: str) -> str:
        return to_snake_case(field_name) + self.settings.attribute_suffix

    def attribute_label(self, field: FieldDefinition) -> str:
        return field.display_label + self.settings.label_suffix

    def type_name(self, post_type: str) -> str | None:
        return schema_type_name(post_type, self.settings.builtin_type_map)

    # ── Registration ──────────────────────────────────────────────────────────

    def extend(self, schema: SchemaRegistry) -> list[GalleryFieldBinding]:
        """
        Register one attribute per (field group, gallery field, content type).

        Returns the bindings that were registered, in registration order.
        Never raises.
        """
        try:
            self._require_registry()
        except MissingDependencyError as exc:
            logger.warning("Gallery bridge disabled: %s", exc.message)
            return []

        bindings: list[GalleryFieldBinding] = []
        try:
            groups = list(self.field_groups.list_groups())
        except Exception as exc:
            logger.warning("Listing field groups failed: %s", exc)
            return []

        for raw_group in groups:
            try:
                bindings.extend(self._extend_group(schema, raw_group))
            except MalformedRecordError as exc:
                logger.debug("Skipping field group: %s", exc.message)

        logger.info("Registered %d gallery attribute(s)", len(bindings))
        return bindings

    def _require_registry(self) -> None:
        registry = self.field_groups
        if registry is None:
            raise MissingDependencyError("field_groups")
        for method in ("list_groups", "fields_of"):
            if not callable(getattr(registry, method, None)):
                raise MissingDependencyError(f"field_groups.{method}")

    def _extend_group(self, schema: SchemaRegistry, raw_group: Any) -> list[GalleryFieldBinding]:
        group = _parse(FieldGroup, raw_group, "field group")

        try:
            raw_fields = list(self.field_groups.fields_of(raw_group) or [])
        except Exception as exc:
            raise MalformedRecordError("field group", f"fields could not be loaded: {exc}") from exc
        if not raw_fields:
            return []

        bindings: list[GalleryFieldBinding] = []
        post_types: list[str] | None = None
        for raw_field in raw_fields:
            try:
                field = _parse(FieldDefinition, raw_field, "field")
            except MalformedRecordError as exc:
                logger.debug("Skipping field in %s: %s", group.key or group.title, exc.message)
                continue
            if field.type != self.settings.gallery_field_type:
                continue

            if post_types is None:
                post_types = post_types_for_group(group)
            for post_type in post_types:
                binding = self._register(schema, post_type, field)
                if binding is not None:
                    bindings.append(binding)
        return bindings

    def _register(self, schema: SchemaRegistry, post_type: str, field: FieldDefinition) -> GalleryFieldBinding | None:
        type_name = self.type_name(post_type)
        if not type_name:
            return None

        binding = GalleryFieldBinding(
            type_name=type_name,
            attribute_name=self.attribute_name(field.name),
            field_name=field.name,
            label=self.attribute_label(field),
            group=self.settings.metadata_group,
            resolver=self.resolver.for_field(field.name),
        )
        try:
            schema.register_attribute(
                binding.type_name,
                binding.attribute_name,
                binding.to_attribute_spec(self.settings.attachment_type),
            )
        except Exception as exc:
            logger.warning(
                "Registering %s.%s failed: %s",
                binding.type_name,
                binding.attribute_name,
                exc,
            )
            return None

        logger.debug(
            "Registered %s.%s -> %s",
            binding.type_name,
            binding.attribute_name,
            field.name,
            extra={
                "type_name": binding.type_name,
                "attribute_name": binding.attribute_name,
                "field_name": field.name,
            },
        )
        return binding
