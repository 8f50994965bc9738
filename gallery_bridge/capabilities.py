"""
Host capabilities consumed by the bridge.

The bridge never looks these up globally; SchemaExtender and GalleryResolver
take them as constructor arguments.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gallery_bridge.models import AttributeSpec


@runtime_checkable
class FieldGroupRegistry(Protocol):
    """Source of field group definitions."""

    def list_groups(self) -> Iterable[Mapping[str, Any]]: ...

    def fields_of(self, group: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]: ...


@runtime_checkable
class SchemaRegistry(Protocol):
    """Schema being built by the host; receives one call per binding."""

    def register_attribute(self, type_name: str, attribute_name: str, spec: AttributeSpec) -> None: ...


@runtime_checkable
class ValueStore(Protocol):
    """Per-record field value storage."""

    def get(self, record_id: int, field_name: str) -> Any: ...


@runtime_checkable
class ImagePredicate(Protocol):
    def is_image(self, attachment_id: int) -> bool: ...


@runtime_checkable
class IdResolver(Protocol):
    """Fallback record -> id extraction for record shapes the resolver does not know."""

    def resolve_id(self, record: Any) -> Any: ...
