"""
Bridge Data Model

Pydantic models for the host's field group records, plus the two artifacts
the bridge produces: the AttributeSpec handed to the schema registry and the
GalleryFieldBinding that ties a published attribute to its source field.

Host records arrive as mappings (or objects exposing the same attributes)
with many more keys than the bridge reads; unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LocationRule(BaseModel):
    """One (param, operator, value) condition of a field group's location."""

    model_config = ConfigDict(from_attributes=True, extra="ignore", frozen=True)

    param: str
    operator: str
    value: str

    def targets_post_type(self) -> bool:
        return self.param == "post_type" and self.operator == "=="


class FieldDefinition(BaseModel):
    """A field declared inside a field group."""

    model_config = ConfigDict(from_attributes=True, extra="ignore", frozen=True)

    name: str = Field(min_length=1)
    type: str
    label: str | None = None
    key: str | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.name


class FieldGroup(BaseModel):
    """
    A named bundle of field definitions.

    `location` is kept raw (a list of OR-groups, each a list of AND-ed rule
    mappings) so that a single malformed rule can be skipped without
    discarding the whole group.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore", frozen=True)

    key: str = ""
    title: str = ""
    location: list[Any] | None = Field(default_factory=list)


@dataclass(frozen=True)
class AttributeSpec:
    """
    Description of one list-valued attribute, as passed to
    SchemaRegistry.register_attribute().

    Attributes:
        list_of:  Element type name, e.g. "Attachment".
        metadata: UI metadata (`label`, `group`).
        resolver: Callable taking the parent record, returning attachment ids.
        args:     Arguments bound into the resolver at registration time.
    """

    list_of: str
    metadata: dict[str, str]
    resolver: Callable[[Any], list[int]]
    args: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GalleryFieldBinding:
    """A gallery attribute registered on one content type."""

    type_name: str
    attribute_name: str
    field_name: str
    label: str
    group: str
    resolver: Callable[[Any], list[int]] = field(repr=False, compare=False)

    def resolve(self, record: Any) -> list[int]:
        return self.resolver(record)

    def to_attribute_spec(self, list_of: str) -> AttributeSpec:
        return AttributeSpec(
            list_of=list_of,
            metadata={"label": self.label, "group": self.group},
            resolver=self.resolver,
            args={"field": self.field_name},
        )
