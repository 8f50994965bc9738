"""Capabilities the host makes available to the bridge."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gallery_bridge.capabilities import FieldGroupRegistry, IdResolver, ImagePredicate, ValueStore


@dataclass
class HostEnvironment:
    """
    Bundle of host collaborators handed to the bridge at bootstrap.

    Attributes:
        field_groups:    Field group registry, None if the field plugin is inactive.
        value_store:     Per-record field value storage.
        image_predicate: Attachment "is this an image" check.
        id_resolver:     Optional fallback record -> id extraction.
        field_types:     Field type tags registered with the field plugin.
    """

    field_groups: FieldGroupRegistry | None = None
    value_store: ValueStore | None = None
    image_predicate: ImagePredicate | None = None
    id_resolver: IdResolver | None = None
    field_types: set[str] = field(default_factory=set)
