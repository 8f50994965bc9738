"""
In-memory host capabilities.

Reference implementations of the capability protocols, used when the bridge
runs outside a real host (tests, the GraphQL demo schema) and as a model for
writing adapters to one.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryFieldGroupRegistry:
    """Field groups and their fields, keyed by group key."""

    def __init__(self) -> None:
        self._groups: dict[str, dict[str, Any]] = {}
        self._fields: dict[str, list[dict[str, Any]]] = {}

    def add_group(self, group: Mapping[str, Any], fields: Iterable[Mapping[str, Any]] = ()) -> None:
        key = group.get("key") or f"group_{len(self._groups) + 1}"
        self._groups[key] = {**group, "key": key}
        self._fields[key] = [dict(f) for f in fields]

    def list_groups(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(group) for group in self._groups.values()]

    def fields_of(self, group: Mapping[str, Any]) -> list[dict[str, Any]]:
        return [dict(f) for f in self._fields.get(group.get("key", ""), [])]


class InMemoryValueStore:
    """Field values per record, stored as the host would return them (lists or serialized text)."""

    def __init__(self) -> None:
        self._values: dict[tuple[int, str], Any] = {}

    def set(self, record_id: int, field_name: str, value: Any) -> None:
        self._values[(record_id, field_name)] = value

    def get(self, record_id: int, field_name: str) -> Any:
        return self._values.get((record_id, field_name), "")


class MediaLibrary:
    """Attachment ids and their MIME types; an attachment is an image if its MIME type is image/*."""

    def __init__(self) -> None:
        self._mime_types: dict[int, str] = {}

    def add(self, attachment_id: int, mime_type: str) -> None:
        self._mime_types[attachment_id] = mime_type

    def remove(self, attachment_id: int) -> None:
        self._mime_types.pop(attachment_id, None)

    def is_image(self, attachment_id: int) -> bool:
        return self._mime_types.get(attachment_id, "").startswith("image/")


class PostIdResolver:
    """
    Fallback id extraction for records exposing a lowercase `id` or a
    `post_id`, as ORM rows and API payloads do.
    """

    def resolve_id(self, record: Any) -> Any:
        for name in ("id", "post_id"):
            if isinstance(record, Mapping):
                if name in record:
                    return record[name]
            elif hasattr(record, name):
                return getattr(record, name)
        return None
