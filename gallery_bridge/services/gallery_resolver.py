"""
Gallery Resolver

Turns the stored value of a gallery field into the ordered list of image
attachment ids it references. Runs at query time for every (record, field)
pair, so malformed or missing data degrades to an empty list instead of
raising.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from gallery_bridge.utils.serialization import maybe_unserialize

if TYPE_CHECKING:
    from gallery_bridge.capabilities import IdResolver, ImagePredicate, ValueStore

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def to_int(value: Any) -> int:
    """
    Convert a stored element to an integer the way the host does.

    Strings contribute their leading number ("12abc" -> 12, "1e3" -> 1000,
    "abc" -> 0); floats are truncated; arrays are 1 when non-empty and 0
    otherwise; anything else that is not a number is 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0
        number = match.group(1)
        if number.lstrip("+-").isdigit():
            return int(number)
        return to_int(float(number))
    if isinstance(value, (list, tuple, Mapping)):
        return 1 if value else 0
    return 0


def coerce_ids(values: Any) -> list[int]:
    """Convert every element to an int and drop non-positive results, keeping order."""
    if isinstance(values, Mapping):
        values = values.values()
    return [attachment_id for attachment_id in (to_int(v) for v in values) if attachment_id > 0]


def _numeric_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


class GalleryResolver:
    """
    Resolves gallery field values to attachment ids.

    Stateless apart from its injected collaborators; safe to share between
    concurrent queries.
    """

    def __init__(
        self,
        value_store: ValueStore,
        image_predicate: ImagePredicate,
        id_resolver: IdResolver | None = None,
    ) -> None:
        self.value_store = value_store
        self.image_predicate = image_predicate
        self.id_resolver = id_resolver

    def for_field(self, field_name: str) -> Callable[[Any], list[int]]:
        """Return a one-argument resolver with `field_name` fixed."""

        def resolve_field(record: Any) -> list[int]:
            return self.resolve(record, field_name)

        resolve_field.__name__ = f"resolve_{field_name}"
        return resolve_field

    def record_id(self, record: Any) -> int | None:
        """
        Extract a record id from an object with an `ID` attribute, a mapping
        with an "ID" key, or a bare number. Other shapes, and an `ID` that is
        not numeric, go to the injected IdResolver if there is one.
        """
        if isinstance(record, Mapping):
            record_id = _numeric_id(record.get("ID"))
        else:
            record_id = _numeric_id(getattr(record, "ID", record))
        if record_id is not None:
            return record_id

        if self.id_resolver is not None:
            try:
                return _numeric_id(self.id_resolver.resolve_id(record))
            except Exception as exc:
                logger.debug("IdResolver failed for %r: %s", record, exc)
        return None

    def resolve(self, record: Any, field_name: str) -> list[int]:
        """
        Return the image attachment ids stored in `field_name` on `record`.

        Order is preserved from the stored value; duplicates are kept.
        Returns an empty list for an empty field name, an unresolvable
        record, a missing or malformed value, or when no id is an image.
        """
        if not field_name:
            return []

        record_id = self.record_id(record)
        if not record_id or record_id <= 0:
            return []

        try:
            value = self.value_store.get(record_id, field_name)
        except Exception as exc:
            logger.warning(
                "Reading %s on record %s failed: %s",
                field_name,
                record_id,
                exc,
                extra={"field_name": field_name, "record_id": record_id},
            )
            return []

        if not value:
            return []

        if isinstance(value, (str, bytes)):
            value = maybe_unserialize(value)

        if not isinstance(value, (list, tuple, Mapping)):
            logger.debug("Ignoring non-list value of %s on record %s", field_name, record_id)
            return []

        candidates = coerce_ids(value)
        if not candidates:
            return []

        return [attachment_id for attachment_id in candidates if self._is_image(attachment_id)]

    def _is_image(self, attachment_id: int) -> bool:
        try:
            return bool(self.image_predicate.is_image(attachment_id))
        except Exception as exc:
            logger.debug("Image check failed for attachment %s: %s", attachment_id, exc)
            return False
