"""
Decoding of serialized meta values.

Gallery values are stored by the host as PHP ``serialize()`` output, e.g.
``a:2:{i:0;i:12;i:1;s:2:"15";}``. Hosts usually hand them over already
decoded, but raw rows read straight from the meta table are text. Some
importers write JSON arrays instead, so that form is accepted too.

Only scalars and arrays are decoded. Serialized objects are rejected.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from gallery_bridge.exceptions import SerializedValueError

logger = logging.getLogger(__name__)

_SERIALIZED_SHAPE = re.compile(r"^(?:N;|b:[01];|i:-?\d+;|d:[^;]+;|s:\d+:\".*\";|a:\d+:\{.*\})$", re.DOTALL)


def is_serialized(text: str) -> bool:
    """Return True if the text has the outer shape of a PHP serialized scalar or array."""
    return bool(_SERIALIZED_SHAPE.match(text.strip()))


def unserialize(data: str | bytes) -> Any:
    """
    Decode PHP ``serialize()`` output.

    Arrays are returned as dicts in their stored order; string lengths are
    byte lengths of the UTF-8 encoding, as PHP writes them.

    Raises:
        SerializedValueError: The data is truncated, has trailing bytes, or
            contains a type this decoder does not handle.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    value, offset = _parse(raw, 0)
    if offset != len(raw):
        raise SerializedValueError("trailing data after value", offset)
    return value


def maybe_unserialize(value: Any) -> Any:
    """
    Decode a stored value if it is serialized text, otherwise return it unchanged.

    Tries PHP serialization first, then a JSON array. Text that decodes as
    neither is returned as-is; decoding errors never reach the caller.
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return value
    if not isinstance(value, str):
        return value

    text = value.strip()
    if is_serialized(text):
        try:
            return unserialize(text)
        except SerializedValueError as exc:
            logger.debug("Ignoring undecodable serialized value: %s", exc.message)
            return value

    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.debug("Ignoring undecodable JSON value: %s", exc)
            return value
        if isinstance(decoded, list):
            return decoded

    return value


# ── Parser ────────────────────────────────────────────────────────────────────


def _read_until(raw: bytes, offset: int, terminator: bytes) -> tuple[bytes, int]:
    end = raw.find(terminator, offset)
    if end < 0:
        raise SerializedValueError(f"expected {terminator!r}", offset)
    return raw[offset:end], end + len(terminator)


def _expect(raw: bytes, offset: int, token: bytes) -> int:
    if raw[offset : offset + len(token)] != token:
        raise SerializedValueError(f"expected {token!r}", offset)
    return offset + len(token)


def _parse_int(token: bytes, offset: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise SerializedValueError(f"invalid integer {token!r}", offset) from None


def _parse_float(token: bytes, offset: int) -> float:
    special = {b"INF": float("inf"), b"-INF": float("-inf"), b"NAN": float("nan")}
    if token in special:
        return special[token]
    try:
        return float(token)
    except ValueError:
        raise SerializedValueError(f"invalid float {token!r}", offset) from None


def _parse(raw: bytes, offset: int) -> tuple[Any, int]:
    tag = raw[offset : offset + 2]

    if tag == b"N;":
        return None, offset + 2

    if tag == b"b:":
        token, end = _read_until(raw, offset + 2, b";")
        if token not in (b"0", b"1"):
            raise SerializedValueError(f"invalid boolean {token!r}", offset)
        return token == b"1", end

    if tag == b"i:":
        token, end = _read_until(raw, offset + 2, b";")
        return _parse_int(token, offset), end

    if tag == b"d:":
        token, end = _read_until(raw, offset + 2, b";")
        return _parse_float(token, offset), end

    if tag == b"s:":
        token, start = _read_until(raw, offset + 2, b":")
        length = _parse_int(token, offset)
        start = _expect(raw, start, b'"')
        end = start + length
        if end > len(raw):
            raise SerializedValueError("string runs past end of data", offset)
        text = raw[start:end]
        end = _expect(raw, end, b'";')
        return text.decode("utf-8", errors="replace"), end

    if tag == b"a:":
        token, cursor = _read_until(raw, offset + 2, b":")
        count = _parse_int(token, offset)
        cursor = _expect(raw, cursor, b"{")
        items: dict[Any, Any] = {}
        for _ in range(count):
            key, cursor = _parse(raw, cursor)
            if not isinstance(key, (int, str)) or isinstance(key, bool):
                raise SerializedValueError("array keys must be integers or strings", cursor)
            items[key], cursor = _parse(raw, cursor)
        cursor = _expect(raw, cursor, b"}")
        return items, cursor

    raise SerializedValueError(f"unsupported type tag {tag[:1]!r}", offset)
