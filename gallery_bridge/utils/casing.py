import re
from collections.abc import Mapping

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_pascal_case(text):
    words = text.replace("_", " ").replace("-", " ").split(" ")
    return "".join(word[:1].upper() + word[1:] for word in words)


def to_snake_case(text):
    text = _CAMEL_BOUNDARY.sub(r"\1_\2", text)
    text = text.replace("-", "_").replace(" ", "_")
    return text.lower()


def schema_type_name(post_type: str, builtin_map: Mapping[str, str] | None = None) -> str | None:
    """Map a post type name to its schema type name, e.g. 'my_post_type' -> 'MyPostType'."""
    if not isinstance(post_type, str) or not post_type:
        return None
    if builtin_map and post_type in builtin_map:
        return builtin_map[post_type]
    return to_pascal_case(post_type) or None
