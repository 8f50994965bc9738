from .registry import StrawberrySchemaRegistry
from .types import AttachmentType

__all__ = ["AttachmentType", "StrawberrySchemaRegistry"]
