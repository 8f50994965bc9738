from .gallery_resolver import GalleryResolver
from .schema_extender import SchemaExtender

__all__ = ["GalleryResolver", "SchemaExtender"]
