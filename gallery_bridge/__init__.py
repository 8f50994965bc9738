"""
Gallery Field Bridge

Publishes gallery fields defined in a host field registry as list-of-attachment
attributes of a GraphQL schema.
"""

from .models import AttributeSpec, FieldDefinition, FieldGroup, GalleryFieldBinding, LocationRule
from .services import GalleryResolver, SchemaExtender

__all__ = [
    "AttributeSpec",
    "FieldDefinition",
    "FieldGroup",
    "GalleryFieldBinding",
    "GalleryResolver",
    "LocationRule",
    "SchemaExtender",
]

__version__ = "1.0.0"
