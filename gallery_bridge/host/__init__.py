from .environment import HostEnvironment
from .memory import InMemoryFieldGroupRegistry, InMemoryValueStore, MediaLibrary, PostIdResolver

__all__ = [
    "HostEnvironment",
    "InMemoryFieldGroupRegistry",
    "InMemoryValueStore",
    "MediaLibrary",
    "PostIdResolver",
]
