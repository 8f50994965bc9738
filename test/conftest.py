"""
Pytest configuration and fixtures for gallery bridge tests
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from gallery_bridge.config import Settings  # noqa: E402
from gallery_bridge.host import (  # noqa: E402
    HostEnvironment,
    InMemoryFieldGroupRegistry,
    InMemoryValueStore,
    MediaLibrary,
    PostIdResolver,
)
from gallery_bridge.services import GalleryResolver  # noqa: E402
from utils.mocks import RecordingSchemaRegistry  # noqa: E402


@pytest.fixture
def settings():
    """Default settings, independent of the developer's environment."""
    return Settings(_env_file=None)


@pytest.fixture
def media_library():
    library = MediaLibrary()
    for attachment_id in (3, 7, 11, 12, 15):
        library.add(attachment_id, "image/jpeg")
    library.add(5, "application/pdf")
    return library


@pytest.fixture
def value_store():
    return InMemoryValueStore()


@pytest.fixture
def field_groups():
    return InMemoryFieldGroupRegistry()


@pytest.fixture
def gallery_resolver(value_store, media_library):
    return GalleryResolver(value_store, media_library)


@pytest.fixture
def schema_registry():
    return RecordingSchemaRegistry()


@pytest.fixture
def host(field_groups, value_store, media_library, settings):
    return HostEnvironment(
        field_groups=field_groups,
        value_store=value_store,
        image_predicate=media_library,
        id_resolver=PostIdResolver(),
        field_types={settings.gallery_field_type, "text", "image"},
    )
