"""
Tests for SchemaExtender

Field group discovery, location rule parsing, naming and attribute
registration. Malformed input never raises out of extend().
"""

from unittest.mock import MagicMock

import pytest

from gallery_bridge.models import AttributeSpec, FieldGroup, GalleryFieldBinding
from gallery_bridge.services.schema_extender import SchemaExtender, post_types_for_group
from utils.mocks import FailingFieldGroupRegistry, Post, RejectingSchemaRegistry, gallery_group

GALLERY = {"name": "projectImages", "label": "Project images", "type": "galerie-4"}


@pytest.fixture
def extender(field_groups, gallery_resolver, settings):
    return SchemaExtender(field_groups, gallery_resolver, settings)


# ══════════════════════════════════════════════════════════════════════════════
# 1. Location rules
# ══════════════════════════════════════════════════════════════════════════════


class TestPostTypesForGroup:
    def _group(self, location):
        return FieldGroup.model_validate({"key": "group_1", "location": location})

    def test_or_groups_each_contribute(self):
        group = self._group(
            [
                [{"param": "post_type", "operator": "==", "value": "post"}],
                [{"param": "post_type", "operator": "==", "value": "page"}],
            ]
        )
        assert post_types_for_group(group) == ["post", "page"]

    def test_and_conditions_each_contribute(self):
        group = self._group(
            [
                [
                    {"param": "post_type", "operator": "==", "value": "decoration"},
                    {"param": "post_taxonomy", "operator": "==", "value": "category:news"},
                ]
            ]
        )
        assert post_types_for_group(group) == ["decoration"]

    def test_duplicates_removed(self):
        rule = {"param": "post_type", "operator": "==", "value": "post"}
        group = self._group([[rule], [rule, rule]])
        assert post_types_for_group(group) == ["post"]

    def test_other_operators_ignored(self):
        group = self._group([[{"param": "post_type", "operator": "!=", "value": "page"}]])
        assert post_types_for_group(group) == []

    def test_other_params_ignored(self):
        group = self._group([[{"param": "page_template", "operator": "==", "value": "post"}]])
        assert post_types_for_group(group) == []

    def test_no_location(self):
        assert post_types_for_group(self._group([])) == []
        assert post_types_for_group(self._group(None)) == []

    def test_malformed_rules_skipped(self):
        group = self._group(
            [
                [{"param": "post_type"}, "garbage", None],
                "not a group",
                42,
                [{"param": "post_type", "operator": "==", "value": "page"}],
            ]
        )
        assert post_types_for_group(group) == ["page"]


# ══════════════════════════════════════════════════════════════════════════════
# 2. Naming
# ══════════════════════════════════════════════════════════════════════════════


class TestNaming:
    def test_attribute_name(self, extender):
        assert extender.attribute_name("projectImages") == "project_images_gallery"
        assert extender.attribute_name("My-Field Name") == "my_field_name_gallery"

    def test_type_name(self, extender):
        assert extender.type_name("post") == "Post"
        assert extender.type_name("page") == "Page"
        assert extender.type_name("my_post_type") == "MyPostType"

    def test_label_uses_field_label(self, extender):
        from gallery_bridge.models import FieldDefinition

        field = FieldDefinition(name="hero", label="Hero slides", type="galerie-4")
        assert extender.attribute_label(field) == "Hero slides (Galerie)"

    def test_label_falls_back_to_name(self, extender):
        from gallery_bridge.models import FieldDefinition

        assert extender.attribute_label(FieldDefinition(name="hero", label="", type="galerie-4")) == "hero (Galerie)"
        assert extender.attribute_label(FieldDefinition(name="hero", type="galerie-4")) == "hero (Galerie)"


# ══════════════════════════════════════════════════════════════════════════════
# 3. extend()
# ══════════════════════════════════════════════════════════════════════════════


class TestExtend:
    def test_post_and_page_produce_two_bindings(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_gallery", ["post", "page"], [GALLERY]))

        bindings = extender.extend(schema_registry)

        assert sorted(schema_registry.names()) == [
            ("Page", "project_images_gallery"),
            ("Post", "project_images_gallery"),
        ]
        assert len(bindings) == 2
        assert all(isinstance(b, GalleryFieldBinding) for b in bindings)

    def test_and_group_targets_each_post_type(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_gallery", ["post", "page"], [GALLERY], or_groups=False))
        extender.extend(schema_registry)
        assert sorted(schema_registry.names()) == [
            ("Page", "project_images_gallery"),
            ("Post", "project_images_gallery"),
        ]

    def test_custom_post_type(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_gallery", ["my_post_type"], [GALLERY]))
        extender.extend(schema_registry)
        assert schema_registry.names() == [("MyPostType", "project_images_gallery")]

    def test_attribute_spec(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_gallery", ["post"], [GALLERY]))
        extender.extend(schema_registry)

        spec = schema_registry.spec_for("Post", "project_images_gallery")
        assert isinstance(spec, AttributeSpec)
        assert spec.list_of == "Attachment"
        assert spec.metadata == {"label": "Project images (Galerie)", "group": "ACF Galerie 4"}
        assert spec.args == {"field": "projectImages"}
        assert callable(spec.resolver)

    def test_resolver_bound_to_raw_field_name(self, extender, field_groups, schema_registry, value_store):
        field_groups.add_group(*gallery_group("group_gallery", ["post", "page"], [GALLERY]))
        value_store.set(1, "projectImages", [3, 5, 7])
        value_store.set(2, "projectImages", [11])
        value_store.set(1, "project_images", [12])
        extender.extend(schema_registry)

        post_spec = schema_registry.spec_for("Post", "project_images_gallery")
        page_spec = schema_registry.spec_for("Page", "project_images_gallery")
        assert post_spec.resolver(Post(1)) == [3, 7]
        assert post_spec.resolver({"ID": 2}) == [11]
        assert page_spec.resolver(1) == [3, 7]

    def test_group_without_location_registers_nothing(self, extender, field_groups, schema_registry):
        field_groups.add_group({"key": "group_none", "location": []}, [GALLERY])
        field_groups.add_group({"key": "group_missing"}, [GALLERY])
        assert extender.extend(schema_registry) == []
        assert schema_registry.calls == []

    def test_non_gallery_fields_ignored(self, extender, field_groups, schema_registry):
        fields = [
            {"name": "subtitle", "label": "Subtitle", "type": "text"},
            {"name": "cover", "label": "Cover", "type": "image"},
            {"name": "photos", "label": "Photos", "type": "gallery"},
        ]
        field_groups.add_group(*gallery_group("group_mixed", ["post", "page"], fields))
        extender.extend(schema_registry)
        assert schema_registry.calls == []

    def test_only_gallery_fields_of_mixed_group(self, extender, field_groups, schema_registry):
        fields = [{"name": "subtitle", "type": "text"}, GALLERY, {"name": "heroSlides", "type": "galerie-4"}]
        field_groups.add_group(*gallery_group("group_mixed", ["post"], fields))
        extender.extend(schema_registry)
        assert schema_registry.names() == [
            ("Post", "project_images_gallery"),
            ("Post", "hero_slides_gallery"),
        ]

    def test_group_without_fields_skipped(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_empty", ["post"], []))
        assert extender.extend(schema_registry) == []

    def test_configured_field_type(self, field_groups, gallery_resolver, settings, schema_registry):
        custom = settings.model_copy(update={"gallery_field_type": "photo-gallery", "attribute_suffix": "_photos"})
        field_groups.add_group(*gallery_group("group_1", ["post"], [{"name": "shots", "type": "photo-gallery"}, GALLERY]))
        SchemaExtender(field_groups, gallery_resolver, custom).extend(schema_registry)
        assert schema_registry.names() == [("Post", "shots_photos")]

    def test_same_field_in_two_groups_registers_twice(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_a", ["post"], [GALLERY]))
        field_groups.add_group(*gallery_group("group_b", ["post"], [dict(GALLERY, label="Second")]))
        extender.extend(schema_registry)

        assert schema_registry.names() == [("Post", "project_images_gallery")] * 2
        # the registry keeps the last registration
        assert schema_registry.spec_for("Post", "project_images_gallery").metadata["label"] == "Second (Galerie)"


# ══════════════════════════════════════════════════════════════════════════════
# 4. Degradation
# ══════════════════════════════════════════════════════════════════════════════


class TestExtendDegradation:
    def test_missing_registry_is_noop(self, gallery_resolver, settings, schema_registry, caplog):
        bindings = SchemaExtender(None, gallery_resolver, settings).extend(schema_registry)
        assert bindings == []
        assert schema_registry.calls == []
        assert "disabled" in caplog.text

    def test_registry_without_capabilities_is_noop(self, gallery_resolver, settings, schema_registry):
        registry = object()
        assert SchemaExtender(registry, gallery_resolver, settings).extend(schema_registry) == []

    def test_list_groups_failure(self, gallery_resolver, settings, schema_registry):
        registry = FailingFieldGroupRegistry(fail_on="list_groups")
        assert SchemaExtender(registry, gallery_resolver, settings).extend(schema_registry) == []

    def test_fields_of_failure_skips_group(self, gallery_resolver, settings, schema_registry):
        group, _ = gallery_group("group_1", ["post"], [GALLERY])
        registry = FailingFieldGroupRegistry(fail_on="fields_of", groups=[group])
        assert SchemaExtender(registry, gallery_resolver, settings).extend(schema_registry) == []

    def test_malformed_fields_skipped(self, extender, field_groups, schema_registry):
        fields = [
            {"label": "No name", "type": "galerie-4"},
            {"name": "", "type": "galerie-4"},
            {"name": "noType"},
            "garbage",
            None,
            GALLERY,
        ]
        field_groups.add_group(*gallery_group("group_1", ["post"], []))
        registry = MagicMock()
        registry.list_groups.return_value = field_groups.list_groups()
        registry.fields_of.return_value = fields

        SchemaExtender(registry, extender.resolver, extender.settings).extend(schema_registry)
        assert schema_registry.names() == [("Post", "project_images_gallery")]

    def test_malformed_group_skipped(self, gallery_resolver, settings, schema_registry):
        good, _ = gallery_group("group_good", ["page"], [GALLERY])
        registry = MagicMock()
        registry.list_groups.return_value = ["garbage", {"key": "bad", "location": "post"}, good]
        registry.fields_of.return_value = [GALLERY]

        SchemaExtender(registry, gallery_resolver, settings).extend(schema_registry)
        assert schema_registry.names() == [("Page", "project_images_gallery")]

    def test_unmappable_post_type_skipped(self, extender, field_groups, schema_registry):
        field_groups.add_group(*gallery_group("group_1", ["", "_", "page"], [GALLERY]))
        extender.extend(schema_registry)
        assert schema_registry.names() == [("Page", "project_images_gallery")]

    def test_rejected_registration_does_not_stop_others(self, field_groups, gallery_resolver, settings):
        schema = RejectingSchemaRegistry(rejected_types={"Post"})
        field_groups.add_group(*gallery_group("group_1", ["post", "page"], [GALLERY]))

        bindings = SchemaExtender(field_groups, gallery_resolver, settings).extend(schema)

        assert [b.type_name for b in bindings] == ["Page"]
        assert schema.names() == [("Page", "project_images_gallery")]
