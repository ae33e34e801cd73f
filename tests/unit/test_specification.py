"""Tests for the schema specification types."""

import pytest

from jsonapi_spec.specification import (
    FieldDescriptor,
    FieldKind,
    StaticSpecification,
    attribute,
    to_many,
    to_one,
)


class TestFieldDescriptor:
    """Test FieldDescriptor helpers."""

    def test_attribute(self):
        field = attribute("title")

        assert field.is_attribute
        assert not field.is_relation
        assert not field.to_one and not field.to_many

    def test_relations(self):
        author = to_one("author", "users")
        tags = to_many("tags")

        assert author.is_relation and author.to_one
        assert author.types == {"users"}
        assert tags.is_relation and tags.to_many
        assert tags.types == frozenset()


class TestStaticSpecification:
    """Test StaticSpecification lookups."""

    def test_types(self, schema_definition):
        spec = StaticSpecification.from_dict(schema_definition)

        assert spec.types() == {"posts", "users", "comments", "podcasts", "tags"}

    def test_fields(self, schema_definition):
        spec = StaticSpecification.from_dict(schema_definition)

        assert list(spec.fields("posts")) == [
            FieldDescriptor("title"),
            FieldDescriptor("content"),
            FieldDescriptor("slug"),
            FieldDescriptor("author", FieldKind.TO_ONE, frozenset({"users"})),
            FieldDescriptor("tags", FieldKind.TO_MANY),
        ]
        assert spec.field("posts", "author").to_one
        assert spec.field("posts", "missing") is None

    def test_client_ids(self, schema_definition):
        spec = StaticSpecification.from_dict(schema_definition)

        assert spec.client_ids("podcasts") is True
        assert spec.client_ids("posts") is False
        assert spec.client_ids("unknown") is False

    def test_exists(self, schema_definition):
        spec = StaticSpecification.from_dict(schema_definition)

        assert spec.exists("users", "123")
        assert not spec.exists("users", "999")
        # no ids listed: every id exists
        assert spec.exists("comments", "anything")
        assert not spec.exists("unknown", "1")

    def test_from_file(self, schema_file):
        spec = StaticSpecification.from_file(schema_file)

        assert "posts" in spec.types()

    def test_from_file_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON in schema file"):
            StaticSpecification.from_file(path)

    def test_from_file_invalid_definition(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text('{"resources": {"posts": {"relationships": {"author": {"kind": "attribute"}}}}}',
                        encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid schema definition"):
            StaticSpecification.from_file(path)

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            StaticSpecification.from_file(tmp_path / "missing.json")
