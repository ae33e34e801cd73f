"""Tests for documents and their typed accessors."""

import pytest

from jsonapi_spec.document import Document, RelationDocument, ResourceDocument, ResourceIdentifier
from jsonapi_spec.errors import Error
from jsonapi_spec.exceptions import InvalidDocumentError


class TestDocument:
    """Test Document validity tracking."""

    def test_new_document_is_valid(self):
        document = Document({"data": None})

        assert document.valid()
        assert not document.invalid()
        assert len(document.errors) == 0

    def test_add_error_invalidates(self):
        document = Document({})

        document.add_error(Error(title="A", detail="a", status="400"))

        assert document.invalid()
        assert not document.valid()

    def test_add_errors(self):
        document = Document({})
        errors = [Error(title="A", detail="a", status="400"), Error(title="B", detail="b", status="400")]

        document.add_errors(errors)

        assert list(document.errors) == errors


class TestResourceDocument:
    """Test ResourceDocument accessors."""

    def test_accessors(self):
        document = ResourceDocument({
            "data": {
                "type": "posts",
                "id": "1",
                "attributes": {"title": "Hello World"},
                "relationships": {
                    "author": {"data": {"type": "users", "id": "123"}},
                    "editor": {"data": None},
                    "tags": {"data": [{"type": "tags", "id": "1"}]},
                },
            }
        })

        assert document.type == "posts"
        assert document.id == "1"
        assert document.identifier() == ResourceIdentifier("posts", "1")
        assert document.attributes == {"title": "Hello World"}
        assert document.relationships == {
            "author": ResourceIdentifier("users", "123"),
            "editor": None,
            "tags": [ResourceIdentifier("tags", "1")],
        }

    def test_create_without_id(self):
        document = ResourceDocument({"data": {"type": "posts"}})

        assert document.id is None
        assert document.identifier() is None
        assert document.attributes == {}
        assert document.relationships == {}

    def test_accessors_require_valid_document(self):
        document = ResourceDocument({"data": {"type": "posts"}})
        document.add_error(Error(title="A", detail="a", status="400"))

        with pytest.raises(InvalidDocumentError) as exc_info:
            document.type

        assert exc_info.value.error_count == 1
        # raw JSON stays readable
        assert document.json["data"]["type"] == "posts"


class TestRelationDocument:
    """Test RelationDocument accessors."""

    def test_to_one(self):
        document = RelationDocument({"data": {"type": "users", "id": "1"}})

        assert document.data == ResourceIdentifier("users", "1")
        assert document.identifiers() == [ResourceIdentifier("users", "1")]

    def test_to_many(self):
        document = RelationDocument({"data": [{"type": "tags", "id": "1"}, {"type": "tags", "id": "2"}]})

        assert document.identifiers() == [ResourceIdentifier("tags", "1"), ResourceIdentifier("tags", "2")]

    def test_invalid(self):
        document = RelationDocument({"data": False})
        document.add_error(Error(title="A", detail="a", status="400"))

        with pytest.raises(InvalidDocumentError):
            document.identifiers()


class TestResourceIdentifier:
    """Test ResourceIdentifier."""

    def test_to_dict(self):
        assert ResourceIdentifier("users", "1").to_dict() == {"type": "users", "id": "1"}
