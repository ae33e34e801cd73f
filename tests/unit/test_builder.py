"""Tests for document builders."""

import json
import logging

import pytest

from jsonapi_spec.builder import RelationBuilder, ResourceBuilder, decode
from jsonapi_spec.document import RelationDocument, ResourceDocument
from jsonapi_spec.exceptions import UnexpectedDocumentError
from jsonapi_spec.messages import Translator
from jsonapi_spec.pointer import Pointer

CREATE_POST = json.dumps({"data": {"type": "posts", "attributes": {"title": "Hello World"}}})


class TestDecode:
    """Test request body decoding."""

    def test_object(self):
        assert decode('{"data": null}') == {"data": None}

    def test_bytes(self):
        assert decode(b'{"data": null}') == {"data": None}
        assert decode(bytearray(b'{"data": []}')) == {"data": []}

    @pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
    def test_empty(self, raw):
        with pytest.raises(UnexpectedDocumentError, match="Expecting JSON to decode."):
            decode(raw)

    def test_invalid_json(self):
        with pytest.raises(UnexpectedDocumentError, match="Invalid JSON.") as exc_info:
            decode('{"data": {}"')

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_invalid_utf8(self):
        with pytest.raises(UnexpectedDocumentError):
            decode(b"\xff\xfe{")

    @pytest.mark.parametrize("raw", ["true", "false", '""', '"foo"', '"1"', "1", "0.1", "[]", "null"])
    def test_non_object(self, raw):
        with pytest.raises(UnexpectedDocumentError, match="decode to an object"):
            decode(raw)


class TestResourceBuilder:
    """Test ResourceBuilder orchestration."""

    def test_malformed_json_raises_before_rules(self, resource_builder):
        calls = []

        with pytest.raises(UnexpectedDocumentError):
            resource_builder.expects("posts", "1").using(calls.append).build('{"data": {}"')

        assert calls == []

    @pytest.mark.parametrize("raw", ["true", "[]", '"foo"'])
    def test_non_object_raises(self, resource_builder, raw):
        with pytest.raises(UnexpectedDocumentError):
            resource_builder.expects("posts", "1").build(raw)

    def test_build_returns_resource_document(self, resource_builder):
        document = resource_builder.expects("posts").build(CREATE_POST)

        assert isinstance(document, ResourceDocument)
        assert document.valid()

    def test_custom_rule_exception_propagates(self, resource_builder):
        ex = RuntimeError("Boom!")

        def boom(document):
            raise ex

        with pytest.raises(RuntimeError) as exc_info:
            resource_builder.expects("posts", None).using(boom).build(CREATE_POST)

        assert exc_info.value is ex

    def test_custom_rules_run_after_built_in_rules(self, resource_builder):
        seen = []

        def first(document):
            seen.append(("first", len(document.errors)))

        def second(document):
            seen.append(("second", len(document.errors)))
            document.add_error(Translator().member_required(Pointer.root().child("meta"), "meta"))

        document = resource_builder.expects("posts").using(first).using([second]).build(
            json.dumps({"data": {"type": "posts", "attributes": {"foo": "bar"}}})
        )

        assert seen == [("first", 1), ("second", 1)]
        assert document.errors.pointers() == ["/data/attributes", "/meta"]

    def test_custom_rule_object(self, resource_builder):
        class RequireMeta:
            def validate(self, document):
                if "meta" not in document.json:
                    document.add_error(Translator().member_required(Pointer.root(), "meta"))

        document = resource_builder.expects("posts").using(RequireMeta()).build(CREATE_POST)

        assert document.errors.to_list()[0]["detail"] == "The member meta is required."

    def test_custom_translator(self, specification):
        translator = Translator({"member_required": {"title": "Invalid"}})
        document = ResourceBuilder(specification, translator).expects("posts").build("{}")

        assert document.errors.to_list()[0]["title"] == "Invalid"

    def test_expects_required(self, resource_builder):
        with pytest.raises(RuntimeError, match="expects"):
            resource_builder.build(CREATE_POST)

    def test_logs_build_start_and_finish(self, resource_builder, caplog):
        with caplog.at_level(logging.INFO, logger="jsonapi_spec.builder"):
            resource_builder.expects("posts").build("{}")

        assert [record.getMessage() for record in caplog.records] == [
            "ResourceBuilder running 6 rule(s)",
            "ResourceBuilder completed with 1 error(s)",
        ]

    def test_unrecognised_type(self, resource_builder):
        with pytest.raises(ValueError, match="Resource type widgets is not recognised"):
            resource_builder.expects("widgets")

    def test_builds_are_independent(self, resource_builder):
        resource_builder.expects("posts")

        invalid = resource_builder.build("{}")
        valid = resource_builder.build(CREATE_POST)

        assert invalid.invalid()
        assert valid.valid()


class TestRelationBuilder:
    """Test RelationBuilder orchestration."""

    def test_build_returns_relation_document(self, relation_builder):
        document = relation_builder.expects("posts", "author").build(b'{"data": null}')

        assert isinstance(document, RelationDocument)
        assert document.valid()

    def test_expects_required(self, specification):
        with pytest.raises(RuntimeError, match="expects"):
            RelationBuilder(specification).build('{"data": null}')

    def test_custom_rules(self, relation_builder):
        document = relation_builder.expects("posts", "tags").using(
            lambda document: document.add_error(Translator().resource_not_found(Pointer.root()))
        ).build('{"data": []}')

        assert document.errors.pointers() == ["/"]
