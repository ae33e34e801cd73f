"""Shared fixtures for jsonapi-spec tests."""

import json

import pytest

from jsonapi_spec.builder import RelationBuilder, ResourceBuilder
from jsonapi_spec.specification import Specification, attribute, to_many, to_one


class BlogSpecification(Specification):
    """Blog schema: only podcasts accept client ids and id 999 never exists."""

    FIELDS = {
        "posts": [
            attribute("title"),
            attribute("content"),
            attribute("slug"),
            to_one("author"),
            to_many("tags"),
        ],
        "users": [
            attribute("name"),
        ],
    }

    def __init__(self):
        self.exists_calls: list[tuple[str, str]] = []

    def types(self) -> set[str]:
        return {"posts", "users", "comments", "podcasts", "tags"}

    def fields(self, resource_type):
        return self.FIELDS[resource_type]

    def client_ids(self, resource_type):
        return resource_type == "podcasts"

    def exists(self, resource_type, resource_id):
        self.exists_calls.append((resource_type, resource_id))
        return resource_id != "999"


@pytest.fixture
def specification():
    return BlogSpecification()


@pytest.fixture
def resource_builder(specification):
    return ResourceBuilder(specification)


@pytest.fixture
def relation_builder(specification):
    return RelationBuilder(specification)


@pytest.fixture
def schema_definition():
    """Schema definition file contents equivalent to BlogSpecification."""
    return {
        "resources": {
            "posts": {
                "attributes": ["title", "content", "slug"],
                "relationships": {
                    "author": {"kind": "to-one", "types": ["users"]},
                    "tags": {"kind": "to-many"},
                },
                "ids": ["1", "2"],
            },
            "users": {"attributes": ["name"], "ids": ["1", "123"]},
            "comments": {},
            "podcasts": {"clientIds": True},
            "tags": {"ids": ["1", "100"]},
        }
    }


@pytest.fixture
def schema_file(tmp_path, schema_definition):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema_definition), encoding="utf-8")
    return path
