"""Schema information consulted by the validator.

The validator never owns knowledge of which resource types, fields and
resources exist. It asks a ``Specification`` instead. Applications implement
it on top of their own schema registry and data store; ``StaticSpecification``
is an in-memory table used by the command line and by tests.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Kinds of field a resource type can declare."""
    ATTRIBUTE = "attribute"
    TO_ONE = "to-one"
    TO_MANY = "to-many"


@dataclass(frozen=True)
class FieldDescriptor:
    """A declared attribute or relation of a resource type.

    ``types`` lists the resource types a relation accepts. An empty set means
    the relation accepts any recognised type.
    """
    name: str
    kind: FieldKind = FieldKind.ATTRIBUTE
    types: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_attribute(self) -> bool:
        return self.kind == FieldKind.ATTRIBUTE

    @property
    def is_relation(self) -> bool:
        return self.kind != FieldKind.ATTRIBUTE

    @property
    def to_one(self) -> bool:
        return self.kind == FieldKind.TO_ONE

    @property
    def to_many(self) -> bool:
        return self.kind == FieldKind.TO_MANY


def attribute(name: str) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.ATTRIBUTE)


def to_one(name: str, *types: str) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.TO_ONE, frozenset(types))


def to_many(name: str, *types: str) -> FieldDescriptor:
    return FieldDescriptor(name, FieldKind.TO_MANY, frozenset(types))


class Specification(ABC):
    """Read-only schema and identity lookups required by the validation rules."""

    @abstractmethod
    def types(self) -> set[str]:
        """All resource types the server recognises."""
        pass

    @abstractmethod
    def fields(self, resource_type: str) -> Sequence[FieldDescriptor]:
        """Attributes and relations declared by a recognised resource type."""
        pass

    @abstractmethod
    def client_ids(self, resource_type: str) -> bool:
        """Whether create requests for the type may supply their own id."""
        pass

    @abstractmethod
    def exists(self, resource_type: str, resource_id: str) -> bool:
        """Whether the resource identified by type and id exists."""
        pass

    def field(self, resource_type: str, name: str) -> FieldDescriptor | None:
        """Look up a single declared field by name."""
        for descriptor in self.fields(resource_type):
            if descriptor.name == name:
                return descriptor
        return None


class RelationDefinition(BaseModel):
    """Relationship entry of a schema definition file."""
    kind: FieldKind
    types: list[str] = Field(default_factory=list)

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v):
        if v == FieldKind.ATTRIBUTE:
            raise ValueError("relationship kind must be to-one or to-many")
        return v


class ResourceDefinition(BaseModel):
    """Schema of one resource type."""
    client_ids: bool = Field(alias="clientIds", default=False)
    attributes: list[str] = Field(default_factory=list)
    relationships: dict[str, RelationDefinition] = Field(default_factory=dict)
    ids: list[str] | None = None  # None: every id exists

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SchemaDefinition(BaseModel):
    """Complete schema definition, keyed by resource type."""
    resources: dict[str, ResourceDefinition] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class StaticSpecification(Specification):
    """Specification backed by an in-memory schema definition."""

    def __init__(self, definition: SchemaDefinition):
        self.definition = definition
        self._fields: dict[str, list[FieldDescriptor]] = {
            resource_type: _descriptors(resource)
            for resource_type, resource in definition.resources.items()
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StaticSpecification":
        return cls(SchemaDefinition(**data))

    @classmethod
    def from_file(cls, path: str | Path) -> "StaticSpecification":
        """Load a schema definition from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a valid schema definition
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in schema file {path}: {e}") from e

        try:
            spec = cls.from_dict(data)
        except ValidationError as e:
            raise ValueError(f"Invalid schema definition in {path}: {e}") from e

        logger.debug(f"Loaded schema for {len(spec.definition.resources)} resource types from {path}")
        return spec

    def types(self) -> set[str]:
        return set(self.definition.resources)

    def fields(self, resource_type: str) -> Sequence[FieldDescriptor]:
        return self._fields[resource_type]

    def client_ids(self, resource_type: str) -> bool:
        resource = self.definition.resources.get(resource_type)
        return bool(resource and resource.client_ids)

    def exists(self, resource_type: str, resource_id: str) -> bool:
        resource = self.definition.resources.get(resource_type)
        if resource is None:
            return False
        return resource.ids is None or resource_id in resource.ids


def _descriptors(resource: ResourceDefinition) -> list[FieldDescriptor]:
    descriptors = [attribute(name) for name in resource.attributes]
    descriptors.extend(
        FieldDescriptor(name, relation.kind, frozenset(relation.types))
        for name, relation in resource.relationships.items()
    )
    return descriptors
