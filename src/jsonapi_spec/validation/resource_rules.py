"""Rules for create and update resource documents.

Each rule covers one member of the primary resource. Rules skip silently
when ``data`` is missing or not an object, since that is reported once by
``DataMemberRule``.
"""

import logging
from abc import abstractmethod
from typing import Any

from ..document import Document
from ..pointer import Pointer
from ..specification import FieldDescriptor
from .common import RESERVED_FIELDS, IdentifierValidator, check_string_member
from .framework import DATA, ValidationContext, ValidationRule

logger = logging.getLogger(__name__)


def resource_data(document: Document) -> dict[str, Any] | None:
    data = document.json.get("data")
    return data if isinstance(data, dict) else None


class ResourceRule(ValidationRule):
    """Base class for rules that inspect the primary resource object."""

    def validate(self, document: Document) -> None:
        data = resource_data(document)
        if data is not None:
            self.validate_resource(document, data)

    @abstractmethod
    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        pass

    def type_matches(self, data: dict[str, Any]) -> bool:
        """Whether field checks can use the expected type's declared fields."""
        expected_type = self.context.expected_type
        return data.get("type") == expected_type and expected_type in self.specification.types()


class ResourceTypeRule(ResourceRule):
    """Validate ``data.type`` against the type the endpoint expects."""

    @property
    def name(self) -> str:
        return "resource_type"

    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        errors = check_string_member(self.translator, data, "type", DATA)
        if errors:
            document.add_errors(errors)
            return

        if data["type"] != self.context.expected_type:
            document.add_error(
                self.translator.resource_type_not_supported(DATA.child("type"), data["type"])
            )


class ResourceIdRule(ResourceRule):
    """Validate ``data.id`` for create (client ids) or update (expected id)."""

    @property
    def name(self) -> str:
        return "resource_id"

    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        if self.context.expected_id is None:
            self._validate_create(document, data)
        else:
            self._validate_update(document, data)

    def _validate_create(self, document: Document, data: dict[str, Any]) -> None:
        if "id" not in data:
            return

        expected_type = self.context.expected_type
        if not self.specification.client_ids(expected_type):
            document.add_error(
                self.translator.resource_client_ids_not_supported(DATA.child("id"), expected_type)
            )
            return

        document.add_errors(check_string_member(self.translator, data, "id", DATA))

    def _validate_update(self, document: Document, data: dict[str, Any]) -> None:
        errors = check_string_member(self.translator, data, "id", DATA)
        if errors:
            document.add_errors(errors)
            return

        if data["id"] != self.context.expected_id:
            document.add_error(self.translator.resource_id_not_supported(DATA.child("id"), data["id"]))


class DuplicateFieldsRule(ResourceRule):
    """Reject field names used both as an attribute and as a relationship."""

    @property
    def name(self) -> str:
        return "duplicate_fields"

    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        attributes = data.get("attributes")
        relationships = data.get("relationships")
        if not isinstance(attributes, dict) or not isinstance(relationships, dict):
            return

        for field in attributes:
            if field in relationships:
                document.add_error(
                    self.translator.resource_field_exists_in_attributes_and_relationships(DATA, field)
                )


class AttributesRule(ResourceRule):
    """Validate the ``attributes`` member against the declared attributes."""

    @property
    def name(self) -> str:
        return "attributes"

    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        if "attributes" not in data:
            return

        pointer = DATA.child("attributes")
        attributes = data["attributes"]
        if not isinstance(attributes, dict):
            document.add_error(self.translator.member_not_object(pointer, "attributes"))
            return

        supported = None
        if self.type_matches(data):
            supported = {
                descriptor.name
                for descriptor in self.specification.fields(self.context.expected_type)
                if descriptor.is_attribute
            }

        for field in attributes:
            if field in RESERVED_FIELDS:
                document.add_error(self.translator.member_field_not_allowed(pointer, "attributes", field))
            elif supported is not None and field not in supported:
                document.add_error(self.translator.member_field_not_supported(pointer, field, "attribute"))


class RelationshipsRule(ResourceRule):
    """Validate the ``relationships`` member and the linkage of each relation."""

    def __init__(self, context: ValidationContext):
        super().__init__(context)
        self.identifiers = IdentifierValidator(context)

    @property
    def name(self) -> str:
        return "relationships"

    def validate_resource(self, document: Document, data: dict[str, Any]) -> None:
        if "relationships" not in data:
            return

        pointer = DATA.child("relationships")
        relationships = data["relationships"]
        if not isinstance(relationships, dict):
            document.add_error(self.translator.member_not_object(pointer, "relationships"))
            return

        relations = None
        if self.type_matches(data):
            relations = {
                descriptor.name: descriptor
                for descriptor in self.specification.fields(self.context.expected_type)
                if descriptor.is_relation
            }

        for field, relationship in relationships.items():
            if field in RESERVED_FIELDS:
                document.add_error(
                    self.translator.member_field_not_allowed(pointer, "relationships", field)
                )
            elif relations is None:
                continue
            elif field not in relations:
                document.add_error(
                    self.translator.member_field_not_supported(pointer, field, "relationship")
                )
            else:
                self._validate_relationship(document, relations[field], relationship, pointer.child(field))

    def _validate_relationship(self, document: Document, relation: FieldDescriptor,
                               relationship: Any, pointer: Pointer) -> None:
        translator = self.translator

        if not isinstance(relationship, dict):
            document.add_error(translator.member_not_object(pointer, relation.name))
            return

        if "data" not in relationship:
            document.add_error(translator.member_required(pointer, "data"))
            return

        linkage = relationship["data"]
        data_pointer = pointer.child("data")

        if relation.to_one:
            if linkage is None:
                return
            if isinstance(linkage, list):
                document.add_error(translator.field_expects_to_one(data_pointer, relation.name))
                return
            # a missing to-one resource is reported against the relationship
            document.add_errors(self.identifiers.validate(
                linkage, data_pointer, "data", relation=relation, not_found_pointer=pointer
            ))
            return

        if isinstance(linkage, dict):
            document.add_error(translator.field_expects_to_many(data_pointer, relation.name))
            return
        if not isinstance(linkage, list):
            document.add_error(translator.member_not_array(data_pointer, "data"))
            return

        for index, identifier in enumerate(linkage):
            document.add_errors(self.identifiers.validate(
                identifier, data_pointer.child(index), index, relation=relation
            ))
