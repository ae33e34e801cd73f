"""Checks shared by the resource and relation pipelines."""

import logging
from typing import Any

from ..document import Document
from ..errors import Error
from ..messages import Translator
from ..pointer import Pointer
from ..specification import FieldDescriptor
from .framework import DATA, ROOT, ValidationContext, ValidationRule

logger = logging.getLogger(__name__)

RESERVED_FIELDS = ("type", "id")


def check_string_member(translator: Translator, parent: dict[str, Any], member: str,
                        pointer: Pointer) -> list[Error]:
    """Check that ``parent[member]`` is present and a non-empty string.

    ``pointer`` locates ``parent``: a missing member is reported there, a
    malformed one at the member itself.
    """
    if member not in parent:
        return [translator.member_required(pointer, member)]

    value = parent[member]
    if not isinstance(value, str):
        return [translator.member_not_string(pointer.child(member), member)]
    if not value:
        return [translator.member_empty(pointer.child(member), member)]

    return []


class IdentifierValidator:
    """Validates a resource identifier and checks that the resource exists."""

    def __init__(self, context: ValidationContext):
        self.context = context

    def validate(self, value: Any, pointer: Pointer, member: str | int,
                 relation: FieldDescriptor | None = None,
                 not_found_pointer: Pointer | None = None) -> list[Error]:
        """Return the errors for the identifier ``value`` located at ``pointer``.

        Args:
            value: Decoded identifier value
            pointer: Location of the identifier
            member: Name used for the identifier in messages (``data`` or an index)
            relation: Relation the identifier belongs to, if its accepted types apply
            not_found_pointer: Where to report a missing resource (default: ``pointer``)
        """
        translator = self.context.translator

        if not isinstance(value, dict):
            return [translator.member_not_object(pointer, member)]

        if "attributes" in value or "relationships" in value:
            return [translator.member_not_identifier(pointer, member)]

        errors = check_string_member(translator, value, "type", pointer)
        if not errors:
            errors.extend(self._check_type(value["type"], pointer.child("type"), relation))
        errors.extend(check_string_member(translator, value, "id", pointer))

        # only well-formed identifiers are looked up
        if not errors and not self.context.specification.exists(value["type"], value["id"]):
            logger.debug(f"Related resource {value['type']}:{value['id']} does not exist")
            errors.append(translator.resource_not_found(not_found_pointer or pointer))

        return errors

    def _check_type(self, resource_type: str, pointer: Pointer,
                    relation: FieldDescriptor | None) -> list[Error]:
        translator = self.context.translator

        if resource_type not in self.context.specification.types():
            return [translator.resource_type_not_recognised(pointer, resource_type)]

        if relation is not None and relation.types and resource_type not in relation.types:
            return [translator.resource_type_not_supported_by_relationship(
                pointer, relation.name, relation.types, relation.to_many
            )]

        return []


class DataMemberRule(ValidationRule):
    """Validate the top-level ``data`` member."""

    def __init__(self, context: ValidationContext, require_object: bool = True):
        super().__init__(context)
        self.require_object = require_object

    @property
    def name(self) -> str:
        return "data_member"

    def validate(self, document: Document) -> None:
        if "data" not in document.json:
            document.add_error(self.translator.member_required(ROOT, "data"))
            return

        if self.require_object and not isinstance(document.json["data"], dict):
            document.add_error(self.translator.member_not_object(DATA, "data"))
