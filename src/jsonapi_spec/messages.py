"""Message templates for JSON:API compliance errors.

Every error the validator produces is keyed by one of the template names in
``MESSAGES``. Templates carry ``:placeholder`` markers (``:member``,
``:field``, ``:type``, ``:id``, ``:types``) that are substituted with the
offending names when the error is created. Titles, details and codes can be
overridden per key, e.g. for localization, without touching the rules.

See https://jsonapi.org/format/#errors
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from .errors import Error
from .exceptions import MessageTemplateError
from .pointer import Pointer

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r":([a-z]+)")

NON_COMPLIANT = "Non-Compliant JSON:API Document"


@dataclass(frozen=True)
class MessageTemplate:
    """Title/detail/code triple for one error kind."""
    title: str
    detail: str
    code: str = ""

    @property
    def placeholders(self) -> frozenset[str]:
        """Names that must be supplied to render the detail."""
        return frozenset(_PLACEHOLDER.findall(self.detail))

    def render(self, values: Mapping[str, str]) -> str:
        missing = sorted(self.placeholders - values.keys())
        if missing:
            raise MessageTemplateError(
                f"Missing placeholder values: {', '.join(missing)}", missing=missing
            )
        return _PLACEHOLDER.sub(lambda match: str(values[match.group(1)]), self.detail)


MESSAGES: dict[str, MessageTemplate] = {
    "member_required": MessageTemplate(NON_COMPLIANT, "The member :member is required."),
    "member_object_expected": MessageTemplate(NON_COMPLIANT, "The member :member must be an object."),
    "member_array_expected": MessageTemplate(NON_COMPLIANT, "The member :member must be an array."),
    "member_identifier_expected": MessageTemplate(
        NON_COMPLIANT, "The member :member must be a resource identifier."
    ),
    "member_string_expected": MessageTemplate(NON_COMPLIANT, "The member :member must be a string."),
    "member_empty": MessageTemplate(NON_COMPLIANT, "The member :member cannot be empty."),
    "member_field_not_allowed": MessageTemplate(
        NON_COMPLIANT, "The member :member cannot have a :field field."
    ),
    "member_field_not_supported": MessageTemplate(
        NON_COMPLIANT, "The field :field is not a supported :type."
    ),
    "field_expects_to_one": MessageTemplate(NON_COMPLIANT, "The field :field must be a to-one relation."),
    "field_expects_to_many": MessageTemplate(NON_COMPLIANT, "The field :field must be a to-many relation."),
    "resource_type_not_supported": MessageTemplate(
        "Not Supported", "Resource type :type is not supported by this endpoint."
    ),
    "resource_type_not_supported_by_to_one_relationship": MessageTemplate(
        "Unprocessable Entity",
        "The :field field must be a to-one relationship containing :types resources.",
    ),
    "resource_type_not_supported_by_to_many_relationship": MessageTemplate(
        "Unprocessable Entity",
        "The :field field must be a to-many relationship containing :types resources.",
    ),
    "resource_type_not_recognised": MessageTemplate("Not Supported", "Resource type :type is not recognised."),
    "resource_id_not_supported": MessageTemplate(
        "Not Supported", "Resource id :id is not supported by this endpoint."
    ),
    "resource_client_ids_not_supported": MessageTemplate(
        "Not Supported", "Resource type :type does not support client-generated IDs."
    ),
    "resource_exists": MessageTemplate("Conflict", "Resource :id already exists."),
    "resource_not_found": MessageTemplate("Not Found", "The related resource does not exist."),
    "resource_field_exists_in_attributes_and_relationships": MessageTemplate(
        NON_COMPLIANT, "The :field field cannot exist as an attribute and a relationship."
    ),
}


def _join_types(types: Iterable[str]) -> str:
    return ", ".join(sorted(types))


class Translator:
    """Builds pointer-tagged errors from the message catalog.

    Each method corresponds to one template key and fixes the HTTP status
    for that kind of violation.
    """

    def __init__(self, overrides: Mapping[str, Mapping[str, str]] | None = None):
        self.messages = dict(MESSAGES)
        for key, values in (overrides or {}).items():
            if key not in MESSAGES:
                raise MessageTemplateError(f"Unknown message key: {key}", key=key)
            self.messages[key] = replace(self.messages[key], **dict(values))
            logger.debug(f"Overriding message template: {key}")

    def make(self, key: str, status: str, pointer: Pointer, **values: str) -> Error:
        """Create an error from the template stored under ``key``."""
        try:
            template = self.messages[key]
        except KeyError:
            raise MessageTemplateError(f"Unknown message key: {key}", key=key) from None

        try:
            detail = template.render(values)
        except MessageTemplateError as e:
            raise MessageTemplateError(f"{key}: {e}", key=key, missing=e.missing) from e

        return Error(
            title=template.title,
            detail=detail,
            status=status,
            pointer=pointer,
            code=template.code or None,
        )

    def member_required(self, pointer: Pointer, member: str) -> Error:
        return self.make("member_required", "400", pointer, member=member)

    def member_not_object(self, pointer: Pointer, member: str | int) -> Error:
        return self.make("member_object_expected", "400", pointer, member=str(member))

    def member_not_array(self, pointer: Pointer, member: str | int) -> Error:
        return self.make("member_array_expected", "400", pointer, member=str(member))

    def member_not_identifier(self, pointer: Pointer, member: str | int) -> Error:
        return self.make("member_identifier_expected", "400", pointer, member=str(member))

    def member_not_string(self, pointer: Pointer, member: str) -> Error:
        return self.make("member_string_expected", "400", pointer, member=member)

    def member_empty(self, pointer: Pointer, member: str) -> Error:
        return self.make("member_empty", "400", pointer, member=member)

    def member_field_not_allowed(self, pointer: Pointer, member: str, field: str) -> Error:
        return self.make("member_field_not_allowed", "400", pointer, member=member, field=field)

    def member_field_not_supported(self, pointer: Pointer, field: str, kind: str) -> Error:
        return self.make("member_field_not_supported", "400", pointer, field=field, type=kind)

    def field_expects_to_one(self, pointer: Pointer, field: str) -> Error:
        return self.make("field_expects_to_one", "400", pointer, field=field)

    def field_expects_to_many(self, pointer: Pointer, field: str) -> Error:
        return self.make("field_expects_to_many", "400", pointer, field=field)

    def resource_type_not_supported(self, pointer: Pointer, resource_type: str) -> Error:
        return self.make("resource_type_not_supported", "409", pointer, type=resource_type)

    def resource_type_not_supported_by_relationship(
        self, pointer: Pointer, field: str, types: Iterable[str], to_many: bool
    ) -> Error:
        key = (
            "resource_type_not_supported_by_to_many_relationship"
            if to_many
            else "resource_type_not_supported_by_to_one_relationship"
        )
        return self.make(key, "422", pointer, field=field, types=_join_types(types))

    def resource_type_not_recognised(self, pointer: Pointer, resource_type: str) -> Error:
        return self.make("resource_type_not_recognised", "400", pointer, type=resource_type)

    def resource_id_not_supported(self, pointer: Pointer, resource_id: str) -> Error:
        return self.make("resource_id_not_supported", "409", pointer, id=resource_id)

    def resource_client_ids_not_supported(self, pointer: Pointer, resource_type: str) -> Error:
        return self.make("resource_client_ids_not_supported", "403", pointer, type=resource_type)

    def resource_not_found(self, pointer: Pointer) -> Error:
        return self.make("resource_not_found", "404", pointer)

    def resource_field_exists_in_attributes_and_relationships(self, pointer: Pointer, field: str) -> Error:
        return self.make(
            "resource_field_exists_in_attributes_and_relationships", "400", pointer, field=field
        )
