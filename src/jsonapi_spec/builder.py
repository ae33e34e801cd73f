"""Entry points that decode a request body and validate it.

Typical use::

    document = ResourceBuilder(specification).expects("posts", None).build(body)
    if document.invalid():
        return {"errors": document.errors.to_list()}

``expects()`` selects what the endpoint expects, ``using()`` appends custom
rules that run after the built-in ones, and ``build()`` returns the
validated document.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from .document import Document, RelationDocument, ResourceDocument
from .exceptions import UnexpectedDocumentError
from .messages import Translator
from .specification import FieldDescriptor, Specification
from .validation import (
    AttributesRule,
    DataMemberRule,
    DuplicateFieldsRule,
    RelationshipsRule,
    ResourceIdRule,
    ResourceTypeRule,
    ToManyRule,
    ToOneRule,
    ValidationContext,
    ValidationPipeline,
)
from .validation.framework import Step

logger = logging.getLogger(__name__)


def decode(raw: str | bytes | bytearray) -> dict[str, Any]:
    """Decode a request body, which must be a JSON object.

    Raises:
        UnexpectedDocumentError: If the body is empty, not JSON, or not an object
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnexpectedDocumentError("Expecting UTF-8 encoded JSON.") from e

    if not raw.strip():
        raise UnexpectedDocumentError("Expecting JSON to decode.")

    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise UnexpectedDocumentError("Invalid JSON.") from e

    if not isinstance(value, dict):
        raise UnexpectedDocumentError("Expecting JSON to decode to an object.")

    return value


def _ensure_recognised(specification: Specification, resource_type: str) -> None:
    if resource_type not in specification.types():
        raise ValueError(f"Resource type {resource_type} is not recognised")


class Builder(ABC):
    """Base class for document builders."""

    def __init__(self, specification: Specification, translator: Translator | None = None):
        self.specification = specification
        self.translator = translator or Translator()
        self.extra_rules: list[Step] = []

    @abstractmethod
    def create(self, value: dict[str, Any]) -> Document:
        """Wrap the decoded value in an empty document."""
        pass

    @abstractmethod
    def rules(self) -> list[Step]:
        """Built-in rules, in execution order."""
        pass

    def using(self, *rules: Step | list[Step]) -> "Builder":
        """Append custom rules to run after the built-in ones."""
        for rule in rules:
            if isinstance(rule, (list, tuple)):
                self.extra_rules.extend(rule)
            else:
                self.extra_rules.append(rule)
        return self

    def build(self, raw: str | bytes | bytearray) -> Document:
        """Decode ``raw`` and validate it.

        Raises:
            UnexpectedDocumentError: If ``raw`` does not decode to a JSON object
        """
        document = self.create(decode(raw))
        pipeline = ValidationPipeline([*self.rules(), *self.extra_rules])

        logger.info(f"{type(self).__name__} running {len(pipeline.steps)} rule(s)")
        pipeline.run(document)

        logger.info(f"{type(self).__name__} completed with {len(document.errors)} error(s)")
        return document


class ResourceBuilder(Builder):
    """Builds create (no expected id) and update (expected id) resource documents."""

    def __init__(self, specification: Specification, translator: Translator | None = None):
        super().__init__(specification, translator)
        self.expected_type: str | None = None
        self.expected_id: str | None = None

    def expects(self, resource_type: str, resource_id: str | None = None) -> "ResourceBuilder":
        """Expect a create (no ``resource_id``) or update document for ``resource_type``.

        Raises:
            ValueError: If the type is not recognised
        """
        _ensure_recognised(self.specification, resource_type)
        self.expected_type = resource_type
        self.expected_id = resource_id
        return self

    def create(self, value: dict[str, Any]) -> ResourceDocument:
        return ResourceDocument(value)

    def rules(self) -> list[Step]:
        if self.expected_type is None:
            raise RuntimeError("Call expects() before building a resource document.")

        context = ValidationContext(
            specification=self.specification,
            translator=self.translator,
            expected_type=self.expected_type,
            expected_id=self.expected_id,
        )
        return [
            DataMemberRule(context),
            ResourceTypeRule(context),
            ResourceIdRule(context),
            DuplicateFieldsRule(context),
            AttributesRule(context),
            RelationshipsRule(context),
        ]


class RelationBuilder(Builder):
    """Builds to-one and to-many relationship replacement documents."""

    def __init__(self, specification: Specification, translator: Translator | None = None):
        super().__init__(specification, translator)
        self.expected_type: str | None = None
        self.relation: FieldDescriptor | None = None

    def expects(self, resource_type: str, field_name: str) -> "RelationBuilder":
        """Expect a document for the relation ``field_name`` of ``resource_type``.

        Raises:
            ValueError: If the type is not recognised or does not declare a relation with that name
        """
        _ensure_recognised(self.specification, resource_type)
        relation = self.specification.field(resource_type, field_name)
        if relation is None or not relation.is_relation:
            raise ValueError(f"Resource type {resource_type} has no relation named {field_name}")

        self.expected_type = resource_type
        self.relation = relation
        return self

    def create(self, value: dict[str, Any]) -> RelationDocument:
        return RelationDocument(value)

    def rules(self) -> list[Step]:
        if self.expected_type is None or self.relation is None:
            raise RuntimeError("Call expects() before building a relation document.")

        context = ValidationContext(
            specification=self.specification,
            translator=self.translator,
            expected_type=self.expected_type,
            relation=self.relation,
        )
        linkage = ToManyRule(context) if self.relation.to_many else ToOneRule(context)
        return [DataMemberRule(context, require_object=False), linkage]
