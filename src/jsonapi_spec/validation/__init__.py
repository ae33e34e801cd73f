"""Validation rules for JSON:API request documents.

Resource rules check create/update documents member by member; relation
rules check relationship replacement documents. Both run through a
``ValidationPipeline`` in a fixed order.
"""

from .common import DataMemberRule, IdentifierValidator, check_string_member
from .framework import ValidationContext, ValidationPipeline, ValidationRule
from .relation_rules import ToManyRule, ToOneRule
from .resource_rules import (
    AttributesRule,
    DuplicateFieldsRule,
    RelationshipsRule,
    ResourceIdRule,
    ResourceTypeRule,
)

__all__ = [
    "ValidationContext",
    "ValidationPipeline",
    "ValidationRule",
    "DataMemberRule",
    "IdentifierValidator",
    "check_string_member",
    "ResourceTypeRule",
    "ResourceIdRule",
    "DuplicateFieldsRule",
    "AttributesRule",
    "RelationshipsRule",
    "ToOneRule",
    "ToManyRule"
]
