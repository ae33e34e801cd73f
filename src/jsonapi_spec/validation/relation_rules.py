"""Rules for relationship replacement documents (``{"data": ...}``)."""

from ..document import Document
from .common import IdentifierValidator
from .framework import DATA, ValidationContext, ValidationRule


class RelationRule(ValidationRule):
    """Base class for rules validating the linkage of one relation."""

    def __init__(self, context: ValidationContext):
        super().__init__(context)
        if context.relation is None:
            raise ValueError(f"{type(self).__name__} requires a relation")
        self.relation = context.relation
        self.identifiers = IdentifierValidator(context)


class ToOneRule(RelationRule):
    """``data`` must be null or a single resource identifier."""

    @property
    def name(self) -> str:
        return "to_one"

    def validate(self, document: Document) -> None:
        if "data" not in document.json or document.json["data"] is None:
            return

        document.add_errors(self.identifiers.validate(
            document.json["data"], DATA, "data", relation=self.relation
        ))


class ToManyRule(RelationRule):
    """``data`` must be an array of resource identifiers."""

    @property
    def name(self) -> str:
        return "to_many"

    def validate(self, document: Document) -> None:
        if "data" not in document.json:
            return

        data = document.json["data"]
        if not isinstance(data, list):
            document.add_error(self.translator.member_not_array(DATA, "data"))
            return

        for index, identifier in enumerate(data):
            document.add_errors(self.identifiers.validate(
                identifier, DATA.child(index), index, relation=self.relation
            ))
