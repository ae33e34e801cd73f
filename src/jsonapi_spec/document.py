"""Decoded JSON:API documents and the errors accumulated while validating them."""

from dataclasses import dataclass, field
from typing import Any

from .errors import Error, ErrorSet
from .exceptions import InvalidDocumentError


@dataclass(frozen=True)
class ResourceIdentifier:
    """A ``{type, id}`` reference to a resource."""
    type: str
    id: str

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> "ResourceIdentifier":
        return cls(type=value["type"], id=value["id"])

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "id": self.id}


Linkage = ResourceIdentifier | list[ResourceIdentifier] | None


@dataclass
class Document:
    """A decoded request body plus the errors found in it.

    Rules only ever append errors; nothing removes them. Typed accessors on
    subclasses are only available once the document is valid, while the raw
    decoded value stays readable through ``json`` for custom rules.
    """
    json: dict[str, Any]
    errors: ErrorSet = field(default_factory=ErrorSet)

    def add_error(self, error: Error) -> None:
        self.errors.add(error)

    def add_errors(self, errors: list[Error]) -> None:
        for error in errors:
            self.errors.add(error)

    def valid(self) -> bool:
        return self.errors.is_empty()

    def invalid(self) -> bool:
        return not self.errors.is_empty()

    def _ensure_valid(self) -> None:
        if self.invalid():
            raise InvalidDocumentError(
                f"Document has {len(self.errors)} validation error(s)", len(self.errors)
            )


def _linkage(value: Any) -> Linkage:
    if value is None:
        return None
    if isinstance(value, list):
        return [ResourceIdentifier.from_json(item) for item in value]
    return ResourceIdentifier.from_json(value)


@dataclass
class ResourceDocument(Document):
    """A create or update resource document: ``{"data": {type, id, ...}}``."""

    @property
    def data(self) -> dict[str, Any]:
        self._ensure_valid()
        return self.json["data"]

    @property
    def type(self) -> str:
        return self.data["type"]

    @property
    def id(self) -> str | None:
        return self.data.get("id")

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self.data.get("attributes", {}))

    @property
    def relationships(self) -> dict[str, Linkage]:
        """Relationship linkages keyed by field name."""
        return {
            name: _linkage(relationship["data"])
            for name, relationship in self.data.get("relationships", {}).items()
        }

    def identifier(self) -> ResourceIdentifier | None:
        """Identifier of the resource, or None for a create without a client id."""
        if self.id is None:
            return None
        return ResourceIdentifier(self.type, self.id)


@dataclass
class RelationDocument(Document):
    """A relationship replacement document: ``{"data": null | {...} | [...]}``."""

    @property
    def data(self) -> Linkage:
        self._ensure_valid()
        return _linkage(self.json["data"])

    def identifiers(self) -> list[ResourceIdentifier]:
        data = self.data
        if data is None:
            return []
        if isinstance(data, list):
            return data
        return [data]
