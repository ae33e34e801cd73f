"""JSON:API error objects and the ordered set accumulated during validation."""

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .pointer import Pointer


@dataclass(frozen=True)
class Error:
    """A single JSON:API error object describing one violation."""
    title: str
    detail: str
    status: str
    pointer: Pointer = field(default_factory=Pointer.root)
    code: str | None = None

    def __str__(self) -> str:
        return f"[{self.status}] {self.title}: {self.detail} at {self.pointer}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON:API error object with alphabetically sorted members.

        An empty ``title``, ``detail`` or ``code`` is left out, so a message
        override can drop a member by setting it to ``""``.
        """
        members: dict[str, Any] = {
            "code": self.code,
            "detail": self.detail,
            "source": {"pointer": self.pointer.render()},
            "status": self.status,
            "title": self.title,
        }

        return {key: value for key, value in sorted(members.items()) if value}


@dataclass
class ErrorSet:
    """Append-only, insertion-ordered collection of errors."""
    errors: list[Error] = field(default_factory=list)

    def add(self, error: Error) -> None:
        self.errors.append(error)

    def __iter__(self) -> Iterator[Error]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def is_empty(self) -> bool:
        return not self.errors

    def pointers(self) -> list[str]:
        return [error.pointer.render() for error in self.errors]

    def to_list(self) -> list[dict[str, Any]]:
        return [error.to_dict() for error in self.errors]

    def to_json(self, indent: int | None = None) -> str:
        """Serialize as a JSON:API error document (``{"errors": [...]}``)."""
        return json.dumps({"errors": self.to_list()}, indent=indent)
