"""JSON Pointer values used to locate validation errors (RFC 6901)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pointer:
    """Immutable sequence of path segments rendered as a JSON Pointer.

    The root pointer renders as ``/`` rather than the empty string, which is
    how JSON:API error objects conventionally point at the whole document.
    """
    segments: tuple[str | int, ...] = ()

    @classmethod
    def root(cls) -> "Pointer":
        return cls()

    def child(self, segment: str | int) -> "Pointer":
        """Return a new pointer with ``segment`` appended."""
        return Pointer(self.segments + (segment,))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> str | int | None:
        return self.segments[-1] if self.segments else None

    def render(self) -> str:
        if not self.segments:
            return "/"
        return "".join(f"/{_escape(segment)}" for segment in self.segments)

    def __str__(self) -> str:
        return self.render()


def _escape(segment: str | int) -> str:
    # "~" first, otherwise the "~" introduced for "/" would be escaped again
    return str(segment).replace("~", "~0").replace("/", "~1")
