"""Exceptions raised by jsonapi-spec.

Document validation errors are never raised; they are accumulated on the
document. The exceptions here signal protocol-level failures and
programming errors.
"""


class JsonApiSpecError(Exception):
    """Base class for jsonapi-spec exceptions."""


class UnexpectedDocumentError(JsonApiSpecError):
    """Raised when the request body cannot be decoded to a JSON object."""


class InvalidDocumentError(JsonApiSpecError):
    """Raised when reading typed values from a document that failed validation."""

    def __init__(self, message: str, error_count: int = 0):
        self.error_count = error_count
        super().__init__(message)


class MessageTemplateError(JsonApiSpecError, ValueError):
    """Raised for an unknown message key or a missing placeholder value."""

    def __init__(self, message: str, key: str = "", missing: list[str] | None = None):
        self.key = key
        self.missing = missing or []
        super().__init__(message)
