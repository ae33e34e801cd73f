"""jsonapi-spec - Compliance validation for JSON:API request documents.

jsonapi-spec checks create, update and relationship replacement request
bodies against the JSON:API specification and an application-supplied
schema, returning either a valid document or a complete list of
pointer-tagged JSON:API error objects.
"""

__version__ = "0.1.0"
__description__ = "Compliance validation for JSON:API request documents"

from jsonapi_spec.builder import RelationBuilder, ResourceBuilder
from jsonapi_spec.config import SpecConfig, load_config
from jsonapi_spec.document import Document, RelationDocument, ResourceDocument, ResourceIdentifier
from jsonapi_spec.errors import Error, ErrorSet
from jsonapi_spec.exceptions import (
    InvalidDocumentError,
    JsonApiSpecError,
    MessageTemplateError,
    UnexpectedDocumentError,
)
from jsonapi_spec.messages import Translator
from jsonapi_spec.pointer import Pointer
from jsonapi_spec.specification import (
    FieldDescriptor,
    FieldKind,
    Specification,
    StaticSpecification,
)

__all__ = [
    "__version__",
    "__description__",
    "ResourceBuilder",
    "RelationBuilder",
    "SpecConfig",
    "load_config",
    "Document",
    "ResourceDocument",
    "RelationDocument",
    "ResourceIdentifier",
    "Error",
    "ErrorSet",
    "JsonApiSpecError",
    "UnexpectedDocumentError",
    "InvalidDocumentError",
    "MessageTemplateError",
    "Translator",
    "Pointer",
    "FieldDescriptor",
    "FieldKind",
    "Specification",
    "StaticSpecification",
]
