"""Schema document I/O helpers (internal).

A schema document is a JSON object:

    {"schema_version": "1", "name": "Cat",
     "fields": {"name": {"kind": "string"},
                "type": {"kind": "string_literal", "value": "cat"}}}
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from commonprops._internal.canonical_json import canonical_dumps
from commonprops.kernel.descriptors import DescriptorModel, Schema, TypeDescriptor

SUPPORTED_SCHEMA_VERSIONS = ("1",)


class SchemaDocumentError(ValueError):
    """Raised when a schema document cannot be read or fails validation."""


class SchemaDocument(BaseModel):
    """A named schema as stored on disk."""
    schema_version: str = "1"
    name: Optional[str] = None
    fields: Dict[str, TypeDescriptor]

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"unsupported schema_version '{v}' (supported: {', '.join(SUPPORTED_SCHEMA_VERSIONS)})"
            )
        return v

    def to_schema(self) -> Dict[str, DescriptorModel]:
        return dict(self.fields)


def parse_schema_document(data: Any, source: str = "<dict>") -> SchemaDocument:
    """Validate a decoded JSON value into a SchemaDocument."""
    if not isinstance(data, dict):
        raise SchemaDocumentError(f"{source}: schema document must be a JSON object")
    try:
        return SchemaDocument(**data)
    except ValidationError as e:
        raise SchemaDocumentError(f"{source}: invalid schema document: {e}") from e


def load_schema_document(path: Union[str, Path]) -> SchemaDocument:
    """Load and validate a schema document from a JSON file path."""
    doc_path = Path(path)
    try:
        with open(doc_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SchemaDocumentError(f"{doc_path}: file not found") from e
    except json.JSONDecodeError as e:
        raise SchemaDocumentError(f"{doc_path}: invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise SchemaDocumentError(f"{doc_path}: not valid UTF-8: {e}") from e
    except OSError as e:
        raise SchemaDocumentError(f"{doc_path}: cannot read file: {e.strerror or e}") from e
    return parse_schema_document(data, source=str(doc_path))


def schema_to_document(schema: Schema, name: Optional[str] = None) -> Dict[str, Any]:
    """Render a schema as a JSON-ready document dict (fields sorted by name)."""
    doc: Dict[str, Any] = {
        "schema_version": SUPPORTED_SCHEMA_VERSIONS[-1],
        "fields": {key: schema[key].model_dump() for key in sorted(schema)},
    }
    if name is not None:
        doc["name"] = name
    return doc


def write_schema_document(path: Union[str, Path], schema: Schema, name: Optional[str] = None) -> Path:
    """Write a schema document as canonical JSON (trailing newline)."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(canonical_dumps(schema_to_document(schema, name)) + "\n", encoding="utf-8")
    return out


def coerce_schema(value: Union[Mapping[str, Any], SchemaDocument, str, Path]) -> Dict[str, DescriptorModel]:
    """Accept a Schema mapping, a SchemaDocument, a document dict, or a path."""
    if isinstance(value, SchemaDocument):
        return value.to_schema()
    if isinstance(value, (str, Path)):
        return load_schema_document(value).to_schema()
    if isinstance(value, Mapping):
        if all(isinstance(v, DescriptorModel) for v in value.values()):
            return dict(value)
        return parse_schema_document(dict(value)).to_schema()
    raise SchemaDocumentError(f"cannot interpret {type(value).__name__} as a schema")


def schema_document_json_schema() -> Dict[str, Any]:
    """JSON Schema describing the schema document format."""
    return SchemaDocument.model_json_schema()
