"""Generate the JSON schema for schema documents and save it to schemas/."""

import json
from pathlib import Path

from commonprops._internal.io.schema_file import schema_document_json_schema


def generate_schemas(schemas_dir: Path = None) -> Path:
    """Write schemas/schema_document.schema.json and return its path."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(parents=True, exist_ok=True)

    schema_path = schemas_dir / "schema_document.schema.json"
    with open(schema_path, 'w', encoding='utf-8') as f:
        json.dump(schema_document_json_schema(), f, indent=2, ensure_ascii=False, sort_keys=True)
        f.write("\n")
    print(f"Generated: {schema_path}")
    return schema_path


if __name__ == "__main__":
    generate_schemas()
