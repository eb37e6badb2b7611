"""
prismafill specification generators.

Generate JSON Schema documents from parsed Prisma models.
"""

from prismafill.specs.json_schema import (
    JsonSchemaGenerator,
    generate_json_schema,
    json_schema_to_json,
    json_schema_to_yaml,
    schema_file_name,
)

__all__ = [
    "JsonSchemaGenerator",
    "generate_json_schema",
    "json_schema_to_json",
    "json_schema_to_yaml",
    "schema_file_name",
]
