"""
prismafill Intermediate Representation (IR) types.

Parsed schema types (fields, models, enums) and the generated JSON Schema
types. All types are re-exported from this package.
"""

from .fields import FieldSpec
from .json_schema import JsonSchema, JsonSchemaProperty
from .schema import EnumSpec, ModelSpec, PrismaSchema

__all__ = [
    "FieldSpec",
    "ModelSpec",
    "EnumSpec",
    "PrismaSchema",
    "JsonSchema",
    "JsonSchemaProperty",
]
