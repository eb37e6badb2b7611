"""
prismafill - Prisma schema to JSON Schema conversion and MongoDB default backfills.

Parses ``.prisma`` model and enum blocks, derives a JSON Schema document per
model, and fills missing fields with their declared defaults in documents
already stored in MongoDB.
"""

from __future__ import annotations

from ._version import __version__
from .core import ir
from .core.errors import ConfigError, PrismafillError, SchemaDiscoveryError, StoreConnectionError
from .core.schema_parser import SchemaParser, parse_schema
from .specs.json_schema import JsonSchemaGenerator, generate_json_schema

__all__ = [
    "__version__",
    "ir",
    "parse_schema",
    "SchemaParser",
    "generate_json_schema",
    "JsonSchemaGenerator",
    "PrismafillError",
    "ConfigError",
    "SchemaDiscoveryError",
    "StoreConnectionError",
]
