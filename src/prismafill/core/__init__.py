"""Core prismafill functionality: IR, schema parser, file discovery, configuration."""

from . import ir
from .errors import (
    ConfigError,
    ErrorContext,
    PrismafillError,
    SchemaDiscoveryError,
    StoreConnectionError,
)
from .fileset import discover_schema_files, load_schema_sources
from .manifest import ProjectManifest, load_manifest
from .schema_parser import SchemaParser, parse_schema

__all__ = [
    "ir",
    "PrismafillError",
    "ConfigError",
    "SchemaDiscoveryError",
    "StoreConnectionError",
    "ErrorContext",
    "discover_schema_files",
    "load_schema_sources",
    "ProjectManifest",
    "load_manifest",
    "SchemaParser",
    "parse_schema",
]
