import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .errors import ConfigError, ErrorContext

MANIFEST_NAME = "prismafill.toml"

# Database option value meaning "take it from the connection string"
DATABASE_FROM_URI = "none"


@dataclass
class SchemaConfig:
    """Where the .prisma sources live."""

    path: str = "prisma"


@dataclass
class OutputConfig:
    """Where generated JSON Schema files are written."""

    path: str = "schemas"
    format: str = "json"  # "json" | "yaml"


@dataclass
class MongoConfig:
    """MongoDB connection settings.

    Examples in prismafill.toml:

        [mongo]
        connection = "mongodb://localhost:27017/app"
        database = "app"
        batch_size = 500
    """

    connection: str = "mongodb://localhost:27017"
    database: str = DATABASE_FROM_URI
    batch_size: int | None = None


@dataclass
class ProjectManifest:
    """
    Settings loaded from prismafill.toml, with environment overrides applied.

    Command-line options take precedence over everything in here.
    """

    schema: SchemaConfig = field(default_factory=SchemaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read manifest: {e}", ErrorContext(path=path)) from e

    schema_data = data.get("schema", {})
    output_data = data.get("output", {})
    mongo_data = data.get("mongo", {})

    output_format = output_data.get("format", "json")
    if output_format not in ("json", "yaml"):
        raise ConfigError(
            f"Unsupported output format '{output_format}' (expected json or yaml)",
            ErrorContext(path=path),
        )

    batch_size = mongo_data.get("batch_size")
    if batch_size is not None and (
        not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1
    ):
        raise ConfigError(
            f"Invalid [mongo] batch_size {batch_size!r} (expected a positive integer)",
            ErrorContext(path=path),
        )

    return ProjectManifest(
        schema=SchemaConfig(path=schema_data.get("path", "prisma")),
        output=OutputConfig(path=output_data.get("path", "schemas"), format=output_format),
        mongo=MongoConfig(
            connection=mongo_data.get("connection", "mongodb://localhost:27017"),
            database=mongo_data.get("database", DATABASE_FROM_URI),
            batch_size=batch_size,
        ),
    )


def apply_env_overrides(
    manifest: ProjectManifest, environ: Mapping[str, str] | None = None
) -> ProjectManifest:
    """Overlay PRISMAFILL_SCHEMA, PRISMAFILL_OUTPUT, MONGO_URL and MONGO_DATABASE."""
    env = os.environ if environ is None else environ

    schema = manifest.schema
    if env.get("PRISMAFILL_SCHEMA"):
        schema = replace(schema, path=env["PRISMAFILL_SCHEMA"])

    output = manifest.output
    if env.get("PRISMAFILL_OUTPUT"):
        output = replace(output, path=env["PRISMAFILL_OUTPUT"])

    mongo = manifest.mongo
    if env.get("MONGO_URL"):
        mongo = replace(mongo, connection=env["MONGO_URL"])
    if env.get("MONGO_DATABASE"):
        mongo = replace(mongo, database=env["MONGO_DATABASE"])

    return ProjectManifest(schema=schema, output=output, mongo=mongo)


def resolve_manifest(
    project_root: Path | None = None, environ: Mapping[str, str] | None = None
) -> ProjectManifest:
    """Load prismafill.toml from ``project_root`` (if present) and apply env overrides."""
    root = project_root or Path.cwd()
    manifest_path = root / MANIFEST_NAME
    manifest = load_manifest(manifest_path) if manifest_path.exists() else ProjectManifest()
    return apply_env_overrides(manifest, environ)


def database_from_uri(connection: str) -> str | None:
    """
    Take the database name from the path of a MongoDB connection string.

    Examples:
        >>> database_from_uri("mongodb://localhost:27017/shop?retryWrites=true")
        'shop'
        >>> database_from_uri("mongodb://localhost:27017") is None
        True
    """
    rest = connection.split("://", 1)[-1]
    if "/" not in rest:
        return None
    path = rest.split("/", 1)[1].split("?", 1)[0].strip("/")
    return path or None


def resolve_database_name(connection: str, database: str | None) -> str:
    """Use ``database`` unless it is unset or ``none``; otherwise read it from the URI."""
    if database and database != DATABASE_FROM_URI:
        return database

    name = database_from_uri(connection)
    if not name:
        raise ConfigError(
            "No database name given: pass --database or include it in the connection string"
        )
    return name
