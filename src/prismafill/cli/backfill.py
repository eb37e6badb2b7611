"""
prismafill backfill commands.

- backfill: fill missing fields with their schema defaults in MongoDB
- generate-and-backfill: write the JSON Schema files, then backfill
"""

from __future__ import annotations

from pathlib import Path

import typer
from pymongo.errors import PyMongoError
from rich.markup import escape

from prismafill.cli.common import (
    console,
    err_console,
    load_manifest_or_exit,
    load_schema,
    run_backfill,
    select_models,
    write_schemas,
)
from prismafill.core.errors import PrismafillError
from prismafill.core.manifest import ProjectManifest, resolve_database_name
from prismafill.store.backfill import BackfillResult, MongoBackfillService


def _build_service(
    manifest: ProjectManifest,
    connection: str | None,
    database: str | None,
    batch_size: int | None,
) -> MongoBackfillService:
    connection_string = connection or manifest.mongo.connection
    try:
        database_name = resolve_database_name(connection_string, database or manifest.mongo.database)
        return MongoBackfillService(
            connection_string,
            database_name,
            batch_size=batch_size or manifest.mongo.batch_size,
        )
    except (PrismafillError, ValueError) as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _backfill(
    manifest: ProjectManifest,
    schema_path: Path,
    output_dir: Path | None,
    connection: str | None,
    database: str | None,
    model: str | None,
    batch_size: int | None,
) -> list[BackfillResult]:
    service = _build_service(manifest, connection, database, batch_size)
    prisma_schema = load_schema(schema_path)
    models = select_models(prisma_schema, model)

    if output_dir is not None:
        write_schemas(prisma_schema, models, output_dir, manifest.output.format)

    console.print(f"\nProcessing [bold cyan]{len(models)}[/bold cyan] models...")
    try:
        return run_backfill(prisma_schema, models, service)
    except (PrismafillError, PyMongoError) as e:
        err_console.print(f"[red]Backfill failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def backfill_command(
    schema: str | None = typer.Option(
        None, "--schema", "-s", help="Path to Prisma schema directory (default: prisma)"
    ),
    connection: str | None = typer.Option(
        None, "--connection", "-c", help="MongoDB connection string (default: mongodb://localhost:27017)"
    ),
    database: str | None = typer.Option(
        None,
        "--database",
        "-d",
        help="Database name; 'none' takes it from the connection string",
    ),
    model: str | None = typer.Option(
        None, "--model", "-m", help="Specific model to backfill (optional)"
    ),
    batch_size: int | None = typer.Option(
        None, "--batch-size", min=1, help="Send updates as bulk writes of this size"
    ),
) -> None:
    """
    Backfill MongoDB collections with default values.

    Only fields that are missing or null are written; existing values are
    never overwritten.

    Examples:
        prismafill backfill --connection mongodb://localhost:27017 --database myapp
        prismafill backfill --model User --database myapp
        prismafill backfill --connection mongodb://localhost:27017/myapp
    """
    manifest = load_manifest_or_exit()
    _backfill(
        manifest,
        Path(schema or manifest.schema.path),
        None,
        connection,
        database,
        model,
        batch_size,
    )


def generate_and_backfill_command(
    schema: str | None = typer.Option(
        None, "--schema", "-s", help="Path to Prisma schema directory (default: prisma)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output directory for JSON schemas (default: schemas)"
    ),
    connection: str | None = typer.Option(
        None, "--connection", "-c", help="MongoDB connection string (default: mongodb://localhost:27017)"
    ),
    database: str | None = typer.Option(
        None,
        "--database",
        "-d",
        help="Database name; 'none' takes it from the connection string",
    ),
    model: str | None = typer.Option(
        None, "--model", "-m", help="Specific model to process (optional)"
    ),
    batch_size: int | None = typer.Option(
        None, "--batch-size", min=1, help="Send updates as bulk writes of this size"
    ),
) -> None:
    """
    Convert schemas and backfill MongoDB in one command.

    Examples:
        prismafill generate-and-backfill --schema ./prisma --database myapp
        prismafill generate-and-backfill --model User --database myapp
    """
    manifest = load_manifest_or_exit()
    _backfill(
        manifest,
        Path(schema or manifest.schema.path),
        Path(output or manifest.output.path),
        connection,
        database,
        model,
        batch_size,
    )
