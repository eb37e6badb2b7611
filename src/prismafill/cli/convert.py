"""
prismafill convert command.

Writes one JSON Schema file per Prisma model.
"""

from __future__ import annotations

from pathlib import Path

import typer

from prismafill.cli.common import console, err_console, load_manifest_or_exit, load_schema, write_schemas

SUPPORTED_FORMATS = ("json", "yaml")


def convert_command(
    schema: str | None = typer.Option(
        None, "--schema", "-s", help="Path to Prisma schema directory (default: prisma)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output directory for JSON schemas (default: schemas)"
    ),
    output_format: str | None = typer.Option(
        None, "--format", "-f", help="Output file format: json or yaml (default: json)"
    ),
) -> None:
    """
    Convert Prisma schema to JSON Schema.

    Examples:
        prismafill convert
        prismafill convert --schema ./prisma --output ./json-schemas
        prismafill convert --format yaml
    """
    manifest = load_manifest_or_exit()
    fmt = output_format or manifest.output.format
    if fmt not in SUPPORTED_FORMATS:
        err_console.print(f"[red]Unsupported format:[/red] {fmt} (expected json or yaml)")
        raise typer.Exit(code=1)

    prisma_schema = load_schema(Path(schema or manifest.schema.path))
    models = prisma_schema.models
    console.print(f"\nConverting [bold cyan]{len(models)}[/bold cyan] models to JSON Schema...")

    write_schemas(prisma_schema, models, Path(output or manifest.output.path), fmt)
    console.print("[green]✓ All schemas converted successfully![/green]")
