"""Shared CLI helpers: schema loading, model selection, output and reporting."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from prismafill.core import ir
from prismafill.core.errors import ConfigError, SchemaDiscoveryError
from prismafill.core.fileset import discover_schema_files, load_schema_sources
from prismafill.core.manifest import ProjectManifest, resolve_manifest
from prismafill.core.schema_parser import parse_schema
from prismafill.specs.json_schema import (
    JsonSchemaGenerator,
    json_schema_to_json,
    json_schema_to_yaml,
    schema_file_name,
)
from prismafill.store.backfill import (
    BackfillResult,
    BackfillStatus,
    MongoBackfillService,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def load_manifest_or_exit() -> ProjectManifest:
    """Resolve prismafill.toml + environment, exiting with code 1 on bad config."""
    try:
        return resolve_manifest()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def load_schema(schema_path: Path) -> ir.PrismaSchema:
    """
    Discover, concatenate and parse all .prisma files below ``schema_path``.

    Exits with code 1 when no schema file is found.
    """
    try:
        files = discover_schema_files(schema_path)
        if not files:
            raise SchemaDiscoveryError(f"No .prisma files found in {schema_path}")
        source = load_schema_sources(files)
    except SchemaDiscoveryError as e:
        err_console.print(f"[red]Failed to load schemas:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    names = ", ".join(f"[dim]{escape(f.name)}[/dim]" for f in files)
    console.print(f"\nFound [bold cyan]{len(files)}[/bold cyan] Prisma files: {names}")

    schema = parse_schema(source)
    console.print(
        f"\nParsed [bold green]{len(schema.models)}[/bold green] models "
        f"and [bold green]{len(schema.enums)}[/bold green] enums"
    )
    return schema


def select_models(schema: ir.PrismaSchema, model_name: str | None) -> list[ir.ModelSpec]:
    """All models, or only the one named by ``--model``. Exits 1 when nothing matches."""
    models = [m for m in schema.models if model_name is None or m.name == model_name]
    if not models:
        suffix = f' matching "[bold]{escape(model_name)}[/bold]"' if model_name else ""
        err_console.print(f"[red]No models found[/red]{suffix}")
        raise typer.Exit(code=1)
    return models


def write_schemas(
    schema: ir.PrismaSchema,
    models: list[ir.ModelSpec],
    output_dir: Path,
    output_format: str = "json",
) -> list[Path]:
    """Write one JSON Schema file per model into ``output_dir``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    generator = JsonSchemaGenerator(schema)
    render = json_schema_to_yaml if output_format == "yaml" else json_schema_to_json

    written: list[Path] = []
    for model in models:
        output_path = output_dir / schema_file_name(model, output_format)
        output_path.write_text(render(generator.generate_schema(model)) + "\n", encoding="utf-8")
        console.print(
            f"Generated JSON Schema for [bold cyan]{escape(model.name)}[/bold cyan] "
            f"→ [dim]{escape(str(output_path))}[/dim]"
        )
        written.append(output_path)
    return written


def format_defaults(defaults: dict[str, object]) -> str:
    """Render ``{field: default}`` as ``{name: json, ...}`` for console output."""
    parts = [
        f"[bold]{escape(name)}[/bold]: [dim]{escape(json.dumps(value))}[/dim]"
        for name, value in defaults.items()
    ]
    return "{" + ", ".join(parts) + "}"


def print_backfill_result(result: BackfillResult) -> None:
    model = f"[bold cyan]{escape(result.model)}[/bold cyan]"

    if result.status is BackfillStatus.SKIPPED:
        console.print(f"\nSkipping {model} - [yellow]no default values found[/yellow]")
        return

    console.print(f"\n- Backfilling {model} fields {format_defaults(result.fields)}")
    if result.status is BackfillStatus.NOT_FOUND:
        console.print(f"[red]Collection not found[/red] for model: [bold]{escape(result.model)}[/bold]")
        return

    console.print(
        f"Backfill [green]completed[/green] for {model} "
        f"(collection [bold]{escape(result.collection or '')}[/bold]), "
        f"scanned {result.scanned}, updated [bold green]{result.modified}[/bold green] documents"
    )


def run_backfill(
    schema: ir.PrismaSchema,
    models: list[ir.ModelSpec],
    service: MongoBackfillService,
) -> list[BackfillResult]:
    """Backfill each model in turn, one after another."""
    generator = JsonSchemaGenerator(schema)
    results: list[BackfillResult] = []
    for model in models:
        result = service.backfill_collection(model, generator.generate_schema(model))
        print_backfill_result(result)
        results.append(result)
    return results
