"""
prismafill CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform
import sys
from importlib.metadata import PackageNotFoundError, version

import typer

from prismafill._version import get_version


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"prismafill version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        try:
            typer.echo(f"  pymongo:       {version('pymongo')}")
        except PackageNotFoundError:
            typer.echo("  pymongo:       unknown")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr; DEBUG with --verbose, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("prismafill").setLevel(logging.DEBUG if verbose else logging.WARNING)
    # pymongo's own debug output drowns ours
    logging.getLogger("pymongo").setLevel(logging.WARNING)
