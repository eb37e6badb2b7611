"""
prismafill CLI application.

Registers the commands implemented in the prismafill.cli modules.
"""

import sys

import typer

from prismafill.cli.backfill import backfill_command, generate_and_backfill_command
from prismafill.cli.convert import convert_command
from prismafill.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""prismafill – Convert Prisma schema to JSON Schema and backfill MongoDB

Commands:
  • convert (c): write one JSON Schema file per model
  • backfill (b): set missing fields to their declared defaults
  • generate-and-backfill: both, in one run
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """prismafill CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="convert")(convert_command)
app.command(name="c", hidden=True)(convert_command)
app.command(name="backfill")(backfill_command)
app.command(name="b", hidden=True)(backfill_command)
app.command(name="generate-and-backfill")(generate_and_backfill_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
