"""
prismafill CLI package.

- app.py: main Typer application and entry point
- convert.py: convert command
- backfill.py: backfill and generate-and-backfill commands
- common.py: schema loading, output writing and result reporting
- utils.py: version and logging helpers
"""

from prismafill.cli.app import app, main
from prismafill.cli.utils import configure_logging, version_callback

__all__ = [
    "app",
    "main",
    "configure_logging",
    "version_callback",
]
