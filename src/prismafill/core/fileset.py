import logging
from pathlib import Path

from .errors import ErrorContext, SchemaDiscoveryError

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".prisma"
EXCLUDED_DIRS = frozenset({"migrations"})


def discover_schema_files(root: Path) -> list[Path]:
    """
    Find ``.prisma`` files below ``root``, skipping ``migrations`` directories.

    ``root`` may also point at a single schema file. The result is sorted so
    the concatenated schema text is stable between runs.
    """
    if root.is_file():
        return [root] if root.suffix == SCHEMA_SUFFIX else []
    if not root.is_dir():
        raise SchemaDiscoveryError(
            "Schema path does not exist", ErrorContext(path=root)
        )

    files: list[Path] = []
    for p in root.rglob(f"*{SCHEMA_SUFFIX}"):
        if EXCLUDED_DIRS.intersection(p.relative_to(root).parts[:-1]):
            continue
        if p.is_file():
            files.append(p)
    return sorted(set(files))


def load_schema_sources(files: list[Path]) -> str:
    """Concatenate schema files so cross-file references resolve together."""
    if not files:
        raise SchemaDiscoveryError("No .prisma files to load")
    logger.debug("Loading %d schema files", len(files))
    sources: list[str] = []
    for p in files:
        try:
            sources.append(p.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaDiscoveryError(f"Cannot read schema file: {e}", ErrorContext(path=p)) from e
    return "\n\n".join(sources)
