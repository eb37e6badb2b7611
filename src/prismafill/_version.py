"""Version of the prismafill package."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version, else the one in a source checkout's pyproject.toml."""
    try:
        return _metadata_version("prismafill")
    except PackageNotFoundError:
        pass

    if _PYPROJECT.exists():
        project = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8")).get("project", {})
        if project.get("name") == "prismafill":
            return str(project.get("version", "0.0.0"))
    return "0.0.0"


__version__ = get_version()
