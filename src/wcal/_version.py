"""Version lookup for wcal: source checkout first, then installed metadata."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Return [project].version from a source checkout, else the installed version."""
    if _PYPROJECT.is_file():
        with open(_PYPROJECT, "rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "wcal" and "version" in project:
            return str(project["version"])
    try:
        return _metadata_version("wcal")
    except PackageNotFoundError:
        return "0.0.0"
