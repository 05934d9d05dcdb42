"""
Project metadata helpers used by the logging formatters.

The installed distribution metadata is the source of truth; when the package
runs from a source checkout without being installed, pyproject.toml is read instead.
"""
import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DISTRIBUTION_NAME = "store-api"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def _pyproject_project_table() -> dict[str, Any]:
    pyproject = find_pyproject(Path(__file__).resolve().parent)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


@lru_cache()
def get_project_version(default: str = "0.0.0") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return _pyproject_project_table().get("version", default)


@lru_cache()
def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    return _pyproject_project_table().get("name", default)
