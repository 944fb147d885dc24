from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any
import tomllib

# --------------------
# Find pyproject.toml
# --------------------


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


def get_pyproject_value(key: str, start: Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return the value for dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml above `start` (defaults to this module's folder).
    Returns `default` if the file isn't found, can't be parsed, or lacks the key.
    """
    pyproject = find_pyproject(start or Path(__file__).resolve().parent, max_up=max_up)
    if not pyproject:
        return default

    try:
        with pyproject.open("rb") as f:
            cur: Any = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return default

    for part in key.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return default
    return cur


def get_project_name(default: str | None = None) -> str | None:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    """
    Installed distribution version first (containers), then pyproject.toml.
    """
    name = get_project_name(default="userapi")
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        pass
    return get_pyproject_value("project.version", default=default)


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
