"""Version identifier reported by ``/health`` and ``/api/v1/config/meta``.

Deployments install the ``zzptax`` distribution and read the version from its
metadata. A plain checkout (tests, ``scripts/validate_config.py``) has no
metadata, so the ``[project]`` table of ``pyproject.toml`` is read instead.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "zzptax"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the zzptax version, preferring installed package metadata."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def _read_version_from_pyproject(pyproject_path: Path) -> str:
    if not pyproject_path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"zzptax metadata not found at {pyproject_path}")

    section = ""
    for raw_line in pyproject_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.split("#", 1)[0].strip()
        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1].strip()
        elif section == "project" and line.startswith("version"):
            key, _, value = line.partition("=")
            if key.strip() == "version" and value.strip().strip('"'):
                return value.strip().strip('"')

    raise RuntimeError(f"No [project] version declared in {pyproject_path.name}")


__all__ = ["PACKAGE_NAME", "get_project_version"]
