# backend/move_toolkit/services/actions/workspace.py
from __future__ import annotations

"""
Move project discovery.

A Move package is rooted at the directory holding ``Move.toml``. Build,
test, deploy and add-dependency all need that root, which is found by
walking up from the editor's current directory:

    /work/pkg/Move.toml
    /work/pkg/sources/foo.move   <- cwd = /work/pkg/sources  -> root /work/pkg

All paths are computed using pathlib, so this works the same on Windows
and inside Linux containers.
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from move_toolkit.errors import ManifestError, ProjectNotFoundError

MANIFEST_NAME = "Move.toml"


@dataclass
class ProjectInfo:
    """
    Summary of a Move package manifest, shown by the project info view.
    """

    root: Path
    name: str | None = None
    version: str | None = None
    addresses: Dict[str, str] = field(default_factory=dict)
    dependencies: List[str] = field(default_factory=list)
    dev_dependencies: List[str] = field(default_factory=list)

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_NAME


def find_project_root(start: str | Path) -> Path:
    """
    Return the closest directory at or above ``start`` containing Move.toml.

    ``start`` may be a file (e.g. the current buffer's path); its parent
    directory is used in that case.

    Raises:
        ProjectNotFoundError: if no ancestor has a Move.toml.
    """
    path = Path(start).expanduser().resolve()
    if path.is_file():
        path = path.parent

    for directory in (path, *path.parents):
        if (directory / MANIFEST_NAME).is_file():
            return directory
    raise ProjectNotFoundError(str(start))


def read_project_info(root: str | Path) -> ProjectInfo:
    """
    Parse ``<root>/Move.toml`` into a ProjectInfo.

    Raises:
        ManifestError: if the manifest is missing, unreadable or not valid TOML.
    """
    root_path = Path(root)
    manifest = root_path / MANIFEST_NAME
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"Cannot read {manifest}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Invalid {MANIFEST_NAME}: {exc}") from exc

    package = data.get("package") or {}
    addresses = data.get("addresses") or {}
    return ProjectInfo(
        root=root_path,
        name=package.get("name"),
        version=package.get("version"),
        addresses={str(k): str(v) for k, v in addresses.items()},
        dependencies=sorted((data.get("dependencies") or {}).keys()),
        dev_dependencies=sorted((data.get("dev-dependencies") or {}).keys()),
    )
