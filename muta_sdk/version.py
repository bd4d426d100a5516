"""
Version information for the Muta SDK.

Installed builds report the distribution metadata. A source checkout reads
``[project].version`` from the repository's pyproject.toml.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION = "muta-sdk"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"
# last released version, used when neither source is available
DEFAULT_VERSION = "0.3.0"


def _version_from_pyproject(path: pathlib.Path) -> Optional[str]:
    try:
        with path.open("rb") as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError):
        return None

    version = data.get("project", {}).get("version")
    return version if isinstance(version, str) else None


def read_version(
    distribution: str = DISTRIBUTION,
    pyproject: pathlib.Path = PYPROJECT_PATH
) -> str:
    """Resolve the SDK version: metadata, then pyproject.toml, then DEFAULT_VERSION."""
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        pass
    return _version_from_pyproject(pyproject) or DEFAULT_VERSION


__version__ = read_version()
