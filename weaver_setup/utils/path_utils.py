"""Path helpers for NuGet package caches and .NET installations."""

import os
from pathlib import Path
from typing import List, Optional

from ..core.errors import EnvironmentNotConfigured, InvalidVersion, RuntimeNotFound
from ..core.semver import SemVer

# Preferred first: reference assemblies beat implementation assemblies
ASSEMBLY_ROOT_NAMES = ("ref", "lib")

NETCORE_APP_RUNTIME = "Microsoft.NETCore.App"


def home_directory(purpose: str) -> Path:
    """Get the user's home directory from ``$HOME``.

    Args:
        purpose: What the directory is needed for, used in the error message

    Raises:
        EnvironmentNotConfigured: If ``$HOME`` is unset or empty
    """
    home = os.environ.get("HOME")
    if not home:
        raise EnvironmentNotConfigured("HOME", purpose)
    return Path(home)


def default_nuget_cache_directory() -> Path:
    """Default global NuGet package cache, ``~/.nuget/packages``."""
    return home_directory("find NuGet package cache directory") / ".nuget" / "packages"


def package_directory(nuget_cache: Path, package_id: str, version: str) -> Path:
    """Location of an extracted package inside the NuGet cache.

    NuGet stores package ids lowercased.
    """
    return nuget_cache / package_id.lower() / version


def list_subdirectories(path: Path) -> List[str]:
    """Names of the immediate subdirectories of ``path``, sorted."""
    return sorted(child.name for child in path.iterdir() if child.is_dir())


def find_assembly_root(package_dir: Path) -> Optional[Path]:
    """Find the ``ref`` or ``lib`` folder of an extracted package.

    Args:
        package_dir: Extracted package directory

    Returns:
        The ``ref`` folder if present, else ``lib``, else None
    """
    for name in ASSEMBLY_ROOT_NAMES:
        candidate = package_dir / name
        if candidate.is_dir():
            return candidate
    return None


def find_latest_runtime_directory(dotnet_home: Path) -> Path:
    """Find the newest installed ``Microsoft.NETCore.App`` runtime.

    Args:
        dotnet_home: Root of the dotnet installation

    Returns:
        Directory of the newest runtime version

    Raises:
        RuntimeNotFound: If no runtime version directory exists
    """
    runtimes_dir = dotnet_home / "shared" / NETCORE_APP_RUNTIME
    if not runtimes_dir.is_dir():
        raise RuntimeNotFound(f"No {NETCORE_APP_RUNTIME} runtime found in {dotnet_home}.")

    latest: Optional[SemVer] = None
    latest_name = ""
    for name in list_subdirectories(runtimes_dir):
        try:
            version = SemVer.coerce(name)
        except InvalidVersion:
            continue
        if latest is None or version > latest:
            latest = version
            latest_name = name

    if latest is None:
        raise RuntimeNotFound(f"No {NETCORE_APP_RUNTIME} runtime found in {dotnet_home}.")

    return runtimes_dir / latest_name
