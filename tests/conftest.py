"""Shared fixtures for weaver-setup tests."""

from pathlib import Path

import pytest


def make_package(cache: Path, package_id: str, version: str, layout: dict) -> Path:
    """Create an extracted NuGet package in ``cache``.

    ``layout`` maps ``lib``/``ref`` to the target folders they contain. Each
    target folder gets one dll named after the package and target.
    """
    package_dir = cache / package_id.lower() / version
    package_dir.mkdir(parents=True)
    for root, targets in layout.items():
        for target in targets:
            target_dir = package_dir / root / target
            target_dir.mkdir(parents=True)
            (target_dir / f"{package_id}.dll").write_text(f"{root}/{target}")
    return package_dir


def make_dotnet_home(root: Path, *runtime_versions: str) -> Path:
    """Create a fake dotnet installation with the given runtime versions."""
    for version in runtime_versions:
        runtime_dir = root / "shared" / "Microsoft.NETCore.App" / version
        runtime_dir.mkdir(parents=True)
        (runtime_dir / "mscorlib.dll").write_text(f"mscorlib {version}")
        (runtime_dir / "netstandard.dll").write_text(f"netstandard {version}")
    return root


@pytest.fixture
def nuget_cache(tmp_path):
    """Empty NuGet package cache."""
    cache = tmp_path / "nuget"
    cache.mkdir()
    return cache


@pytest.fixture
def dotnet_home(tmp_path):
    """dotnet installation with two runtimes."""
    return make_dotnet_home(tmp_path / "dotnet", "6.0.25", "8.0.1")
