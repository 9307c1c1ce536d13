"""Input configuration for an install run."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .core.errors import ConfigurationError, WeaverSetupError
from .core.monikers import TargetFrameworkMoniker, parse_moniker
from .core.semver import SemVer
from .utils.logging import get_logger

logger = get_logger("Config")


@dataclass(frozen=True)
class NuGetPackageSpecifier:
    """A NuGet package whose reference assemblies must be provided."""

    id: str
    version: SemVer

    @classmethod
    def from_dict(cls, data: Any) -> "NuGetPackageSpecifier":
        """Build a specifier from a ``{"id": ..., "version": ...}`` mapping.

        Build metadata is rejected since NuGet cache folders never carry it.

        Raises:
            ValueError: If the mapping is malformed
            VersionError: If the version is unusable
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object with 'id' and 'version', got {data!r}")

        package_id = data.get("id")
        version = data.get("version")
        if not isinstance(package_id, str) or not package_id:
            raise ValueError(f"Package 'id' must be a non-empty string, got {package_id!r}")
        if not isinstance(version, str):
            raise ValueError(f"Package 'version' must be a string, got {version!r}")

        return cls(
            id=package_id,
            version=SemVer.parse(version).validate(allow_build=False)
        )

    def __str__(self) -> str:
        return f"{self.id}@{self.version.raw}"


def parse_weaver_version(text: str) -> SemVer:
    """Parse the ``netcode-weaver-version`` input."""
    try:
        return SemVer.parse(text).validate(allow_build=False, allow_prerelease=False)
    except WeaverSetupError as e:
        logger.error(str(e))
        raise ConfigurationError("netcode-weaver-version") from e


def parse_deps_packages(text: Optional[str]) -> List[NuGetPackageSpecifier]:
    """Parse the ``deps-packages`` input, a JSON array of package objects.

    An empty or missing value means no packages.
    """
    if text is None or not text.strip():
        return []

    try:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("Expected a JSON array of packages")
        return [NuGetPackageSpecifier.from_dict(item) for item in data]
    except (ValueError, WeaverSetupError) as e:
        logger.error(str(e))
        raise ConfigurationError("deps-packages") from e


def parse_target_framework(text: str) -> TargetFrameworkMoniker:
    """Parse the ``target-framework`` input."""
    try:
        return parse_moniker(text.strip())
    except WeaverSetupError as e:
        logger.error(str(e))
        raise ConfigurationError("target-framework") from e


def default_temp_directory() -> Path:
    """``$RUNNER_TEMP`` when running in a runner, otherwise the system temp dir."""
    runner_temp = os.environ.get("RUNNER_TEMP")
    if runner_temp:
        return Path(runner_temp)
    return Path(tempfile.gettempdir())


@dataclass
class InstallConfig:
    """Everything an install run needs.

    Paths left as None are resolved by the platform install steps.
    """

    netcode_weaver_version: SemVer
    target_framework: TargetFrameworkMoniker
    deps_packages: List[NuGetPackageSpecifier] = field(default_factory=list)
    temp_directory: Path = field(default_factory=default_temp_directory)
    install_directory: Optional[Path] = None
    nuget_cache: Optional[Path] = None
    dotnet_home: Optional[Path] = None
    force: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.netcode_weaver_version.build or self.netcode_weaver_version.prerelease:
            raise ConfigurationError(
                "netcode-weaver-version",
                "Build metadata and prerelease versions are not allowed."
            )

    @classmethod
    def from_inputs(
        cls,
        netcode_weaver_version: str,
        target_framework: str,
        deps_packages: Optional[str] = None,
        **kwargs: Any
    ) -> "InstallConfig":
        """Build a configuration from raw string inputs.

        Args:
            netcode_weaver_version: Release version, e.g. ``3.3.4``
            target_framework: Moniker, e.g. ``netstandard2.1``
            deps_packages: JSON array of ``{"id", "version"}`` objects
            **kwargs: Remaining InstallConfig fields

        Raises:
            ConfigurationError: Naming the first invalid input
        """
        return cls(
            netcode_weaver_version=parse_weaver_version(netcode_weaver_version),
            target_framework=parse_target_framework(target_framework),
            deps_packages=parse_deps_packages(deps_packages),
            **{key: value for key, value in kwargs.items() if value is not None}
        )
