"""Platform specific install steps for NetcodeWeaver."""

import asyncio
import json
import shutil
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import InstallConfig
from .core.errors import UnsupportedPlatform
from .core.resolver import AssemblySource, ReferenceAssemblyResolver
from .core.semver import SemVer
from .install import ArchiveExtractor, ArchiveFetcher, FileCopier
from .output.formatters import ActionOutputWriter
from .utils.logging import get_logger, log_group
from .utils.path_utils import (
    default_nuget_cache_directory,
    find_latest_runtime_directory,
    home_directory,
    package_directory,
)

RELEASES_URL = "https://github.com/EvaisaDev/UnityNetcodeWeaver/releases/download"
DEPS_DIRECTORY_NAME = "deps"
OUTPUT_DIRECTORY = "netcode-weaver-directory"
# Written last by a successful install, describes what the directory holds
INSTALL_MARKER = ".weaver-setup.json"


@dataclass
class InstallResult:
    """Outcome of an install run."""

    install_directory: Path
    sources: List[AssemblySource] = field(default_factory=list)
    reused: bool = False


class InstallSteps(ABC):
    """Downloads NetcodeWeaver and provides the assemblies it weaves against."""

    def __init__(
        self,
        config: InstallConfig,
        fetcher: Optional[ArchiveFetcher] = None,
        extractor: Optional[ArchiveExtractor] = None,
        copier: Optional[FileCopier] = None,
        output_writer: Optional[ActionOutputWriter] = None
    ) -> None:
        """Initialize the install steps.

        Args:
            config: Validated install inputs
            fetcher: Archive fetcher, a default one if None
            extractor: Archive extractor, a default one if None
            copier: File copier, a default one if None
            output_writer: Step output writer, a default one if None
        """
        self.config = config
        self.fetcher = fetcher
        self.extractor = extractor or ArchiveExtractor()
        self.copier = copier or FileCopier()
        self.output_writer = output_writer or ActionOutputWriter()
        self.logger = get_logger("InstallSteps")

    def set_outputs(self, result: InstallResult) -> None:
        """Publish the step outputs."""
        self.output_writer.set_output(OUTPUT_DIRECTORY, str(result.install_directory))

    def install_record(self) -> Dict[str, Any]:
        """Describe the install the current config asks for."""
        return {
            "netcode_weaver_version": self.config.netcode_weaver_version.version,
            "target_framework": self.config.target_framework.raw,
            "deps_packages": [
                {"id": package.id, "version": package.version.version}
                for package in self.config.deps_packages
            ],
        }

    def read_install_record(self, install_directory: Path) -> Optional[Dict[str, Any]]:
        """Read the marker of a completed install, None if there is none."""
        marker = install_directory / INSTALL_MARKER
        if not marker.is_file():
            return None

        try:
            return json.loads(marker.read_text(encoding='utf-8'))
        except (json.JSONDecodeError, OSError) as e:
            self.logger.warning(f"Ignoring unreadable install marker {marker}: {e}")
            return None

    def write_install_record(self, install_directory: Path) -> None:
        marker = install_directory / INSTALL_MARKER
        marker.write_text(json.dumps(self.install_record(), indent=2), encoding='utf-8')

    async def install_if_necessary(self) -> InstallResult:
        """Install unless a completed install for the same inputs exists.

        A directory without a matching marker is left over from an aborted run
        or holds a different install, so it is removed before installing.
        """
        existing = self.extract_to_path()
        if not self.config.force and self.read_install_record(existing) == self.install_record():
            self.logger.info(f"Found existing install @ {existing}")
            result = InstallResult(install_directory=existing, reused=True)
            self.set_outputs(result)
            return result

        if existing.exists():
            self.logger.info(f"Removing previous install @ {existing}")
            await asyncio.to_thread(shutil.rmtree, existing)

        result = await self.install()
        self.set_outputs(result)
        return result

    async def install(self) -> InstallResult:
        """Download, extract and prepare a NetcodeWeaver release."""
        archive_file = await self.download_archive(self.config.netcode_weaver_version)
        unpacked_dir = await self.extract_archive(archive_file)

        await self.post_install(unpacked_dir)
        sources = await self.copy_reference_assemblies(unpacked_dir)
        self.write_install_record(unpacked_dir)

        self.logger.info(f"Installed NetcodeWeaver to {unpacked_dir}")
        deps_dir = unpacked_dir / DEPS_DIRECTORY_NAME
        self.logger.info(", ".join(sorted(child.name for child in deps_dir.iterdir())))

        return InstallResult(install_directory=unpacked_dir, sources=sources)

    def get_archive_name(self, version: SemVer) -> str:
        return f"NetcodePatcher-{version.version}.zip"

    def get_download_url(self, version: SemVer) -> str:
        return f"{RELEASES_URL}/{version.version}/{self.get_archive_name(version)}"

    @log_group("Download archive")
    async def download_archive(self, version: SemVer) -> Path:
        """Download the release archive into the temp directory."""
        destination = self.config.temp_directory / self.get_archive_name(version)
        if self.fetcher is not None:
            return await self.fetcher.download(self.get_download_url(version), destination)

        async with ArchiveFetcher() as fetcher:
            return await fetcher.download(self.get_download_url(version), destination)

    def extract_to_path(self) -> Path:
        """Directory the release is unpacked into."""
        if self.config.install_directory is not None:
            return self.config.install_directory
        return home_directory("resolve destination directory") / "NetcodeWeaver"

    @log_group("Extract archive")
    async def extract_archive(self, archive_path: Path) -> Path:
        return await asyncio.to_thread(self.extractor.extract, archive_path, self.extract_to_path())

    async def post_install(self, install_directory: Path) -> None:
        """Hook for platform specific fix-ups after extraction."""

    def get_nuget_package_cache_directory(self) -> Path:
        if self.config.nuget_cache is not None:
            return self.config.nuget_cache
        return default_nuget_cache_directory()

    @abstractmethod
    def default_dotnet_home(self) -> Path:
        """Where dotnet is installed on this platform."""

    def get_dotnet_home(self) -> Path:
        if self.config.dotnet_home is not None:
            return self.config.dotnet_home
        return self.default_dotnet_home()

    def get_runtime_assemblies_directory(self) -> Path:
        return find_latest_runtime_directory(self.get_dotnet_home())

    @log_group("Copy reference assemblies")
    async def copy_reference_assemblies(self, install_directory: Path) -> List[AssemblySource]:
        """Fill ``deps`` with runtime and package assemblies."""
        nuget_cache = self.get_nuget_package_cache_directory()
        runtime_dir = self.get_runtime_assemblies_directory()

        package_dirs = [
            package_directory(nuget_cache, package.id, package.version.raw)
            for package in self.config.deps_packages
        ]

        resolver = ReferenceAssemblyResolver(self.config.target_framework, copier=self.copier)
        return await resolver.copy_reference_assemblies(
            package_dirs,
            install_directory / DEPS_DIRECTORY_NAME,
            runtime_dir=runtime_dir
        )


class UnixInstallSteps(InstallSteps):
    """Install steps for Linux and macOS."""

    RUNTIME_CONFIG = {
        "runtimeOptions": {
            "tfm": "net8.0",
            "framework": {
                "name": "Microsoft.NETCore.App",
                "version": "8.0.0"
            }
        }
    }

    def default_dotnet_home(self) -> Path:
        return Path("/", "usr", "share", "dotnet")

    async def post_install(self, install_directory: Path) -> None:
        """Write the runtime config NetcodePatcher needs to start under dotnet."""
        config_file = install_directory / "NetcodePatcher.runtimeconfig.json"
        config_file.write_text(json.dumps(self.RUNTIME_CONFIG), encoding='utf-8')
        self.logger.debug(f"Wrote {config_file}")


class WindowsInstallSteps(InstallSteps):
    """Install steps for Windows."""

    def default_dotnet_home(self) -> Path:
        return Path("C:/", "Program Files", "dotnet")


def choose_install_steps(config: InstallConfig, platform_identifier: Optional[str] = None, **kwargs) -> InstallSteps:
    """Pick the install steps for a platform.

    Args:
        config: Install inputs
        platform_identifier: ``sys.platform`` style name, the current one if None
        **kwargs: Collaborators passed to the steps

    Raises:
        UnsupportedPlatform: For anything but Linux, macOS and Windows
    """
    platform_identifier = platform_identifier or sys.platform

    if platform_identifier == "darwin":
        return UnixInstallSteps(config, **kwargs)

    if platform_identifier.startswith("linux"):
        return UnixInstallSteps(config, **kwargs)

    if platform_identifier == "win32":
        return WindowsInstallSteps(config, **kwargs)

    raise UnsupportedPlatform(f"Unsupported platform: {platform_identifier}")
