"""Reference assembly resolution for NuGet packages."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..install.copier import FileCopier
from ..utils.logging import get_logger
from ..utils.path_utils import find_assembly_root, list_subdirectories
from .errors import InstallationError, NoConsumableSource, PackageNotFound
from .monikers import MonikerParserRegistry, TargetFrameworkMoniker, registry as default_registry

# Runtime assemblies every weaving run needs next to the package assemblies
RUNTIME_ASSEMBLIES = ("mscorlib.dll", "netstandard.dll")


@dataclass(frozen=True)
class AssemblySource:
    """The folder chosen to supply a package's assemblies."""

    package_dir: Path
    assembly_root: Path
    moniker: TargetFrameworkMoniker

    @property
    def path(self) -> Path:
        """Directory holding the chosen target's assemblies."""
        return self.assembly_root / self.moniker.raw


class ReferenceAssemblyResolver:
    """Chooses and copies the best assemblies of each package for a target."""

    def __init__(
        self,
        target_framework: TargetFrameworkMoniker,
        copier: Optional[FileCopier] = None,
        parser_registry: Optional[MonikerParserRegistry] = None
    ) -> None:
        """Initialize the resolver.

        Args:
            target_framework: Target the assemblies will be consumed by
            copier: File copier, a default one if None
            parser_registry: Moniker parsers, the default registry if None
        """
        self.target_framework = target_framework
        self.copier = copier or FileCopier()
        self.parser_registry = parser_registry or default_registry
        self.logger = get_logger("ReferenceAssemblyResolver")

    def candidate_monikers(self, assembly_root: Path) -> List[TargetFrameworkMoniker]:
        """Parse the target folders under a ``ref``/``lib`` folder.

        Folders whose names are not recognized monikers are skipped.
        """
        names = list_subdirectories(assembly_root)
        monikers = self.parser_registry.parse_many(names)

        skipped = len(names) - len(monikers)
        if skipped:
            self.logger.debug(f"Skipped {skipped} unrecognized folder(s) in {assembly_root}")
        return monikers

    def select_source(self, package_dir: Path) -> Optional[AssemblySource]:
        """Pick the assembly folder of a package to use.

        Args:
            package_dir: Extracted package directory

        Returns:
            The chosen source, or None if the package has no lib/ref folder

        Raises:
            PackageNotFound: If the package directory does not exist
            NoConsumableSource: If no shipped target can be consumed
        """
        if not package_dir.is_dir():
            raise PackageNotFound(str(package_dir))

        assembly_root = find_assembly_root(package_dir)
        if assembly_root is None:
            self.logger.warning(f"Couldn't find lib/ref folder in {package_dir}, skipping")
            return None

        candidates = self.candidate_monikers(assembly_root)
        chosen = self.target_framework.most_preferable_for_consumption(candidates)
        if chosen is None:
            raise NoConsumableSource(str(package_dir))

        self.logger.info(
            f"Using {assembly_root.name}/{chosen.raw} of {package_dir} for {self.target_framework.raw}"
        )
        return AssemblySource(package_dir=package_dir, assembly_root=assembly_root, moniker=chosen)

    async def copy_package_assemblies(self, package_dir: Path, to_dir: Path) -> Optional[AssemblySource]:
        """Copy the chosen assemblies of one package into ``to_dir``."""
        source = self.select_source(package_dir)
        if source is None:
            return None

        await self.copier.copy_directory(source.path, to_dir)
        return source

    async def copy_reference_assemblies(
        self,
        package_dirs: Sequence[Path],
        to_dir: Path,
        runtime_dir: Optional[Path] = None
    ) -> List[AssemblySource]:
        """Copy runtime and package assemblies into ``to_dir`` concurrently.

        Every operation runs to completion before failures are reported, so
        all missing dependencies surface in one pass.

        Args:
            package_dirs: Extracted package directories
            to_dir: Destination dependency directory
            runtime_dir: Runtime to take ``mscorlib``/``netstandard`` from

        Returns:
            Sources used, in package order, without skipped packages

        Raises:
            InstallationError: Holding every failure
        """
        to_dir.mkdir(parents=True, exist_ok=True)

        operations = []
        if runtime_dir is not None:
            operations.extend(
                self.copier.copy_file(runtime_dir / name, to_dir / name)
                for name in RUNTIME_ASSEMBLIES
            )
        runtime_count = len(operations)
        operations.extend(
            self.copy_package_assemblies(package_dir, to_dir)
            for package_dir in package_dirs
        )

        results = await asyncio.gather(*operations, return_exceptions=True)

        failures = []
        for result in results:
            if isinstance(result, Exception):
                self.logger.error(str(result))
                failures.append(result)
        if failures:
            raise InstallationError(failures)

        return [
            result for result in results[runtime_count:]
            if isinstance(result, AssemblySource)
        ]
