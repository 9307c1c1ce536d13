"""weaver-setup - installs NetcodeWeaver and resolves target framework compatible reference assemblies."""

__version__ = "0.1.0"

from .core import ReferenceAssemblyResolver, SemVer, TargetFramework, TargetFrameworkMoniker, parse_moniker
from .config import InstallConfig, NuGetPackageSpecifier
from .installer import InstallSteps, choose_install_steps

__all__ = [
    "SemVer",
    "TargetFramework",
    "TargetFrameworkMoniker",
    "parse_moniker",
    "ReferenceAssemblyResolver",
    "InstallConfig",
    "NuGetPackageSpecifier",
    "InstallSteps",
    "choose_install_steps",
]
