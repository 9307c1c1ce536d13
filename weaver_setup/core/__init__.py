"""Core version and target framework logic for weaver-setup."""

from .monikers import TargetFramework, TargetFrameworkMoniker, parse_moniker
from .resolver import ReferenceAssemblyResolver
from .semver import SemVer

__all__ = [
    "SemVer",
    "TargetFramework",
    "TargetFrameworkMoniker",
    "parse_moniker",
    "ReferenceAssemblyResolver",
]
