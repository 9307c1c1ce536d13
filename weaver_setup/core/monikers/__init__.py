"""Target framework monikers and their compatibility rules."""

from .base import (
    NetCoreMoniker,
    NetFrameworkMoniker,
    NetStandardMoniker,
    TargetFramework,
    TargetFrameworkMoniker,
)
from .registry import MonikerParserRegistry, RegexMonikerParser

# Matching order matters: netstandard first, then .NET before .NET Framework
registry = MonikerParserRegistry()
registry.register(RegexMonikerParser(TargetFramework.NET_STANDARD, r'^netstandard(?P<version>[12]\.\d)$'))
registry.register(RegexMonikerParser(TargetFramework.NET_CORE, r'^net(?P<version>[5-8]\.0)$'))
registry.register(RegexMonikerParser(TargetFramework.NET_FRAMEWORK, r'^net(?P<version>\d{2,3})$'))

parse_moniker = registry.parse
try_parse_moniker = registry.try_parse

__all__ = [
    "TargetFramework",
    "TargetFrameworkMoniker",
    "NetStandardMoniker",
    "NetCoreMoniker",
    "NetFrameworkMoniker",
    "MonikerParserRegistry",
    "RegexMonikerParser",
    "registry",
    "parse_moniker",
    "try_parse_moniker",
]
