"""Target framework moniker model and compatibility rules."""

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Tuple

from ..errors import IncomparableTargets
from ..semver import SemVer
from .tables import NETCORE_NET_STANDARD_TARGETS, NETFRAMEWORK_NET_STANDARD_TARGETS


class TargetFramework(str, Enum):
    """The closed set of framework families a moniker can belong to."""

    NET_STANDARD = "NetStandard"
    NET_CORE = "NetCore"
    NET_FRAMEWORK = "NetFramework"


@dataclass(frozen=True)
class TargetFrameworkMoniker(ABC):
    """A parsed target framework moniker such as ``net6.0`` or ``net48``.

    Attributes:
        raw: The identifier exactly as given, also the folder name in packages
        version: SemVer derived from the identifier
    """

    framework: ClassVar[TargetFramework]

    raw: str
    version: SemVer

    @staticmethod
    def new(framework: TargetFramework, raw: str, version: str) -> "TargetFrameworkMoniker":
        """Create the moniker variant for ``framework``.

        Args:
            framework: Framework family
            raw: Original identifier
            version: Version text captured from the identifier

        Returns:
            Moniker of the matching variant
        """
        if framework is TargetFramework.NET_STANDARD:
            return NetStandardMoniker(raw, SemVer.coerce(version))
        if framework is TargetFramework.NET_CORE:
            return NetCoreMoniker(raw, SemVer.coerce(version))
        if framework is TargetFramework.NET_FRAMEWORK:
            # "472" -> "4.7.2"
            return NetFrameworkMoniker(raw, SemVer.coerce(".".join(version)))
        raise ValueError(f"Unknown target framework: {framework!r}")

    def can_consume(self, other: "TargetFrameworkMoniker") -> bool:
        """Check whether binaries built for ``other`` load on ``self``."""
        if other.framework is self.framework:
            return self.version >= other.version

        if other.framework is TargetFramework.NET_STANDARD:
            supported = self.supported_net_standard_target()
            if supported is None:
                return False
            return supported.can_consume(other)

        return False

    def is_preferable_to(self, other: Optional["TargetFrameworkMoniker"]) -> int:
        """Rank ``self`` against ``other`` from a consumer's point of view.

        The sign of the return value indicates the relative preferability of
        the two targets:

        - negative if ``self`` is less preferable than ``other``,
        - positive if ``self`` is more preferable than ``other``,
        - zero if they are equally preferable.

        Raises:
            IncomparableTargets: For two different non-netstandard families
        """
        if other is None:
            return 1

        if other.framework is self.framework:
            return self.version.compare(other.version)

        if other.framework is TargetFramework.NET_STANDARD:
            return -other.is_preferable_to(self.supported_net_standard_target())

        raise IncomparableTargets(self.framework.value, other.framework.value)

    def most_preferable_for_consumption(
        self,
        targets: Iterable["TargetFrameworkMoniker"]
    ) -> Optional["TargetFrameworkMoniker"]:
        """Pick the best target ``self`` can consume.

        The sort is stable, so among equally preferable targets the last one
        in input order wins. Preference is not transitive across families:
        netstandard2.1 ties with both net6.0 and net5.0 while net6.0 beats
        net5.0, so the result depends on input order. For ``net6.0`` the
        candidates ``[net6.0, netstandard2.1, net5.0]`` yield ``net5.0``.

        Returns:
            The most preferable consumable target, or None
        """
        consumable = [target for target in targets if self.can_consume(target)]
        if not consumable:
            return None

        ordered = sorted(
            consumable,
            key=functools.cmp_to_key(lambda a, b: a.is_preferable_to(b))
        )
        return ordered[-1]

    @abstractmethod
    def supported_net_standard_target(self) -> Optional["NetStandardMoniker"]:
        """The netstandard surface this target implements, if known."""

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class NetStandardMoniker(TargetFrameworkMoniker):
    """A ``netstandardX.Y`` target."""

    framework: ClassVar[TargetFramework] = TargetFramework.NET_STANDARD

    def can_consume(self, other: TargetFrameworkMoniker) -> bool:
        # netstandard is an API surface, it cannot load runtime-specific builds
        if other.framework is not TargetFramework.NET_STANDARD:
            return False
        return self.version >= other.version

    def is_preferable_to(self, other: Optional[TargetFrameworkMoniker]) -> int:
        if other is None:
            return 1

        if other.framework is self.framework:
            return self.version.compare(other.version)

        return self.is_preferable_to(other.supported_net_standard_target())

    def supported_net_standard_target(self) -> "NetStandardMoniker":
        return self


def _build_table(entries: Mapping[str, Tuple[str, str]]) -> Mapping[str, NetStandardMoniker]:
    table: Dict[str, NetStandardMoniker] = {}
    for raw, (target_raw, target_version) in entries.items():
        table[raw] = NetStandardMoniker(target_raw, SemVer.coerce(target_version))
    return MappingProxyType(table)


@dataclass(frozen=True)
class NetCoreMoniker(TargetFrameworkMoniker):
    """A .NET (Core) target such as ``net6.0``."""

    framework: ClassVar[TargetFramework] = TargetFramework.NET_CORE

    def supported_net_standard_target(self) -> Optional[NetStandardMoniker]:
        return _NETCORE_TARGETS.get(self.raw)


@dataclass(frozen=True)
class NetFrameworkMoniker(TargetFrameworkMoniker):
    """A .NET Framework target such as ``net48``."""

    framework: ClassVar[TargetFramework] = TargetFramework.NET_FRAMEWORK

    def supported_net_standard_target(self) -> Optional[NetStandardMoniker]:
        return _NETFRAMEWORK_TARGETS.get(self.raw)


_NETCORE_TARGETS = _build_table(NETCORE_NET_STANDARD_TARGETS)
_NETFRAMEWORK_TARGETS = _build_table(NETFRAMEWORK_NET_STANDARD_TARGETS)
