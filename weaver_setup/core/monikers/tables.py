"""Compatibility tables mapping framework releases to their netstandard surface.

Each entry maps a moniker ``raw`` identifier to the ``(raw, version)`` pair of
the netstandard target it implements. The .NET Framework rows intentionally
pair ``netstandard2.1`` with version ``2.0``: those releases only implement the
2.0 surface, so netstandard2.1 is not consumable by them.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

NETCORE_NET_STANDARD_TARGETS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "net8.0": ("netstandard2.1", "2.1"),
    "net7.0": ("netstandard2.1", "2.1"),
    "net6.0": ("netstandard2.1", "2.1"),
    "net5.0": ("netstandard2.1", "2.1"),
    "net3.1": ("netstandard2.1", "2.1"),
    "net3.0": ("netstandard2.1", "2.1"),

    "net2.2": ("netstandard2.0", "2.0"),
    "net2.1": ("netstandard2.0", "2.0"),
    "net2.0": ("netstandard2.0", "2.0"),

    "net1.1": ("netstandard1.6", "1.6"),
    "net1.0": ("netstandard1.6", "1.6"),
})

NETFRAMEWORK_NET_STANDARD_TARGETS: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "net481": ("netstandard2.1", "2.0"),
    "net48": ("netstandard2.1", "2.0"),
    "net472": ("netstandard2.1", "2.0"),
    "net471": ("netstandard2.1", "2.0"),
    "net47": ("netstandard2.1", "2.0"),
    "net462": ("netstandard2.1", "2.0"),
    "net461": ("netstandard2.1", "2.0"),
    "net46": ("netstandard2.1", "2.0"),

    "net452": ("netstandard1.2", "1.2"),
    "net451": ("netstandard1.2", "1.2"),

    "net45": ("netstandard1.1", "1.1"),
})
