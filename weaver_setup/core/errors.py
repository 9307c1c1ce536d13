"""Error types raised by weaver-setup."""

from typing import List, Optional


class WeaverSetupError(Exception):
    """Base class for all weaver-setup errors."""


class VersionError(WeaverSetupError):
    """Raised when a version string is unusable."""


class InvalidVersion(VersionError):
    """Raised when a string cannot be turned into a SemVer."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Not a valid SemVer: '{version}'")
        self.version = version


class BuildMetadataNotAllowed(VersionError):
    """Raised when build metadata is present but disallowed."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Build metadata not allowed: '{version}'")
        self.version = version


class PrereleaseNotAllowed(VersionError):
    """Raised when a prerelease version is present but disallowed."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Prerelease versions not allowed: '{version}'")
        self.version = version


class MonikerError(WeaverSetupError):
    """Raised for target framework moniker problems."""


class UnrecognizedMoniker(MonikerError):
    """Raised when no framework pattern matches a moniker string."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Not a valid target framework moniker: '{raw}'")
        self.raw = raw


class MissingVersionCapture(MonikerError):
    """Raised when a moniker pattern matched without capturing a version.

    This points at a broken pattern rather than bad input.
    """

    def __init__(self, pattern: str) -> None:
        super().__init__(
            f"Invalid target framework moniker regex - missing version capture: {pattern}"
        )
        self.pattern = pattern


class IncomparableTargets(MonikerError):
    """Raised when two targets cannot be ranked against each other."""

    def __init__(self, left: str, right: str) -> None:
        super().__init__(
            f"Cannot compare preferability of {left} and {right} targets as they are incompatible."
        )
        self.left = left
        self.right = right


class NoConsumableSource(WeaverSetupError):
    """Raised when a package ships nothing the requested target can consume."""

    def __init__(self, package_dir: str) -> None:
        super().__init__(f"No consumable sources were found in {package_dir}")
        self.package_dir = package_dir


class RuntimeNotFound(WeaverSetupError):
    """Raised when no Microsoft.NETCore.App runtime is installed."""


class UnsupportedPlatform(WeaverSetupError):
    """Raised when the current platform has no install steps."""


class ConfigurationError(WeaverSetupError):
    """Raised when an input value is invalid."""

    def __init__(self, input_name: str, reason: Optional[str] = None) -> None:
        message = f'"{input_name}" input value is invalid!'
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.input_name = input_name


class InstallationError(WeaverSetupError):
    """Raised once all concurrent copy operations settled and some failed."""

    def __init__(self, failures: List[BaseException]) -> None:
        self.failures = list(failures)
        details = "; ".join(str(failure) for failure in self.failures)
        super().__init__(
            f"{len(self.failures)} reference assembly operation(s) failed: {details}"
        )


class EnvironmentNotConfigured(WeaverSetupError):
    """Raised when a required environment variable is missing."""

    def __init__(self, variable: str, purpose: str) -> None:
        super().__init__(f"${variable} environment variable not set - can't {purpose}.")
        self.variable = variable


class ArchiveError(WeaverSetupError):
    """Raised when a release archive cannot be downloaded or extracted."""


class PackageNotFound(WeaverSetupError):
    """Raised when a package is missing from the NuGet cache."""

    def __init__(self, package_dir: str) -> None:
        super().__init__(f"Package directory not found: {package_dir}")
        self.package_dir = package_dir
