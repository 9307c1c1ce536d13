"""Tests for install input parsing."""

from pathlib import Path

import pytest

from weaver_setup.config import (
    InstallConfig,
    NuGetPackageSpecifier,
    default_temp_directory,
    parse_deps_packages,
)
from weaver_setup.core.errors import (
    BuildMetadataNotAllowed,
    ConfigurationError,
    PrereleaseNotAllowed,
    UnrecognizedMoniker,
)
from weaver_setup.core.monikers import NetStandardMoniker
from weaver_setup.core.semver import SemVer


class TestInstallConfig:
    """Test building the install configuration."""

    def test_from_inputs(self, tmp_path):
        """Test parsing a complete set of inputs."""
        config = InstallConfig.from_inputs(
            netcode_weaver_version="3.3.4",
            target_framework="netstandard2.1",
            deps_packages='[{"id": "Newtonsoft.Json", "version": "13.0.3"}]',
            install_directory=tmp_path / "weaver",
            nuget_cache=None,
        )

        assert config.netcode_weaver_version == SemVer.parse("3.3.4")
        assert isinstance(config.target_framework, NetStandardMoniker)
        assert config.deps_packages == [
            NuGetPackageSpecifier(id="Newtonsoft.Json", version=SemVer.parse("13.0.3"))
        ]
        assert config.install_directory == tmp_path / "weaver"
        assert config.nuget_cache is None
        assert config.force is False

    def test_prerelease_weaver_version_rejected(self):
        """Test that weaver releases must be plain versions."""
        with pytest.raises(ConfigurationError) as exc_info:
            InstallConfig.from_inputs(netcode_weaver_version="3.3.4-rc.1", target_framework="net48")

        assert exc_info.value.input_name == "netcode-weaver-version"
        assert isinstance(exc_info.value.__cause__, PrereleaseNotAllowed)
        assert '"netcode-weaver-version" input value is invalid!' in str(exc_info.value)

    def test_invalid_target_framework(self):
        """Test that the moniker error is chained."""
        with pytest.raises(ConfigurationError) as exc_info:
            InstallConfig.from_inputs(netcode_weaver_version="3.3.4", target_framework="netcoreapp3.1")

        assert exc_info.value.input_name == "target-framework"
        assert isinstance(exc_info.value.__cause__, UnrecognizedMoniker)

    def test_direct_construction_is_validated(self):
        """Test __post_init__ checks on the weaver version."""
        with pytest.raises(ConfigurationError):
            InstallConfig(
                netcode_weaver_version=SemVer.parse("3.3.4+abc"),
                target_framework=NetStandardMoniker("netstandard2.1", SemVer.coerce("2.1")),
            )


class TestDepsPackages:
    """Test the deps-packages input."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty(self, text):
        """Test that a missing value means no packages."""
        assert parse_deps_packages(text) == []

    def test_build_metadata_rejected(self):
        """Test that package versions cannot carry build metadata."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_deps_packages('[{"id": "A", "version": "1.0.0+meta"}]')

        assert exc_info.value.input_name == "deps-packages"
        assert isinstance(exc_info.value.__cause__, BuildMetadataNotAllowed)

    def test_prerelease_allowed(self):
        """Test that prerelease packages are fine."""
        packages = parse_deps_packages('[{"id": "A", "version": "1.0.0-preview.1"}]')
        assert packages[0].version.prerelease == ("preview", "1")
        assert str(packages[0]) == "A@1.0.0-preview.1"

    @pytest.mark.parametrize("text", [
        "not json",
        '{"id": "A", "version": "1.0.0"}',
        '[{"id": "A"}]',
        '[{"version": "1.0.0"}]',
        '["A@1.0.0"]',
        '[{"id": "A", "version": "1.0"}]',
    ])
    def test_malformed(self, text):
        """Test malformed package lists."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_deps_packages(text)
        assert exc_info.value.__cause__ is not None


class TestTempDirectory:
    """Test the download directory default."""

    def test_runner_temp(self, monkeypatch, tmp_path):
        """Test using the runner temp directory."""
        monkeypatch.setenv("RUNNER_TEMP", str(tmp_path))
        assert default_temp_directory() == tmp_path

    def test_system_temp(self, monkeypatch):
        """Test falling back to the system temp directory."""
        monkeypatch.delenv("RUNNER_TEMP", raising=False)
        assert isinstance(default_temp_directory(), Path)
