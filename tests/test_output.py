"""Tests for output writers."""

import io
import json

from rich.console import Console

from weaver_setup.core.monikers import parse_moniker
from weaver_setup.output.formatters import ActionOutputWriter, JSONFormatter


def quiet_console():
    return Console(file=io.StringIO())


class TestActionOutputWriter:
    """Test publishing step outputs."""

    def test_uses_github_output_from_environment(self, tmp_path, monkeypatch):
        """Test falling back to $GITHUB_OUTPUT."""
        outputs = tmp_path / "github_output"
        outputs.write_text("earlier=value\n")
        monkeypatch.setenv("GITHUB_OUTPUT", str(outputs))

        writer = ActionOutputWriter(console=quiet_console())
        writer.set_output("netcode-weaver-directory", "/opt/NetcodeWeaver")

        assert writer.output_file == outputs
        assert outputs.read_text() == "earlier=value\nnetcode-weaver-directory=/opt/NetcodeWeaver\n"

    def test_explicit_file_wins(self, tmp_path, monkeypatch):
        """Test that a given file takes precedence over the environment."""
        monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "ignored"))
        explicit = tmp_path / "explicit"

        ActionOutputWriter(output_file=explicit, console=quiet_console()).set_output("name", "value")

        assert explicit.read_text() == "name=value\n"
        assert not (tmp_path / "ignored").exists()

    def test_console_only_without_output_file(self, monkeypatch):
        """Test echoing outputs when not running under a runner."""
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
        console = quiet_console()

        writer = ActionOutputWriter(console=console)
        writer.set_output("netcode-weaver-directory", "[dir]")

        assert writer.output_file is None
        assert console.file.getvalue() == "netcode-weaver-directory=[dir]\n"


class TestJSONFormatter:
    """Test JSON install results."""

    def test_save_results(self, tmp_path):
        """Test writing the install document."""
        output = tmp_path / "out" / "results.json"
        formatter = JSONFormatter(output)

        formatter.save_results(formatter.format_install_results(
            install_directory=tmp_path / "NetcodeWeaver",
            target_framework=parse_moniker("netstandard2.1"),
            sources=[],
            reused=True,
        ))

        data = json.loads(output.read_text())
        assert data["target_framework"] == "netstandard2.1"
        assert data["reused"] is True
        assert data["packages"] == []
