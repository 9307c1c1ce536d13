"""Tests for the command line interface."""

from typer.testing import CliRunner

from weaver_setup.cli.main import app

runner = CliRunner()


class TestSelectCommand:
    """Test the select command."""

    def test_quiet_prints_chosen(self):
        """Test printing only the chosen moniker."""
        result = runner.invoke(app, ["select", "net6.0", "netstandard1.0", "netstandard2.0", "netstandard2.1", "-q"])

        assert result.exit_code == 0
        assert result.output.strip() == "netstandard2.1"

    def test_table_output(self):
        """Test the candidate table."""
        result = runner.invoke(app, ["select", "net48", "netstandard2.0", "netstandard2.1"])

        assert result.exit_code == 0
        assert "netstandard2.0" in result.output
        assert "chosen" in result.output

    def test_nothing_consumable(self):
        """Test exiting with 1 when no candidate fits."""
        result = runner.invoke(app, ["select", "netstandard2.0", "net48", "-q"])

        assert result.exit_code == 1
        assert result.output.strip() == ""

    def test_invalid_target(self):
        """Test rejecting an unknown target."""
        result = runner.invoke(app, ["select", "netcoreapp3.1", "netstandard2.0"])

        assert result.exit_code == 1
        assert "target-framework" in result.output


class TestCheckCommand:
    """Test the check command."""

    def test_consumable(self):
        """Test a consumable combination."""
        result = runner.invoke(app, ["check", "net48", "netstandard2.0"])

        assert result.exit_code == 0
        assert "can consume" in result.output

    def test_not_consumable(self):
        """Test an unsupported combination."""
        result = runner.invoke(app, ["check", "net48", "netstandard2.1"])

        assert result.exit_code == 1
        assert "cannot consume" in result.output

    def test_unrecognized(self):
        """Test an invalid moniker."""
        result = runner.invoke(app, ["check", "foo", "net48"])

        assert result.exit_code == 1
        assert "foo" in result.output

    def test_bracketed_input_is_printed_verbatim(self):
        """Test that input looking like console markup is reported as text."""
        result = runner.invoke(app, ["check", "[/bold]", "net48"])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "'[/bold]'" in result.output

    def test_bracketed_opening_tag_is_printed_verbatim(self):
        """Test that an opening style tag does not restyle the message."""
        result = runner.invoke(app, ["check", "net48", "[red]net"])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "'[red]net'" in result.output


class TestInfoCommand:
    """Test the info command."""

    def test_info(self):
        """Test listing frameworks and tables."""
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "NetStandard" in result.output
        assert "net481" in result.output


class TestInstallCommand:
    """Test input validation of the install command."""

    def test_invalid_target_framework(self, tmp_path):
        """Test that a bad input aborts with its name."""
        result = runner.invoke(app, [
            "install",
            "--netcode-weaver-version", "3.3.4",
            "--target-framework", "foo",
            "--install-dir", str(tmp_path / "weaver"),
        ])

        assert result.exit_code == 1
        assert '"target-framework" input value is invalid!' in result.output

    def test_inputs_from_environment(self, tmp_path):
        """Test reading GitHub Actions style inputs."""
        result = runner.invoke(
            app,
            ["install", "--install-dir", str(tmp_path / "weaver")],
            env={
                "INPUT_NETCODE-WEAVER-VERSION": "3.3.4+meta",
                "INPUT_TARGET-FRAMEWORK": "netstandard2.1",
            },
        )

        assert result.exit_code == 1
        assert '"netcode-weaver-version" input value is invalid!' in result.output
