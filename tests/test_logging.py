"""Tests for logging helpers."""

import asyncio
import logging

import pytest

from weaver_setup.utils.logging import get_logger, log_group, log_section, setup_logging


@pytest.fixture
def github_actions(monkeypatch):
    monkeypatch.setenv("GITHUB_ACTIONS", "true")


class TestLogGroup:
    """Test grouping output under GitHub Actions."""

    def test_sync_function(self, github_actions, capsys):
        """Test bracketing a plain function call."""
        @log_group("Copy files")
        def work():
            print("working")
            return 42

        assert work() == 42
        assert capsys.readouterr().out == "::group::Copy files\nworking\n::endgroup::\n"

    def test_async_function(self, github_actions, capsys):
        """Test bracketing a coroutine until it finished."""
        @log_group("Download archive")
        async def work():
            await asyncio.sleep(0)
            print("downloaded")
            return "done"

        assert asyncio.run(work()) == "done"
        assert capsys.readouterr().out == "::group::Download archive\ndownloaded\n::endgroup::\n"

    def test_group_closed_when_sync_function_raises(self, github_actions, capsys):
        """Test that a failing call still ends its group."""
        @log_group("Extract archive")
        def work():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            work()
        assert capsys.readouterr().out == "::group::Extract archive\n::endgroup::\n"

    def test_group_closed_when_coroutine_raises(self, github_actions, capsys):
        """Test that a failing coroutine still ends its group."""
        @log_group("Copy reference assemblies")
        async def work():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            asyncio.run(work())
        assert capsys.readouterr().out == "::group::Copy reference assemblies\n::endgroup::\n"

    def test_keeps_function_metadata(self):
        """Test that wrapped functions keep their name."""
        @log_group("Title")
        async def download_archive():
            pass

        assert download_archive.__name__ == "download_archive"


class TestLogSection:
    """Test sections outside GitHub Actions."""

    def test_prints_rule(self, monkeypatch, capsys):
        """Test a rich rule instead of workflow commands."""
        monkeypatch.delenv("GITHUB_ACTIONS", raising=False)

        with log_section("Download archive"):
            print("inside")

        out = capsys.readouterr().out
        assert "Download archive" in out
        assert "inside" in out
        assert "::group::" not in out

    def test_other_values_are_not_github_actions(self, monkeypatch, capsys):
        """Test that only the exact value "true" enables workflow commands."""
        monkeypatch.setenv("GITHUB_ACTIONS", "false")

        with log_section("Title"):
            pass

        assert "::group::" not in capsys.readouterr().out


class TestSetupLogging:
    """Test logging configuration."""

    def test_verbose_lowers_level(self):
        """Test that verbose mode enables debug output for our loggers."""
        get_logger("TestSetupLogging")

        setup_logging(verbose=True)
        try:
            assert logging.getLogger("TestSetupLogging").level == logging.DEBUG
        finally:
            setup_logging()

        assert logging.getLogger("TestSetupLogging").level == logging.INFO
        assert logging.getLogger("aiohttp").level == logging.WARNING
