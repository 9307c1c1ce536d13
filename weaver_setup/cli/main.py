"""Main CLI interface for weaver-setup."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import InstallConfig, parse_target_framework
from ..core.errors import WeaverSetupError
from ..core.monikers import registry as moniker_registry
from ..installer import choose_install_steps
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="weaver-setup",
    help="Install NetcodeWeaver and pick the reference assemblies it weaves against",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")


@app.command()
def install(
    netcode_weaver_version: str = typer.Option(
        ...,
        "--netcode-weaver-version",
        envvar="INPUT_NETCODE-WEAVER-VERSION",
        help="NetcodeWeaver release to install, e.g. 3.3.4"
    ),
    target_framework: str = typer.Option(
        ...,
        "--target-framework",
        "-t",
        envvar="INPUT_TARGET-FRAMEWORK",
        help="Target framework moniker the plugin builds for, e.g. netstandard2.1"
    ),
    deps_packages: Optional[str] = typer.Option(
        None,
        "--deps-packages",
        envvar="INPUT_DEPS-PACKAGES",
        help='JSON array of NuGet packages, e.g. [{"id": "Newtonsoft.Json", "version": "13.0.3"}]'
    ),
    install_directory: Optional[Path] = typer.Option(
        None,
        "--install-dir",
        help="Where to unpack NetcodeWeaver (default: ~/NetcodeWeaver)"
    ),
    nuget_cache: Optional[Path] = typer.Option(
        None,
        "--nuget-cache",
        help="NuGet global packages folder (default: ~/.nuget/packages)"
    ),
    dotnet_home: Optional[Path] = typer.Option(
        None,
        "--dotnet-home",
        envvar="DOTNET_ROOT",
        help="dotnet installation root (default depends on the platform)"
    ),
    temp_directory: Optional[Path] = typer.Option(
        None,
        "--temp-dir",
        help="Download directory (default: $RUNNER_TEMP or the system temp dir)"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Install even if an existing install is found"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Install NetcodeWeaver and copy the reference assemblies it needs."""
    setup_logging(verbose=verbose)

    try:
        config = InstallConfig.from_inputs(
            netcode_weaver_version=netcode_weaver_version,
            target_framework=target_framework,
            deps_packages=deps_packages,
            install_directory=install_directory,
            nuget_cache=nuget_cache,
            dotnet_home=dotnet_home,
            temp_directory=temp_directory,
            force=force,
        )

        steps = choose_install_steps(config)
        result = asyncio.run(steps.install_if_necessary())

        ConsoleFormatter(console).format_install_summary(
            install_directory=result.install_directory,
            target_framework=config.target_framework,
            sources=result.sources,
            reused=result.reused
        )

        if output:
            json_formatter = JSONFormatter(output)
            json_formatter.save_results(json_formatter.format_install_results(
                install_directory=result.install_directory,
                target_framework=config.target_framework,
                sources=result.sources,
                reused=result.reused
            ))

    except WeaverSetupError as e:
        logger.error(f"Install failed: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def select(
    target_framework: str = typer.Argument(..., help="Target framework moniker doing the consuming"),
    candidates: List[str] = typer.Argument(..., help="Candidate monikers, e.g. package folder names"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the chosen moniker")
) -> None:
    """Pick the most preferable candidate a target can consume."""
    try:
        target = parse_target_framework(target_framework)
        monikers = moniker_registry.parse_many(candidates)
        chosen = target.most_preferable_for_consumption(monikers)
    except WeaverSetupError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if quiet:
        if chosen is None:
            raise typer.Exit(1)
        console.print(chosen.raw, markup=False, highlight=False)
        return

    ConsoleFormatter(console).format_selection(target, monikers, chosen)
    if chosen is None:
        raise typer.Exit(1)


@app.command()
def check(
    target_framework: str = typer.Argument(..., help="Target framework moniker doing the consuming"),
    other: str = typer.Argument(..., help="Target framework moniker the binaries were built for")
) -> None:
    """Check whether one target can consume binaries built for another."""
    try:
        target = moniker_registry.parse(target_framework)
        built_for = moniker_registry.parse(other)
    except WeaverSetupError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if target.can_consume(built_for):
        console.print(f"[green]{target.raw} can consume {built_for.raw}[/green]")
        return

    console.print(f"[yellow]{target.raw} cannot consume {built_for.raw}[/yellow]")
    raise typer.Exit(1)


@app.command()
def info() -> None:
    """Show supported frameworks and compatibility tables."""
    console.print(Panel.fit(
        "[bold blue]weaver-setup[/bold blue]\n"
        "Installs NetcodeWeaver and resolves the reference assemblies\n"
        "of NuGet dependencies for a target framework",
        title="Information"
    ))

    frameworks = [framework.value for framework in moniker_registry.get_supported_frameworks()]
    console.print(f"\n[bold]Supported Frameworks:[/bold] {', '.join(frameworks)}")

    ConsoleFormatter(console).format_compatibility_tables()


def main() -> None:
    """Main entry point for weaver-setup CLI."""
    app()


if __name__ == "__main__":
    main()
