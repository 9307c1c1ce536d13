"""Output formatters for weaver-setup results."""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.monikers import TargetFrameworkMoniker
from ..core.monikers.tables import NETCORE_NET_STANDARD_TARGETS, NETFRAMEWORK_NET_STANDARD_TARGETS
from ..core.resolver import AssemblySource
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for weaver-setup output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_install_summary(
        self,
        install_directory: Path,
        target_framework: TargetFrameworkMoniker,
        sources: Sequence[AssemblySource],
        reused: bool = False
    ) -> None:
        """Display the result of an install run.

        Args:
            install_directory: Where NetcodeWeaver lives
            target_framework: Target the assemblies were chosen for
            sources: Package sources that were copied
            reused: Whether an existing install was reused
        """
        title = "Reused existing install" if reused else "Installed NetcodeWeaver"
        content = (
            f"Directory: {install_directory}\n"
            f"Target framework: {target_framework.raw}\n"
            f"Packages copied: {len(sources)}"
        )
        self.console.print(Panel(content, title=title, style="green"))

        if sources:
            self.console.print(self._create_sources_table(sources))

    def format_selection(
        self,
        target_framework: TargetFrameworkMoniker,
        candidates: Sequence[TargetFrameworkMoniker],
        chosen: Optional[TargetFrameworkMoniker]
    ) -> None:
        """Display which candidate a target would consume."""
        table = Table(title=f"Candidates for {target_framework.raw}")
        table.add_column("Moniker", style="cyan", no_wrap=True)
        table.add_column("Framework")
        table.add_column("Version")
        table.add_column("Consumable")

        for candidate in candidates:
            consumable = target_framework.can_consume(candidate)
            marker = "[bold green]chosen[/bold green]" if candidate is chosen else (
                "yes" if consumable else "[dim]no[/dim]"
            )
            table.add_row(candidate.raw, candidate.framework.value, str(candidate.version), marker)

        self.console.print(table)

        if chosen is None:
            self.console.print(Panel("No consumable candidate", style="red"))

    def format_compatibility_tables(self) -> None:
        """Display the netstandard surface of every known framework release."""
        for title, entries in (
            (".NET", NETCORE_NET_STANDARD_TARGETS),
            (".NET Framework", NETFRAMEWORK_NET_STANDARD_TARGETS),
        ):
            table = Table(title=f"{title} netstandard support")
            table.add_column("Moniker", style="cyan")
            table.add_column("netstandard target")
            table.add_column("Version")
            for raw, (target_raw, target_version) in entries.items():
                table.add_row(raw, target_raw, target_version)
            self.console.print(table)

    def _create_sources_table(self, sources: Sequence[AssemblySource]) -> Table:
        table = Table(title="Reference assemblies")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Folder")
        table.add_column("Target")

        for source in sources:
            # NuGet cache layout is <id>/<version>
            package = f"{source.package_dir.parent.name} {source.package_dir.name}"
            table.add_row(package, source.assembly_root.name, source.moniker.raw)
        return table


class JSONFormatter:
    """JSON formatter for install results."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_install_results(
        self,
        install_directory: Path,
        target_framework: TargetFrameworkMoniker,
        sources: Sequence[AssemblySource],
        reused: bool = False
    ) -> Dict[str, Any]:
        """Build the JSON document describing an install run."""
        packages: List[Dict[str, Any]] = [
            {
                "package_dir": str(source.package_dir),
                "folder": source.assembly_root.name,
                "target_framework": source.moniker.raw,
                "framework": source.moniker.framework.value,
            }
            for source in sources
        ]
        return {
            "timestamp": datetime.now().isoformat(),
            "install_directory": str(install_directory),
            "target_framework": target_framework.raw,
            "reused": reused,
            "packages": packages,
        }

    def save_results(self, results: Dict[str, Any]) -> None:
        """Write results to the output file, if one was given."""
        if not self.output_file:
            return

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2)
        self.logger.info(f"Results saved to {self.output_file}")


class ActionOutputWriter:
    """Publishes step outputs the way GitHub Actions expects them."""

    def __init__(self, output_file: Optional[Path] = None, console: Optional[Console] = None) -> None:
        """Initialize the writer.

        Args:
            output_file: Outputs file, ``$GITHUB_OUTPUT`` if None
            console: Console the outputs are echoed to
        """
        if output_file is None and os.environ.get("GITHUB_OUTPUT"):
            output_file = Path(os.environ["GITHUB_OUTPUT"])
        self.output_file = output_file
        self.console = console or Console()

    def set_output(self, name: str, value: str) -> None:
        """Publish one output value."""
        if self.output_file is not None:
            with open(self.output_file, 'a', encoding='utf-8') as f:
                f.write(f"{name}={value}\n")
        self.console.print(f"{name}={value}", markup=False, highlight=False)
