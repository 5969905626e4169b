"""
Console reporter for validation results.

Formats validation results using Rich for clear, colored output.
"""

from collections import Counter

from rich.console import Console
from rich.table import Table

from factoryplanner.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_result(self, result: ValidationResult) -> None:
        """
        Print a validation result: violations table, then a summary.

        Args:
            result: Validation result to display.
        """
        if result.is_valid:
            self.console.print("[green]Validation passed: no integrity violations[/green]")
            return

        table = Table(title="Game Data Integrity Violations", show_header=True)
        table.add_column("Code", style="red", no_wrap=True)
        table.add_column("Source", style="cyan")
        table.add_column("Entity", style="blue")
        table.add_column("Message", style="dim")

        for error in result.errors:
            table.add_row(
                error.code.value,
                error.source,
                error.entity_id or "-",
                error.message,
            )

        self.console.print(table)
        self._print_summary(result)

    def _print_summary(self, result: ValidationResult) -> None:
        """Print violation counts per code."""
        counts = Counter(error.code.value for error in result.errors)

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  [red]Violations: {len(result.errors)}[/red]")
        for code, count in sorted(counts.items()):
            self.console.print(f"  {code}: {count}")
