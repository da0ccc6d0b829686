"""Terminal output for diagnostics, test cases and test failures.

Uses Rich tables; pass ``Console(no_color=True)`` or a console writing
to a file for plain output.

Example:
    >>> reporter = ConsoleReporter()
    >>> reporter.print_diagnostics(table, validate(table))
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table as RichTable
from rich.text import Text

from dectable.core.models import Table, format_condition
from dectable.testing.cases import TestCase
from dectable.testing.driver import TestFailure
from dectable.validation.diagnostics import Diagnostic, Severity


class ConsoleReporter:
    """Prints dectable results to a terminal.

    Attributes:
        console: The Rich console to print to.
    """

    SEVERITY_STYLES = {
        Severity.FATAL: "bold red",
        Severity.ADVISORY: "yellow",
    }

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_diagnostics(self, table: Table, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            self.console.print(f"[green]✓[/green] Table '{table.name}' passes all checks")
            return

        grid = RichTable(title=f"{table.name}: {len(diagnostics)} problem(s)")
        grid.add_column("#", justify="right")
        grid.add_column("Severity")
        grid.add_column("Kind")
        grid.add_column("Rules")
        grid.add_column("Message", overflow="fold")

        for idx, d in enumerate(diagnostics):
            grid.add_row(
                str(idx),
                Text(d.severity.value, style=self.SEVERITY_STYLES[d.severity]),
                d.kind.value,
                ", ".join(str(i) for i in d.rule_indices) or "-",
                d.message,
            )
        self.console.print(grid)

    def print_cases(self, table: Table, cases: Sequence[TestCase]) -> None:
        grid = RichTable(title=f"{table.name}: {len(cases)} test case(s)")
        grid.add_column("Rule", justify="right")
        grid.add_column("Condition")
        grid.add_column("Action")

        for case in cases:
            grid.add_row(str(case.rule_index), format_condition(case.condition), case.action)
        self.console.print(grid)

    def print_failures(self, table: Table, failures: Sequence[TestFailure]) -> None:
        if not failures:
            self.console.print(f"[green]✓[/green] All cases for '{table.name}' passed")
            return

        grid = RichTable(title=f"{table.name}: {len(failures)} failure(s)")
        grid.add_column("Rule", justify="right")
        grid.add_column("Condition")
        grid.add_column("Expected")
        grid.add_column("Actual", style="red")

        for f in failures:
            condition = " ".join(f"{k}={v}" for k, v in f.condition.items())
            grid.add_row(str(f.rule_index), condition, f.expected_action, repr(f.actual_action))
        self.console.print(grid)
