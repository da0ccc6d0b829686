"""Markdown documentation for decision tables."""

from __future__ import annotations

from collections.abc import Sequence

from dectable.core.models import DEFAULT_TABLE_NAME, ActionRule, ConcreteRule, Table
from dectable.reporters.base import BaseReporter
from dectable.validation.diagnostics import Diagnostic


class MarkdownReporter(BaseReporter):
    """Render a table, its model and its findings as Markdown.

    If any finding is fatal the table cannot be laid out reliably, so
    only the fatal findings are rendered.
    """

    @property
    def file_extension(self) -> str:
        return ".md"

    def generate(self, table: Table, diagnostics: Sequence[Diagnostic]) -> str:
        fatal = [d for d in diagnostics if d.fatal]
        if fatal:
            return "\n".join(f"❌ {d.message}" for d in fatal)

        name = table.name or DEFAULT_TABLE_NAME
        sections = [
            f"# {name}",
            self._generate_model(table),
            self._generate_specification(table),
            self._generate_issues(diagnostics),
        ]
        return "\n".join(sections)

    def _generate_model(self, table: Table) -> str:
        lines = [
            f"{variable.name}: {' | '.join(variable.domain)}"
            for variable in table.model.values()
        ]
        return "## Model\n" + "\n\n".join(lines) + "\n"

    def _cell(self, rule: ActionRule, name: str) -> str:
        var_rule = rule.var_rule(name)
        if isinstance(var_rule, ConcreteRule):
            return " \\| ".join(var_rule.values)
        return " - "

    def _generate_specification(self, table: Table) -> str:
        names = table.variable_names
        header = "|" + "|".join(names) + "|ACTION|"
        divider = "|" + "|".join("-----" for _ in range(len(names) + 1)) + "|"
        rows = [
            "|" + "|".join(self._cell(rule, n) for n in names) + f"|{rule.action}|"
            for rule in table.rules
        ]
        return "## Specification\n" + "\n".join([header, divider, *rows]) + "\n"

    def _generate_issues(self, diagnostics: Sequence[Diagnostic]) -> str:
        if not diagnostics:
            return "## ✅ Table passes all checks!"
        return "### Found the following issues\n" + "\n".join(
            f"❌ {d.message}\n" for d in diagnostics
        )
