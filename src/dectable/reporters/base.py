"""Abstract base reporter class for dectable.

Reporters turn a table and its diagnostics into a document for some
audience: Markdown for documentation, rich tables for terminals.

Example:
    >>> class CustomReporter(BaseReporter):
    ...     @property
    ...     def file_extension(self) -> str:
    ...         return ".txt"
    ...
    ...     def generate(self, table, diagnostics) -> str:
    ...         return f"{table.name}: {len(diagnostics)} problems"
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from dectable.core.models import DEFAULT_TABLE_NAME, Table
from dectable.validation.diagnostics import Diagnostic


class BaseReporter(ABC):
    """Abstract base class for all dectable reporters.

    Attributes:
        output_path: Optional default path for saving reports.
    """

    def __init__(self, output_path: str | Path | None = None) -> None:
        self.output_path = Path(output_path) if output_path else None

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension for this report format, including the dot."""

    @abstractmethod
    def generate(self, table: Table, diagnostics: Sequence[Diagnostic]) -> str:
        """Render ``table`` and ``diagnostics`` to a string."""

    def report_filename(self, table: Table) -> str:
        """Derive a file name such as ``traffic-light.md`` from the table name."""
        name = (table.name or DEFAULT_TABLE_NAME).lower()
        slug = re.sub(r"\s+", "-", name.strip())
        return f"{slug}{self.file_extension}"

    def save(
        self,
        table: Table,
        diagnostics: Sequence[Diagnostic],
        path: str | Path | None = None,
    ) -> Path:
        """Generate a report and write it to disk.

        Args:
            table: The table to report on.
            diagnostics: Its validation findings.
            path: File or directory to write to. A directory gets the
                derived file name. Defaults to ``output_path``, then the
                current directory.

        Returns:
            Path of the written file.
        """
        target = Path(path) if path else self.output_path or Path(".")
        if target.is_dir() or not target.suffix:
            target = target / self.report_filename(table)

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.generate(table, diagnostics), encoding="utf-8")
        return target
