"""Reporters for decision tables.

- BaseReporter: interface plus file saving
- MarkdownReporter: human-readable table documentation
- ConsoleReporter: Rich terminal output
"""

from dectable.reporters.base import BaseReporter
from dectable.reporters.console import ConsoleReporter
from dectable.reporters.markdown import MarkdownReporter

__all__ = [
    "BaseReporter",
    "MarkdownReporter",
    "ConsoleReporter",
]
