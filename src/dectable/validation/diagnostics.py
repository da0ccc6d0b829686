"""Diagnostic types produced by the validation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from dectable.core.models import Condition, condition_to_dict


class Severity(str, Enum):
    """How serious a finding is."""

    FATAL = "fatal"  # Structural; later checks cannot run
    ADVISORY = "advisory"  # Semantic; table is usable but not sound


class DiagnosticKind(str, Enum):
    """What a diagnostic is about."""

    INCOMPLETE_RULE = "incomplete_rule"
    REPEATED_VARIABLE = "repeated_variable"
    UNKNOWN_VARIABLE = "unknown_variable"
    INVALID_VALUE = "invalid_value"
    DUPLICATE_ACTION = "duplicate_action"
    RULE_CONFLICT = "rule_conflict"
    UNCOVERED_CONDITION = "uncovered_condition"


@dataclass(frozen=True)
class Diagnostic:
    """One finding about a table.

    Attributes:
        severity: FATAL findings stop the pipeline; ADVISORY ones accumulate.
        kind: Which check produced the finding.
        message: Human-readable description.
        rule_indices: Indices of the implicated rules (may be empty).
        condition: The uncovered condition, for UNCOVERED_CONDITION.
    """

    severity: Severity
    kind: DiagnosticKind
    message: str
    rule_indices: tuple[int, ...] = ()
    condition: Condition | None = None

    @property
    def fatal(self) -> bool:
        return self.severity == Severity.FATAL

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
            "rule_indices": list(self.rule_indices),
        }
        if self.condition is not None:
            result["condition"] = condition_to_dict(self.condition)
        return result
