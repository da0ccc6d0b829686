"""Table validation pipeline.

Checks run in a fixed order. The first three are structural and fatal:
as soon as one of them finds anything, the pipeline returns only those
findings, because the later checks assume a well-formed table.

    1. every rule restricts every model variable once (fatal)
    2. no rule names a variable outside the model     (fatal)
    3. no concrete rule uses a value outside the domain (fatal)
    4. advisory checks, all accumulated:
       a. an action is assigned by more than one rule
       b. overlapping rules assign different actions
       c. a condition is covered by no rule

A table is *sound* only when the list is empty, advisory findings
included.

Example:
    >>> diagnostics = validate(table)
    >>> for d in diagnostics:
    ...     print(f"[{d.severity.value}] {d.message}")
    >>> is_sound(diagnostics)
    False
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Sequence

from dectable.combinatorial.algebra import conflicting_rules, uncovered_conditions
from dectable.core.models import ActionRule, ConcreteRule, Model, Table, format_condition
from dectable.errors import ErrorContext, UnsoundTableError
from dectable.validation.diagnostics import Diagnostic, DiagnosticKind, Severity

logger = logging.getLogger(__name__)

_Check = tuple[DiagnosticKind, Callable[[int, ActionRule], str | None]]


def show_list(things: Sequence[object], oxford: bool = False) -> str:
    """Render ``things`` as ``"a & b"`` or ``"a, b, & c"``."""
    if len(things) == 0:
        return "(empty list)"
    if len(things) == 1:
        return str(things[0])
    if len(things) == 2:
        return f"{things[0]}{',' if oxford else ''} & {things[1]}"
    return f"{things[0]}, " + show_list(things[1:], oxford=True)


def _missing_variables(rule: ActionRule, model: Model) -> list[str]:
    named = set(rule.variable_names)
    return [name for name in model if name not in named]


def _repeated_variables(rule: ActionRule) -> list[str]:
    counts = Counter(rule.variable_names)
    return [name for name, count in counts.items() if count > 1]


def _unknown_variables(rule: ActionRule, model: Model) -> list[str]:
    return [name for name in rule.variable_names if name not in model]


def _invalid_values(rule: ActionRule, model: Model) -> dict[str, list[str]]:
    invalid: dict[str, list[str]] = {}
    for var_rule in rule.rule:
        if not isinstance(var_rule, ConcreteRule):
            continue
        domain = model[var_rule.name].domain
        bad = [value for value in var_rule.values if value not in domain]
        if bad:
            invalid[var_rule.name] = bad
    return invalid


def _structural_check(table: Table, checks: list[_Check]) -> list[Diagnostic]:
    diagnostics = []
    for idx, rule in enumerate(table.rules):
        for kind, describe in checks:
            message = describe(idx, rule)
            if message is not None:
                logger.warning(message, extra={"table": table.name, "rule_index": idx})
                diagnostics.append(
                    Diagnostic(Severity.FATAL, kind, message, rule_indices=(idx,))
                )
    return diagnostics


def _describe_missing(table: Table) -> Callable[[int, ActionRule], str | None]:
    def describe(idx: int, rule: ActionRule) -> str | None:
        missing = _missing_variables(rule, table.model)
        if not missing:
            return None
        return (
            f"Rule {idx} does not cover all model variables. "
            f"Missing: {', '.join(missing)}"
        )

    return describe


def _describe_repeated(table: Table) -> Callable[[int, ActionRule], str | None]:
    def describe(idx: int, rule: ActionRule) -> str | None:
        repeated = _repeated_variables(rule)
        if not repeated:
            return None
        return f"Rule {idx} restricts variables more than once: {show_list(repeated)}"

    return describe


def _describe_unknown(table: Table) -> Callable[[int, ActionRule], str | None]:
    def describe(idx: int, rule: ActionRule) -> str | None:
        unknown = _unknown_variables(rule, table.model)
        if not unknown:
            return None
        return f"Rule {idx} contains variables not included in model: {show_list(unknown)}"

    return describe


def _describe_invalid(table: Table) -> Callable[[int, ActionRule], str | None]:
    def describe(idx: int, rule: ActionRule) -> str | None:
        invalid = _invalid_values(rule, table.model)
        if not invalid:
            return None
        parts = [
            f'variable rule for "{name}" references invalid value(s) {show_list(bad)}. '
            f"Allowed values are {show_list(table.model[name].domain)}"
            for name, bad in invalid.items()
        ]
        return f"Rule {idx}: " + "; ".join(parts)

    return describe


def _duplicate_actions(table: Table) -> list[Diagnostic]:
    by_action: dict[str, list[int]] = {}
    for idx, rule in enumerate(table.rules):
        by_action.setdefault(rule.action, []).append(idx)

    return [
        Diagnostic(
            Severity.ADVISORY,
            DiagnosticKind.DUPLICATE_ACTION,
            f'Warning: Action "{action}" covered by rules {show_list(idxs)}',
            rule_indices=tuple(idxs),
        )
        for action, idxs in by_action.items()
        if len(idxs) > 1
    ]


def _conflicts(table: Table) -> list[Diagnostic]:
    return [
        Diagnostic(
            Severity.ADVISORY,
            DiagnosticKind.RULE_CONFLICT,
            f"Rules {i} & {j} conflict (rules overlap but specify different actions)",
            rule_indices=(i, j),
        )
        for i, j in conflicting_rules(table)
    ]


def _uncovered(table: Table) -> list[Diagnostic]:
    return [
        Diagnostic(
            Severity.ADVISORY,
            DiagnosticKind.UNCOVERED_CONDITION,
            f"The following condition is uncovered by rules: {format_condition(condition)}",
            condition=condition,
        )
        for condition in uncovered_conditions(table)
    ]


def validate(table: Table) -> list[Diagnostic]:
    """Run every check against ``table``.

    Never raises for a malformed table; malformed tables are reported
    through fatal diagnostics.

    Args:
        table: The table to check.

    Returns:
        Ordered list of diagnostics. Empty means the table is sound.
    """
    stages: list[list[_Check]] = [
        [
            (DiagnosticKind.INCOMPLETE_RULE, _describe_missing(table)),
            (DiagnosticKind.REPEATED_VARIABLE, _describe_repeated(table)),
        ],
        [(DiagnosticKind.UNKNOWN_VARIABLE, _describe_unknown(table))],
        [(DiagnosticKind.INVALID_VALUE, _describe_invalid(table))],
    ]
    for checks in stages:
        fatal = _structural_check(table, checks)
        if fatal:
            kinds = ", ".join(dict.fromkeys(d.kind.value for d in fatal))
            logger.info(f"Table '{table.name}': {len(fatal)} fatal problem(s) ({kinds})")
            return fatal

    diagnostics = _duplicate_actions(table) + _conflicts(table) + _uncovered(table)
    logger.info(
        f"Table '{table.name}': {len(table.rules)} rules, "
        f"{len(diagnostics)} advisory problem(s)"
    )
    return diagnostics


def is_sound(diagnostics: Sequence[Diagnostic]) -> bool:
    """A table is sound when validation found nothing at all."""
    return len(diagnostics) == 0


def has_fatal(diagnostics: Sequence[Diagnostic]) -> bool:
    return any(d.fatal for d in diagnostics)


def validate_or_fail(table: Table) -> Table:
    """Return ``table`` unchanged if sound.

    Raises:
        UnsoundTableError: If validation produced any diagnostic.
    """
    diagnostics = validate(table)
    if diagnostics:
        raise UnsoundTableError(diagnostics, context=ErrorContext(table_name=table.name))
    return table
