"""Coverage and overlap algebra over rules.

A rule *covers* a condition when every value of the condition satisfies
the rule's restriction for that variable. Two rules *overlap* on the
conditions they both cover. Wildcards stand for the variable's whole
domain, so:

    ANY  & ANY   -> the full domain
    ANY  & [S]   -> S
    [S1] & [S2]  -> S1 intersected with S2 (S1's order)

The table-level scans (uncovered conditions, conflicting rule pairs)
enumerate explicitly and are therefore exponential in the number of
variables; they assume a model that passed structural validation.
"""

from __future__ import annotations

import logging

from dectable.combinatorial.space import enumerate_model, enumerate_variable, join_conditions
from dectable.core.models import (
    ActionRule,
    Condition,
    Model,
    Rule,
    Table,
    Variable,
    VarInstance,
    VarRule,
    WildcardRule,
)
from dectable.errors import ErrorContext, OverlapPreconditionError

logger = logging.getLogger(__name__)


def _var_rule_covers(var_rule: VarRule, instance: VarInstance) -> bool:
    if isinstance(var_rule, WildcardRule):
        return True
    return instance.value in var_rule.values


def rule_covers_condition(rule: Rule, condition: Condition) -> bool:
    """Check whether ``rule`` matches the concrete ``condition``.

    A rule naming fewer or more variables than the condition never
    matches.
    """
    if len(rule) != len(condition):
        return False
    by_name = {vr.name: vr for vr in rule}
    for instance in condition:
        var_rule = by_name.get(instance.name)
        if var_rule is None or not _var_rule_covers(var_rule, instance):
            return False
    return True


def overlap(variable: Variable, a: VarRule, b: VarRule) -> list[VarInstance]:
    """Values of ``variable`` allowed by both ``a`` and ``b``.

    Args:
        variable: The model variable both restrictions refer to.
        a: First restriction.
        b: Second restriction.

    Returns:
        VarInstances for the shared values; empty if the rules are
        disjoint on this variable.

    Raises:
        OverlapPreconditionError: If ``variable``, ``a`` and ``b`` do not
            all name the same variable.
    """
    names = [variable.name, a.name, b.name]
    if len(set(names)) != 1:
        raise OverlapPreconditionError(
            f"Cannot compute overlap for distinct var rules: {', '.join(names)}",
            context=ErrorContext(variable=variable.name),
        )

    if isinstance(a, WildcardRule) and isinstance(b, WildcardRule):
        return enumerate_variable(variable)
    if isinstance(a, WildcardRule):
        return [VarInstance(variable.name, value) for value in dict.fromkeys(b.values)]
    if isinstance(b, WildcardRule):
        return [VarInstance(variable.name, value) for value in dict.fromkeys(a.values)]

    allowed = set(b.values)
    return [
        VarInstance(variable.name, value)
        for value in dict.fromkeys(a.values)
        if value in allowed
    ]


def var_rules_overlap(a: VarRule, b: VarRule) -> bool:
    """Cheap yes/no overlap test for two restrictions on one variable."""
    if a.name != b.name:
        raise OverlapPreconditionError(
            f'Assertion failed: Comparing vars "{a.name}" and "{b.name}" for overlap'
        )
    if isinstance(a, WildcardRule) or isinstance(b, WildcardRule):
        return True
    return not set(a.values).isdisjoint(b.values)


def _find(rule: Rule, name: str) -> VarRule:
    for var_rule in rule:
        if var_rule.name == name:
            return var_rule
    raise OverlapPreconditionError(
        f"Rule has no restriction for model variable '{name}'",
        context=ErrorContext(variable=name),
    )


def rule_intersection(model: Model, a: Rule, b: Rule) -> list[Condition]:
    """Every condition covered by both ``a`` and ``b``.

    Stops early with an empty result as soon as one variable has no
    shared values.
    """
    overlaps: list[list[VarInstance]] = []
    for variable in model.values():
        shared = overlap(variable, _find(a, variable.name), _find(b, variable.name))
        if not shared:
            return []
        overlaps.append(shared)
    return join_conditions(overlaps)


def rules_are_disjoint(model: Model, a: Rule, b: Rule) -> bool:
    return len(rule_intersection(model, a, b)) == 0


def uncovered_conditions(table: Table) -> list[Condition]:
    """Conditions of the table's state space that no rule covers."""
    uncovered = [
        condition
        for condition in enumerate_model(table.model)
        if not any(rule_covers_condition(r.rule, condition) for r in table.rules)
    ]
    logger.debug(f"Table '{table.name}': {len(uncovered)} uncovered conditions")
    return uncovered


def _conflict(model: Model, a: ActionRule, b: ActionRule) -> bool:
    return a.action != b.action and not rules_are_disjoint(model, a.rule, b.rule)


def conflicting_rules(table: Table) -> list[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, of overlapping rules with different actions.

    Rules that overlap but agree on the action are not conflicts.
    """
    conflicts: list[tuple[int, int]] = []
    rules = table.rules
    for i in range(len(rules)):
        for j in range(i + 1, len(rules)):
            if _conflict(table.model, rules[i], rules[j]):
                conflicts.append((i, j))
    return conflicts
