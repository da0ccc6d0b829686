"""Expand a decision table into concrete test cases.

Every rule is expanded into the conditions it matches (wildcards become
the variable's full domain) and each condition is paired with the
rule's action. No soundness filtering is done: an unsound table may
produce the same condition twice with different actions, or leave some
conditions out entirely. Validate first if that matters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dectable.combinatorial.space import join_conditions
from dectable.core.models import (
    ActionRule,
    Condition,
    Table,
    VarInstance,
    WildcardRule,
    condition_to_dict,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TestCase:
    """An expected (condition, action) pair derived from one rule.

    Attributes:
        condition: The concrete input point.
        action: The action the table assigns to it.
        rule_index: Index of the rule the case came from.
    """

    __test__ = False

    condition: Condition
    action: str
    rule_index: int

    def as_dict(self) -> dict[str, str]:
        return condition_to_dict(self.condition)


def enumerate_rule(table: Table, action_rule: ActionRule) -> list[Condition]:
    """Every condition ``action_rule`` matches, in its VarRule order.

    Raises:
        ValueError: If the rule uses a wildcard for a variable the model
            does not define.
    """
    per_variable: list[list[VarInstance]] = []
    for var_rule in action_rule.rule:
        if isinstance(var_rule, WildcardRule):
            variable = table.model.get(var_rule.name)
            if variable is None:
                raise ValueError(f"Wildcard refers to unknown variable '{var_rule.name}'")
            values = variable.domain
        else:
            values = var_rule.values
        per_variable.append([VarInstance(var_rule.name, value) for value in values])
    return join_conditions(per_variable)


def generate_cases(table: Table) -> list[TestCase]:
    """All test cases implied by ``table``, in rule order.

    The number of cases is the sum over rules of the product of each
    restriction's size (domain size for wildcards).
    """
    cases = [
        TestCase(condition, rule.action, idx)
        for idx, rule in enumerate(table.rules)
        for condition in enumerate_rule(table, rule)
    ]
    logger.debug(f"Generated {len(cases)} test cases from table '{table.name}'")
    return cases
