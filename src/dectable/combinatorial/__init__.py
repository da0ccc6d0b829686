"""Combinatorics and rule algebra for decision tables.

Modules:
    space: state_space_size, enumerate_variable, cross_product, enumerate_model
    algebra: rule_covers_condition, overlap, rule_intersection,
        rules_are_disjoint, uncovered_conditions, conflicting_rules
"""

from dectable.combinatorial.algebra import (
    conflicting_rules,
    overlap,
    rule_covers_condition,
    rule_intersection,
    rules_are_disjoint,
    uncovered_conditions,
    var_rules_overlap,
)
from dectable.combinatorial.space import (
    cross_product,
    enumerate_model,
    enumerate_variable,
    join_conditions,
    state_space_size,
)

__all__ = [
    # Space
    "state_space_size",
    "enumerate_variable",
    "cross_product",
    "join_conditions",
    "enumerate_model",
    # Algebra
    "rule_covers_condition",
    "overlap",
    "var_rules_overlap",
    "rule_intersection",
    "rules_are_disjoint",
    "uncovered_conditions",
    "conflicting_rules",
]
