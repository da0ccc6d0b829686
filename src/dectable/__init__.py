"""dectable - decision table analysis and test-oracle generation.

Describe behaviour as a decision table: named finite-domain variables,
and rules mapping combinations of their values to an action. dectable
tells you whether the table is complete (every combination covered)
and consistent (no overlapping rules disagree), and turns it into the
exhaustive list of expected input/output pairs to drive your own
decision function with.

Quick Start:
    from dectable import load_table, validate, run_direct

    table = load_table("traffic.yaml")
    for problem in validate(table):
        print(problem.message)

    failures = asyncio.run(run_direct(table, my_decision_fn))
"""

from __future__ import annotations

from dectable.combinatorial import (
    conflicting_rules,
    cross_product,
    enumerate_model,
    enumerate_variable,
    overlap,
    rule_covers_condition,
    rule_intersection,
    rules_are_disjoint,
    state_space_size,
    uncovered_conditions,
)
from dectable.core import (
    ActionRule,
    ConcreteRule,
    Condition,
    Model,
    Rule,
    Table,
    Variable,
    VarInstance,
    VarRule,
    WildcardRule,
    concrete,
    condition_to_dict,
    format_condition,
    is_concrete,
    is_wildcard,
    make_model,
    wildcard,
)
from dectable.documents import load_table, loads_table
from dectable.errors import (
    DecTableError,
    MappingError,
    OverlapPreconditionError,
    TableLoadError,
    UnsoundTableError,
)
from dectable.observable import ObservableTable, Subscription
from dectable.testing import (
    InputMap,
    MappedTestFailure,
    OutputMap,
    TestCase,
    TestFailure,
    generate_cases,
    run_direct,
    run_mapped,
)
from dectable.validation import (
    Diagnostic,
    DiagnosticKind,
    Severity,
    is_sound,
    validate,
    validate_or_fail,
)

__version__ = "0.3.0"

__all__ = [
    # Model
    "Variable",
    "Model",
    "WildcardRule",
    "ConcreteRule",
    "VarRule",
    "Rule",
    "ActionRule",
    "VarInstance",
    "Condition",
    "Table",
    "is_wildcard",
    "is_concrete",
    "wildcard",
    "concrete",
    "make_model",
    "condition_to_dict",
    "format_condition",
    # Combinatorics & algebra
    "state_space_size",
    "enumerate_variable",
    "cross_product",
    "enumerate_model",
    "rule_covers_condition",
    "overlap",
    "rule_intersection",
    "rules_are_disjoint",
    "uncovered_conditions",
    "conflicting_rules",
    # Validation
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "validate",
    "validate_or_fail",
    "is_sound",
    # Testing
    "TestCase",
    "TestFailure",
    "MappedTestFailure",
    "InputMap",
    "OutputMap",
    "generate_cases",
    "run_direct",
    "run_mapped",
    # Documents
    "load_table",
    "loads_table",
    # Observable
    "ObservableTable",
    "Subscription",
    # Errors
    "DecTableError",
    "TableLoadError",
    "UnsoundTableError",
    "MappingError",
    "OverlapPreconditionError",
]
