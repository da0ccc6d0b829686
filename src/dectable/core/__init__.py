"""Core decision table types."""

from dectable.core.models import (
    DEFAULT_TABLE_NAME,
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

__all__ = [
    "DEFAULT_TABLE_NAME",
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
]
