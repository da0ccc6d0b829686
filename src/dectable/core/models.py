"""Data model for decision tables.

A decision table maps combinations of finite-domain variables to an
action label. The vocabulary is:

- Variable: a named dimension with an ordered domain of string values.
- Model: every variable of a table, keyed by name.
- VarRule: the restriction a rule places on one variable. Either a
  WildcardRule (any value) or a ConcreteRule (an explicit value set).
- ActionRule: one VarRule per model variable, paired with an action.
- Condition: one concrete point of the state space.

Everything here is immutable. Structural problems such as a rule
missing a variable are *not* rejected at construction; the validation
pipeline reports them as diagnostics.

Example:
    >>> model = make_model(
    ...     Variable("signal", ("red", "green")),
    ...     Variable("canStop", ("T", "F")),
    ... )
    >>> rules = (
    ...     ActionRule((concrete("signal", "red"), wildcard("canStop")), "brake"),
    ...     ActionRule((concrete("signal", "green"), wildcard("canStop")), "go"),
    ... )
    >>> table = Table("traffic", model, rules)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

DEFAULT_TABLE_NAME = "Untitled Table"


@dataclass(frozen=True)
class Variable:
    """A named, finite-domain dimension of the decision space.

    Attributes:
        name: Unique name within a model.
        domain: Ordered, non-empty sequence of distinct values.
    """

    name: str
    domain: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name cannot be empty")
        object.__setattr__(self, "domain", tuple(self.domain))
        if not self.domain:
            raise ValueError(f"Variable '{self.name}' must have at least one value")
        if len(set(self.domain)) != len(self.domain):
            raise ValueError(f"Variable '{self.name}' has duplicate values")

    @property
    def size(self) -> int:
        return len(self.domain)


@dataclass(frozen=True)
class WildcardRule:
    """Matches every value in the named variable's domain."""

    name: str

    def __repr__(self) -> str:
        return f"{self.name}=ANY"


@dataclass(frozen=True)
class ConcreteRule:
    """Matches an explicit, non-empty set of values.

    Values are kept in declaration order. They are not checked against
    the variable's domain here; the validation pipeline does that.
    """

    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError(f"Concrete rule for '{self.name}' needs at least one value")

    def __repr__(self) -> str:
        return f"{self.name}=[{', '.join(self.values)}]"


VarRule = Union[WildcardRule, ConcreteRule]
Rule = tuple[VarRule, ...]
Model = dict[str, Variable]


def is_wildcard(var_rule: VarRule) -> bool:
    return isinstance(var_rule, WildcardRule)


def is_concrete(var_rule: VarRule) -> bool:
    return isinstance(var_rule, ConcreteRule)


def wildcard(name: str) -> WildcardRule:
    """Shorthand for ``WildcardRule(name)``."""
    return WildcardRule(name)


def concrete(name: str, *values: str) -> ConcreteRule:
    """Shorthand for ``ConcreteRule(name, values)``.

    Example:
        >>> concrete("signal", "yellow", "green")
        signal=[yellow, green]
    """
    return ConcreteRule(name, tuple(values))


def make_model(*variables: Variable) -> Model:
    """Build a model from variables, preserving their order.

    Raises:
        ValueError: If two variables share a name.
    """
    model: Model = {}
    for variable in variables:
        if variable.name in model:
            raise ValueError(f"Duplicate variable '{variable.name}' in model")
        model[variable.name] = variable
    return model


@dataclass(frozen=True)
class VarInstance:
    """One variable bound to one value."""

    name: str
    value: str

    def __repr__(self) -> str:
        return f"{self.name}={self.value}"


Condition = tuple[VarInstance, ...]


def condition_to_dict(condition: Condition) -> dict[str, str]:
    """Convert a condition to a ``{variable: value}`` record."""
    return {vi.name: vi.value for vi in condition}


def format_condition(condition: Condition) -> str:
    """Render a condition as ``"A=T B=F"``."""
    return " ".join(f"{vi.name}={vi.value}" for vi in condition)


@dataclass(frozen=True)
class ActionRule:
    """A rule over the model's variables paired with an action label."""

    rule: Rule
    action: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "rule", tuple(self.rule))

    @property
    def variable_names(self) -> list[str]:
        return [vr.name for vr in self.rule]

    def var_rule(self, name: str) -> VarRule | None:
        """Get the restriction for ``name``, or None if the rule omits it."""
        for vr in self.rule:
            if vr.name == name:
                return vr
        return None


@dataclass(frozen=True)
class Table:
    """A named decision table.

    Rule order only matters for diagnostic indices and the order of
    generated test cases; coverage and overlap ignore it.
    """

    name: str
    model: Model
    rules: tuple[ActionRule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    @property
    def variable_names(self) -> list[str]:
        return list(self.model.keys())

    @property
    def actions(self) -> list[str]:
        """Distinct action labels in first-seen order."""
        return list(dict.fromkeys(r.action for r in self.rules))
