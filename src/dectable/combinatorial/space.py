"""State space enumeration.

The state space of a model is the Cartesian product of its variables'
domains. These helpers enumerate it exhaustively, so they are only
meant for models small enough to list in full.

- state_space_size: closed-form count (product of domain sizes).
- enumerate_variable: one VarInstance per domain value.
- cross_product: combinatorial join of several sequences.
- enumerate_model: every Condition of a model.

Example:
    >>> model = make_model(Variable("A", ("T", "F")), Variable("B", ("x", "y", "z")))
    >>> state_space_size(model)
    6
    >>> [format_condition(c) for c in enumerate_model(model)][:2]
    ['A=T B=x', 'A=T B=y']
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar, Union

from dectable.core.models import Condition, Model, Variable, VarInstance

logger = logging.getLogger(__name__)

T = TypeVar("T")


def state_space_size(model: Model) -> int:
    """Number of distinct conditions of ``model``; 1 for an empty model."""
    size = 1
    for variable in model.values():
        size *= variable.size
    return size


def enumerate_variable(variable: Variable) -> list[VarInstance]:
    """Bind ``variable`` to each of its values, in domain order."""
    return [VarInstance(variable.name, value) for value in variable.domain]


def cross_product(items: Sequence[Sequence[T]]) -> Union[list[tuple[T, ...]], list[T]]:
    """Combinatorial join of ``items``.

    The first sequence varies slowest and the last varies fastest, as in
    nested loops where earlier entries are the outer loops.

    Edge cases:
        - No sequences at all gives an empty list, not ``[()]``.
        - A single sequence is returned as-is rather than wrapped in
          one-element tuples.

    Args:
        items: The sequences to join.

    Returns:
        List of tuples, one element from each sequence. For a single
        sequence, its own elements, unwrapped.
    """
    if len(items) == 0:
        return []
    if len(items) == 1:
        return list(items[0])

    combos: list[tuple[T, ...]] = [()]
    for sequence in items:
        combos = [combo + (item,) for combo in combos for item in sequence]
    return combos


def join_conditions(per_variable: Sequence[Sequence[VarInstance]]) -> list[Condition]:
    """Cross-product per-variable instance lists into conditions.

    Unlike ``cross_product``, a single variable still yields one-element
    condition tuples.
    """
    if len(per_variable) == 1:
        return [(vi,) for vi in per_variable[0]]
    return cross_product(per_variable)


def enumerate_model(model: Model) -> list[Condition]:
    """List every condition in ``model``'s state space.

    Variables are joined in model iteration order. The result always has
    exactly ``state_space_size(model)`` entries, except that an empty
    model yields no conditions at all.
    """
    conditions = join_conditions([enumerate_variable(v) for v in model.values()])
    logger.debug(f"Enumerated {len(conditions)} conditions over {len(model)} variables")
    return conditions
