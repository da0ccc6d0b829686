"""A mutable, observable front for an immutable Table.

ObservableTable holds the current Table snapshot. Every mutating call
builds a new snapshot, re-validates it and synchronously notifies each
subscriber with ``(table, diagnostics)``. Snapshots themselves are
never modified, so a subscriber may keep one as long as it likes.

Example:
    >>> table = ObservableTable(Table("pricing", make_model(Variable("A", ("T", "F")))))
    >>> sub = table.subscribe(lambda t, diags: print(len(diags)))
    >>> table.add_rule(ActionRule((wildcard("A"),), "charge"))
    0
    >>> table.cancel(sub)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from dectable.core.models import ActionRule, Table, Variable, VarRule, WildcardRule
from dectable.validation.diagnostics import Diagnostic
from dectable.validation.pipeline import validate

logger = logging.getLogger(__name__)

Subscriber = Callable[[Table, list[Diagnostic]], None]

_subscription_ids = itertools.count(1)


@dataclass(frozen=True)
class Subscription:
    """Token returned by ``subscribe``; pass it to ``cancel``."""

    id: int


class ObservableTable:
    """Mutable decision table that re-validates and notifies on change.

    Attributes:
        table: The current immutable snapshot.
    """

    def __init__(self, table: Table) -> None:
        self.table = table
        self._subscribers: dict[Subscription, Subscriber] = {}

    def subscribe(self, callback: Subscriber) -> Subscription:
        subscription = Subscription(next(_subscription_ids))
        self._subscribers[subscription] = callback
        return subscription

    def cancel(self, subscription: Subscription) -> None:
        self._subscribers.pop(subscription, None)

    def evaluate(self) -> list[Diagnostic]:
        """Validate the current snapshot without notifying anyone."""
        return validate(self.table)

    def _commit(self, table: Table, change: str) -> None:
        self.table = table
        diagnostics = validate(table)
        logger.debug(
            f"Table '{table.name}' changed ({change}); "
            f"notifying {len(self._subscribers)} subscriber(s)"
        )
        for subscription in list(self._subscribers):
            callback = self._subscribers.get(subscription)
            # Cancelled by an earlier callback in this round.
            if callback is None:
                continue
            callback(table, diagnostics)

    def _replace_rule(self, index: int, rule: ActionRule) -> tuple[ActionRule, ...]:
        rules = list(self.table.rules)
        rules[index] = rule
        return tuple(rules)

    # Rules

    def add_rule(self, rule: ActionRule) -> None:
        self._commit(replace(self.table, rules=self.table.rules + (rule,)), "add_rule")

    def delete_rule(self, index: int) -> None:
        rules = list(self.table.rules)
        del rules[index]
        self._commit(replace(self.table, rules=tuple(rules)), "delete_rule")

    def set_condition(self, index: int, var_rule: VarRule) -> None:
        """Replace (or add) rule ``index``'s restriction for one variable."""
        current = self.table.rules[index]
        kept = tuple(vr for vr in current.rule if vr.name != var_rule.name)
        updated = ActionRule(kept + (var_rule,), current.action)
        self._commit(replace(self.table, rules=self._replace_rule(index, updated)), "set_condition")

    def assign_action(self, index: int, action: str) -> None:
        updated = replace(self.table.rules[index], action=action)
        self._commit(replace(self.table, rules=self._replace_rule(index, updated)), "assign_action")

    def rename_action(self, old: str, new: str) -> None:
        rules = tuple(
            replace(r, action=new) if r.action == old else r for r in self.table.rules
        )
        self._commit(replace(self.table, rules=rules), "rename_action")

    # Variables

    def add_variable(self, variable: Variable) -> None:
        """Add a variable; existing rules get a wildcard for it."""
        if variable.name in self.table.model:
            raise ValueError(f"Duplicate variable '{variable.name}' in model")
        model = {**self.table.model, variable.name: variable}
        rules = tuple(
            ActionRule(r.rule + (WildcardRule(variable.name),), r.action)
            for r in self.table.rules
        )
        self._commit(replace(self.table, model=model, rules=rules), "add_variable")

    def delete_variable(self, name: str) -> None:
        """Remove a variable from the model and from every rule."""
        model = {k: v for k, v in self.table.model.items() if k != name}
        rules = tuple(
            ActionRule(tuple(vr for vr in r.rule if vr.name != name), r.action)
            for r in self.table.rules
        )
        self._commit(replace(self.table, model=model, rules=rules), "delete_variable")

    def rename_variable(self, old: str, new: str) -> None:
        if new in self.table.model:
            raise ValueError(f"Duplicate variable '{new}' in model")
        model = {
            (new if k == old else k): (Variable(new, v.domain) if k == old else v)
            for k, v in self.table.model.items()
        }
        rules = tuple(
            ActionRule(
                tuple(replace(vr, name=new) if vr.name == old else vr for vr in r.rule),
                r.action,
            )
            for r in self.table.rules
        )
        self._commit(replace(self.table, model=model, rules=rules), "rename_variable")

    def rename(self, name: str) -> None:
        """Rename the table itself."""
        self._commit(replace(self.table, name=name), "rename")
