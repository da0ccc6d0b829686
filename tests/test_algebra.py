"""Tests for the coverage and overlap algebra."""

from __future__ import annotations

import itertools

import pytest

from dectable.combinatorial.algebra import (
    conflicting_rules,
    overlap,
    rule_covers_condition,
    rule_intersection,
    rules_are_disjoint,
    uncovered_conditions,
    var_rules_overlap,
)
from dectable.combinatorial.space import enumerate_model, enumerate_variable
from dectable.core.models import (
    ActionRule,
    Table,
    Variable,
    VarInstance,
    concrete,
    format_condition,
    make_model,
    wildcard,
)
from dectable.errors import OverlapPreconditionError

SIGNAL = Variable("signal", ("red", "yellow", "green"))


# ============================================================
# Coverage
# ============================================================


class TestRuleCoversCondition:
    """Tests for rule_covers_condition."""

    def test_wildcard_covers_everything(self, bool_model):
        rule = (wildcard("A"), wildcard("B"))
        assert all(rule_covers_condition(rule, c) for c in enumerate_model(bool_model))

    def test_concrete_values(self):
        rule = (concrete("A", "T"), wildcard("B"))
        assert rule_covers_condition(rule, (VarInstance("A", "T"), VarInstance("B", "F")))
        assert not rule_covers_condition(rule, (VarInstance("A", "F"), VarInstance("B", "F")))

    def test_order_independent(self):
        rule = (wildcard("B"), concrete("A", "T"))
        assert rule_covers_condition(rule, (VarInstance("A", "T"), VarInstance("B", "F")))

    def test_fewer_variables_never_match(self):
        rule = (wildcard("A"),)
        assert not rule_covers_condition(rule, (VarInstance("A", "T"), VarInstance("B", "T")))

    def test_more_variables_never_match(self):
        rule = (wildcard("A"), wildcard("B"), wildcard("C"))
        assert not rule_covers_condition(rule, (VarInstance("A", "T"), VarInstance("B", "T")))

    def test_same_count_different_names(self):
        rule = (wildcard("A"), wildcard("C"))
        assert not rule_covers_condition(rule, (VarInstance("A", "T"), VarInstance("B", "T")))

    def test_matches_per_variable_definition(self, bool_model):
        restrictions = [wildcard, lambda n: concrete(n, "T"), lambda n: concrete(n, "F")]
        for make_a, make_b in itertools.product(restrictions, repeat=2):
            rule = (make_a("A"), make_b("B"))
            for condition in enumerate_model(bool_model):
                expected = all(
                    not hasattr(vr, "values") or vi.value in vr.values
                    for vr, vi in zip(rule, condition)
                )
                assert rule_covers_condition(rule, condition) == expected


# ============================================================
# Overlap
# ============================================================


class TestOverlap:
    """Tests for per-variable overlap."""

    def test_wildcard_wildcard_is_full_domain(self):
        result = overlap(SIGNAL, wildcard("signal"), wildcard("signal"))
        assert result == enumerate_variable(SIGNAL)

    def test_wildcard_concrete(self):
        result = overlap(SIGNAL, wildcard("signal"), concrete("signal", "green", "red"))
        assert [vi.value for vi in result] == ["green", "red"]

    def test_concrete_wildcard(self):
        result = overlap(SIGNAL, concrete("signal", "yellow"), wildcard("signal"))
        assert result == [VarInstance("signal", "yellow")]

    def test_concrete_concrete_intersection_in_first_order(self):
        result = overlap(
            SIGNAL,
            concrete("signal", "green", "yellow", "red"),
            concrete("signal", "red", "green"),
        )
        assert [vi.value for vi in result] == ["green", "red"]

    def test_concrete_concrete_dedupes(self):
        result = overlap(SIGNAL, concrete("signal", "red", "red"), concrete("signal", "red"))
        assert len(result) == 1

    def test_disjoint_is_empty(self):
        assert overlap(SIGNAL, concrete("signal", "red"), concrete("signal", "green")) == []

    def test_mismatched_names_raise(self):
        with pytest.raises(OverlapPreconditionError, match="distinct var rules"):
            overlap(SIGNAL, wildcard("signal"), wildcard("other"))

    def test_mismatched_variable_raises(self):
        with pytest.raises(OverlapPreconditionError):
            overlap(SIGNAL, wildcard("x"), wildcard("x"))


class TestVarRulesOverlap:
    """Tests for the boolean overlap shortcut."""

    def test_wildcards_always_overlap(self):
        assert var_rules_overlap(wildcard("A"), concrete("A", "T"))

    def test_concrete(self):
        assert var_rules_overlap(concrete("A", "T", "F"), concrete("A", "F"))
        assert not var_rules_overlap(concrete("A", "T"), concrete("A", "F"))

    def test_name_mismatch_raises(self):
        with pytest.raises(OverlapPreconditionError, match="Comparing vars"):
            var_rules_overlap(wildcard("A"), wildcard("B"))


# ============================================================
# Rule intersection
# ============================================================


class TestRuleIntersection:
    """Tests for multi-variable rule intersection."""

    def test_intersection(self, bool_model):
        a = (concrete("A", "T"), wildcard("B"))
        b = (wildcard("A"), concrete("B", "F"))
        result = rule_intersection(bool_model, a, b)
        assert [format_condition(c) for c in result] == ["A=T B=F"]

    def test_same_rules_intersect_fully(self, bool_model):
        rule = (concrete("A", "T"), wildcard("B"))
        result = rule_intersection(bool_model, rule, rule)
        assert [format_condition(c) for c in result] == ["A=T B=T", "A=T B=F"]

    def test_disjoint_on_one_variable(self, bool_model):
        a = (concrete("A", "T"), wildcard("B"))
        b = (concrete("A", "F"), wildcard("B"))
        assert rule_intersection(bool_model, a, b) == []
        assert rules_are_disjoint(bool_model, a, b)

    def test_rule_order_does_not_matter(self, bool_model):
        a = (wildcard("B"), concrete("A", "T"))
        b = (concrete("A", "T"), concrete("B", "T"))
        assert not rules_are_disjoint(bool_model, a, b)

    def test_single_variable_model(self):
        model = make_model(SIGNAL)
        result = rule_intersection(model, (wildcard("signal"),), (concrete("signal", "red"),))
        assert result == [(VarInstance("signal", "red"),)]

    def test_missing_variable_raises(self, bool_model):
        with pytest.raises(OverlapPreconditionError, match="no restriction"):
            rule_intersection(bool_model, (wildcard("A"),), (wildcard("A"), wildcard("B")))


# ============================================================
# Table scans
# ============================================================


class TestUncoveredConditions:
    """Tests for uncovered_conditions."""

    def test_gap_table(self, gap_table):
        uncovered = uncovered_conditions(gap_table)
        assert [format_condition(c) for c in uncovered] == ["A=T B=F", "A=F B=F"]

    def test_sound_table(self, sound_table):
        assert uncovered_conditions(sound_table) == []

    def test_condition_uncovered_iff_no_rule_covers(self, conflict_table):
        uncovered = set(uncovered_conditions(conflict_table))
        for condition in enumerate_model(conflict_table.model):
            covered = any(rule_covers_condition(r.rule, condition) for r in conflict_table.rules)
            assert (condition in uncovered) == (not covered)


class TestConflictingRules:
    """Tests for conflicting_rules."""

    def test_overlap_with_different_actions(self, conflict_table):
        assert conflicting_rules(conflict_table) == [(0, 1)]

    def test_overlap_with_same_action_is_not_a_conflict(self, bool_model):
        table = Table(
            "agree",
            bool_model,
            (
                ActionRule((concrete("A", "T"), wildcard("B")), "X"),
                ActionRule((wildcard("A"), concrete("B", "T")), "X"),
            ),
        )
        assert conflicting_rules(table) == []

    def test_disjoint_rules(self, sound_table):
        assert conflicting_rules(sound_table) == []

    def test_pairs_in_order(self, bool_model):
        table = Table(
            "many",
            bool_model,
            (
                ActionRule((wildcard("A"), wildcard("B")), "X"),
                ActionRule((concrete("A", "T"), wildcard("B")), "Y"),
                ActionRule((concrete("A", "F"), wildcard("B")), "Z"),
            ),
        )
        assert conflicting_rules(table) == [(0, 1), (0, 2)]
