"""Pytest fixtures for dectable tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dectable.core.models import (
    ActionRule,
    Model,
    Table,
    Variable,
    concrete,
    make_model,
    wildcard,
)


@pytest.fixture(autouse=True)
def _reset_dectable_logger():
    """Undo CLI logging configuration between tests."""
    yield
    root = logging.getLogger("dectable")
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def bool_model() -> Model:
    """Model {A: [T, F], B: [T, F]}."""
    return make_model(Variable("A", ("T", "F")), Variable("B", ("T", "F")))


@pytest.fixture
def traffic_model() -> Model:
    return make_model(
        Variable("signal", ("red", "yellow", "green")),
        Variable("canStop", ("T", "F")),
    )


@pytest.fixture
def sound_table(traffic_model: Model) -> Table:
    """Complete, conflict-free table with one rule per action."""
    return Table(
        "Traffic light",
        traffic_model,
        (
            ActionRule((concrete("signal", "red"), wildcard("canStop")), "brake"),
            ActionRule((concrete("signal", "yellow"), concrete("canStop", "T")), "stop"),
            ActionRule(
                (concrete("signal", "yellow", "green"), concrete("canStop", "F")),
                "proceed",
            ),
            ActionRule((concrete("signal", "green"), concrete("canStop", "T")), "go"),
        ),
    )


@pytest.fixture
def gap_table(bool_model: Model) -> Table:
    """Only B=T is covered."""
    return Table(
        "gaps",
        bool_model,
        (ActionRule((wildcard("A"), concrete("B", "T")), "X"),),
    )


@pytest.fixture
def conflict_table(bool_model: Model) -> Table:
    """Two rules over A=T with different actions; A=F is uncovered."""
    return Table(
        "conflicts",
        bool_model,
        (
            ActionRule((concrete("A", "T"), wildcard("B")), "X"),
            ActionRule((concrete("A", "T"), wildcard("B")), "Y"),
        ),
    )


SOUND_DOCUMENT = """\
name: Traffic light
vars:
  signal: [red, yellow, green]
  canStop: boolean
rules:
  - condition: {signal: red, canStop: ANY}
    action: brake
  - condition: {signal: yellow, canStop: T}
    action: stop
  - condition: {signal: [yellow, green], canStop: F}
    action: proceed
  - condition: {signal: green, canStop: T}
    action: go
"""

INCOMPLETE_DOCUMENT = """\
name: Broken
vars:
  A: boolean
  B: boolean
rules:
  - condition: {A: T}
    action: X
"""


@pytest.fixture
def sound_document(tmp_path: Path) -> Path:
    path = tmp_path / "traffic.yaml"
    path.write_text(SOUND_DOCUMENT)
    return path


@pytest.fixture
def incomplete_document(tmp_path: Path) -> Path:
    path = tmp_path / "broken.yaml"
    path.write_text(INCOMPLETE_DOCUMENT)
    return path
