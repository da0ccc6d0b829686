"""Test-oracle generation and drivers.

Modules:
    cases: TestCase, enumerate_rule, generate_cases
    mapping: FieldMapping, InputMap, OutputMap
    driver: TestFailure, MappedTestFailure, run_direct, run_mapped
"""

from dectable.testing.cases import TestCase, enumerate_rule, generate_cases
from dectable.testing.driver import (
    DecisionFn,
    MappedTestFailure,
    TestFailure,
    run_direct,
    run_mapped,
)
from dectable.testing.mapping import FieldMapping, InputMap, OutputMap

__all__ = [
    # Cases
    "TestCase",
    "enumerate_rule",
    "generate_cases",
    # Mapping
    "FieldMapping",
    "InputMap",
    "OutputMap",
    # Driver
    "DecisionFn",
    "TestFailure",
    "MappedTestFailure",
    "run_direct",
    "run_mapped",
]
