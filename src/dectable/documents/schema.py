"""Schema of the YAML table document.

Example document::

    name: Traffic light
    vars:
      signal: [red, yellow, green]
      canStop: boolean
    rules:
      - condition: {signal: red, canStop: ANY}
        action: brake
      - condition: {signal: [yellow, green], canStop: T}
        action: proceed

Scalars are normalized to strings. YAML booleans become ``"T"`` and
``"F"`` so that ``boolean`` variables can be written with ``true`` /
``false`` as well as ``T`` / ``F``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ANY = "ANY"
BOOLEAN = "boolean"
BOOLEAN_DOMAIN = ("T", "F")


def normalize_scalar(value: Any) -> str:
    """Convert a YAML scalar to the string form used in tables."""
    if isinstance(value, bool):
        return BOOLEAN_DOMAIN[0] if value else BOOLEAN_DOMAIN[1]
    if isinstance(value, (int, float, str)):
        return str(value)
    raise ValueError(f"expected a scalar value, got {type(value).__name__}")


def _normalize_values(value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ValueError("expected a list of values")
    if not value:
        raise ValueError("must list at least one value")
    return [normalize_scalar(v) for v in value]


class RuleDocument(BaseModel):
    """One rule: a condition per variable and the resulting action."""

    model_config = ConfigDict(extra="forbid")

    condition: Dict[str, Union[str, List[str]]] = Field(
        ..., description="Variable name -> value, list of values, or ANY"
    )
    action: str = Field(..., description="Action label")

    @field_validator("condition", mode="before")
    @classmethod
    def normalize_condition(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {
            name: _normalize_values(value) if isinstance(value, list) else normalize_scalar(value)
            for name, value in v.items()
        }

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v: Any) -> Any:
        return normalize_scalar(v) if v is not None else v


class TableDocument(BaseModel):
    """Top level of a table document."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, description="Table name")
    vars: Dict[str, Union[Literal["boolean"], List[str]]] = Field(
        ..., description="Variable name -> list of values, or 'boolean'"
    )
    rules: List[RuleDocument] = Field(default_factory=list, description="Rules in order")

    @field_validator("vars", mode="before")
    @classmethod
    def normalize_vars(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {
            name: values if values == BOOLEAN else _normalize_values(values)
            for name, values in v.items()
        }
