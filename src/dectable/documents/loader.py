"""Load decision tables from YAML documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dectable.core.models import (
    DEFAULT_TABLE_NAME,
    ActionRule,
    ConcreteRule,
    Model,
    Table,
    Variable,
    VarRule,
    WildcardRule,
    make_model,
)
from dectable.documents.schema import ANY, BOOLEAN, BOOLEAN_DOMAIN, RuleDocument, TableDocument
from dectable.errors import ErrorCode, ErrorContext, TableLoadError

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = " -> ".join(str(p) for p in error.get("loc", ()))
        message = error.get("msg", "Unknown error")
        lines.append(f"{location}: {message}" if location else message)
    return "\n  ".join(lines)


def parse_table_document(data: Any, source: str | None = None) -> TableDocument:
    """Check already-parsed YAML data against the document schema.

    Raises:
        TableLoadError: If the data does not match the schema.
    """
    if not isinstance(data, dict):
        raise TableLoadError(
            "Table document must be a mapping at the top level",
            error_code=ErrorCode.SCHEMA_MISMATCH,
            context=ErrorContext(source=source),
        )
    try:
        return TableDocument.model_validate(data)
    except ValidationError as e:
        raise TableLoadError(
            "Table document does not match the schema:\n  " + _format_validation_errors(e),
            error_code=ErrorCode.SCHEMA_MISMATCH,
            context=ErrorContext(source=source),
            cause=e,
        ) from e


def load_table_document(path: str | Path) -> TableDocument:
    """Read and schema-check a YAML table document.

    Raises:
        TableLoadError: If the file is missing, is not valid YAML, or
            does not match the schema.
    """
    path = Path(path)
    if not path.exists():
        raise TableLoadError(
            f"Table document not found: {path}",
            error_code=ErrorCode.DOCUMENT_NOT_FOUND,
            context=ErrorContext(source=str(path)),
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TableLoadError(
            f"Invalid YAML in {path}: {e}",
            context=ErrorContext(source=str(path)),
            cause=e,
        ) from e

    logger.debug(f"Loaded table document from {path}")
    return parse_table_document(data, source=str(path))


def _var_rule(name: str, value: str | list[str]) -> VarRule:
    if value == ANY:
        return WildcardRule(name)
    if isinstance(value, list):
        return ConcreteRule(name, tuple(value))
    return ConcreteRule(name, (value,))


def _rule(doc: RuleDocument) -> ActionRule:
    return ActionRule(
        tuple(_var_rule(name, value) for name, value in doc.condition.items()),
        doc.action,
    )


def document_to_table(doc: TableDocument, source: str | None = None) -> Table:
    """Build a Table from a schema-checked document.

    Only construction problems are raised here (for example duplicate
    domain values). Semantic problems are left to ``validate``.

    Raises:
        TableLoadError: If a variable cannot be constructed.
    """
    name = doc.name or DEFAULT_TABLE_NAME
    variables = []
    for var_name, values in doc.vars.items():
        domain = BOOLEAN_DOMAIN if values == BOOLEAN else tuple(values)
        try:
            variables.append(Variable(var_name, domain))
        except ValueError as e:
            raise TableLoadError(
                str(e),
                context=ErrorContext(source=source, table_name=name, variable=var_name),
                cause=e,
            ) from e

    model: Model = make_model(*variables)
    return Table(name, model, tuple(_rule(r) for r in doc.rules))


def load_table(path: str | Path) -> Table:
    """Load a Table from a YAML document on disk."""
    doc = load_table_document(path)
    table = document_to_table(doc, source=str(path))
    logger.info(
        f"Loaded table '{table.name}' with {len(table.model)} variables "
        f"and {len(table.rules)} rules"
    )
    return table


def loads_table(text: str, source: str | None = None) -> Table:
    """Load a Table from YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TableLoadError(
            f"Invalid YAML: {e}",
            context=ErrorContext(source=source),
            cause=e,
        ) from e
    return document_to_table(parse_table_document(data, source=source), source=source)
