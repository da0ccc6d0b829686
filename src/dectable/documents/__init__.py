"""Reading decision tables from YAML documents."""

from dectable.documents.loader import (
    document_to_table,
    load_table,
    load_table_document,
    loads_table,
    parse_table_document,
)
from dectable.documents.schema import ANY, BOOLEAN, RuleDocument, TableDocument

__all__ = [
    "ANY",
    "BOOLEAN",
    "RuleDocument",
    "TableDocument",
    "parse_table_document",
    "load_table_document",
    "document_to_table",
    "load_table",
    "loads_table",
]
