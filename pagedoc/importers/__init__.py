"""
Importers for pagedoc documents.
"""

from .json_importer import (
    document_from_json,
    import_document,
    load_document,
    read_document,
    read_node,
)

__all__ = [
    "document_from_json",
    "import_document",
    "load_document",
    "read_document",
    "read_node",
]
