"""
Export functionality for pagedoc documents.
"""

from .json_exporter import JSONExporter, camel_case, document_to_json, export_document, to_wire

__all__ = [
    "JSONExporter",
    "camel_case",
    "document_to_json",
    "export_document",
    "to_wire",
]
