"""Custom exceptions for pagedoc."""

from typing import Optional


class PageDocError(Exception):
    """Base exception for pagedoc errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class NodeTypeMismatchError(PageDocError):
    """Raised when an update tries to change a node's ``type``."""

    def __init__(self, node_id: str, current_type: str, requested_type: str):
        super().__init__(
            "cannot change node.type",
            f"node {node_id!r} is {current_type!r}, patch asked for {requested_type!r}",
        )
        self.node_id = node_id
        self.current_type = current_type
        self.requested_type = requested_type


class UnitMigrationError(PageDocError):
    """Raised when a unit migration runs on a document in the wrong unit."""

    pass


class UnitConversionError(PageDocError):
    """Exception raised for unsupported unit conversions."""

    pass


class GeometryError(PageDocError):
    """Exception raised during geometry calculations."""

    pass


class DocumentFormatError(PageDocError):
    """Exception raised when a serialized document cannot be read."""

    pass
