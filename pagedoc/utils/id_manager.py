"""
ID generation for pagedoc entities.

Presets, pages, nodes, assets and guides get ids of the form
``<prefix>-<12 hex chars>``; the prefix names the entity kind.
"""

from typing import Optional, Set
import logging
import uuid

logger = logging.getLogger(__name__)


def create_id(prefix: str) -> str:
    """
    Generate a new random id.

    Args:
        prefix: Entity kind, e.g. ``"page"`` or ``"preset"``

    Returns:
        Id string
    """
    if not prefix or not isinstance(prefix, str):
        raise ValueError("ID prefix must be a non-empty string")
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class IDManager:
    """
    Generates ids that are unique among the ids it has already seen.

    Used by importers and tests that need deterministic, collision-free ids
    (``sequential=True`` yields ``page-1``, ``page-2`` ...).
    """

    def __init__(self, sequential: bool = False, existing: Optional[Set[str]] = None):
        self.sequential = sequential
        self.registered_ids: Set[str] = set(existing or ())
        self.prefix_counter: dict = {}

    def generate_unique_id(self, prefix: str) -> str:
        """
        Generate unique ID.

        Args:
            prefix: Prefix for the ID

        Returns:
            Unique ID string
        """
        while True:
            if self.sequential:
                self.prefix_counter[prefix] = self.prefix_counter.get(prefix, 0) + 1
                element_id = f"{prefix}-{self.prefix_counter[prefix]}"
            else:
                element_id = create_id(prefix)
            if element_id not in self.registered_ids:
                break
            logger.debug(f"ID collision for {element_id}, retrying")

        self.registered_ids.add(element_id)
        return element_id

    def register_id(self, element_id: str) -> None:
        self.registered_ids.add(element_id)

    def __call__(self, prefix: str) -> str:
        return self.generate_unique_id(prefix)
