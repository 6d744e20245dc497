"""
Copy-on-write draft over an immutable :class:`Document`.

Commands receive a ``DocumentDraft``. Reading an attribute returns the
current value (the base document's until something was written). Writing
goes through :meth:`DocumentDraft.edit`, which shallow-copies a top-level
dict once per draft, or :meth:`DocumentDraft.set` for scalars and tuples.
:meth:`DocumentDraft.finish` builds the next snapshot; fields that were never
written are shared with the base document, and a draft with no writes
returns the base document itself.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, Optional, Set

from .document import Document, HeaderFooter, Page, PagePreset
from .nodes import NodeBase

_FIELD_NAMES = frozenset(f.name for f in fields(Document))


class DocumentDraft:
    """Mutable view used by commands to build the next document snapshot."""

    def __init__(self, base: Document):
        self._base = base
        self._changes: Dict[str, Any] = {}
        self._owned: Set[str] = set()

    @property
    def base(self) -> Document:
        return self._base

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in _FIELD_NAMES:
            raise AttributeError(name)
        changes = self.__dict__["_changes"]
        if name in changes:
            return changes[name]
        return getattr(self.__dict__["_base"], name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _FIELD_NAMES:
            raise AttributeError(f"use draft.set({name!r}, ...) or draft.edit({name!r})")
        object.__setattr__(self, name, value)

    def edit(self, name: str) -> Dict[str, Any]:
        """Return a private, writable copy of the dict field ``name``."""
        if name not in self._owned:
            current = getattr(self, name)
            if not isinstance(current, dict):
                raise TypeError(f"{name} is not a dict field")
            self._changes[name] = dict(current)
            self._owned.add(name)
        return self._changes[name]

    def set(self, name: str, value: Any) -> None:
        if name not in _FIELD_NAMES:
            raise AttributeError(name)
        self._changes[name] = value
        self._owned.add(name)

    @property
    def dirty(self) -> bool:
        return bool(self._changes)

    def finish(self) -> Document:
        if not self._changes:
            return self._base
        return replace(self._base, **self._changes)

    # Typed accessors used throughout the command layer.

    def get_page(self, page_id: Optional[str]) -> Optional[Page]:
        return self.pages_by_id.get(page_id) if page_id else None

    def get_preset(self, preset_id: Optional[str]) -> Optional[PagePreset]:
        return self.presets_by_id.get(preset_id) if preset_id else None

    def get_node(self, node_id: Optional[str]) -> Optional[NodeBase]:
        return self.nodes_by_id.get(node_id) if node_id else None

    def get_header_footer(self, preset_id: str) -> Optional[HeaderFooter]:
        return self.header_footer_by_preset_id.get(preset_id)

    def put_page(self, page: Page) -> None:
        self.edit("pages_by_id")[page.id] = page

    def put_preset(self, preset: PagePreset) -> None:
        self.edit("presets_by_id")[preset.id] = preset

    def put_node(self, node: NodeBase) -> None:
        self.edit("nodes_by_id")[node.id] = node

    def put_header_footer(self, preset_id: str, hf: HeaderFooter) -> None:
        self.edit("header_footer_by_preset_id")[preset_id] = hf
