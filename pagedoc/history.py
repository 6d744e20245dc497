"""
Undo/redo through structural deltas.

A :class:`Delta` is computed by comparing two document snapshots. Untouched
branches are shared between snapshots, so the walk skips everything that is
identical and only descends into what a command actually rewrote. Each
difference becomes one :class:`DeltaOp`:

* ``set``    a dict entry or dataclass field takes a new value
* ``delete`` a dict entry is removed
* ``splice`` a slice of an ordered tuple is replaced

Every forward op has a matching inverse op, so undo never stores a whole
document copy.
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass, fields, is_dataclass, replace
from typing import Any, Callable, Iterable, List, Tuple

from .models.document import Document
from .models.draft import DocumentDraft

logger = logging.getLogger(__name__)

Path = Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class DeltaOp:
    kind: str
    path: Path
    value: Any = None
    index: int = 0
    removed: Tuple[Any, ...] = ()
    inserted: Tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Delta:
    forward: Tuple[DeltaOp, ...] = ()
    inverse: Tuple[DeltaOp, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.forward

    def __len__(self) -> int:
        return len(self.forward)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    label: str
    delta: Delta


_MISSING = object()


def _same_shape(a: Any, b: Any) -> bool:
    return is_dataclass(a) and type(a) is type(b)


def _diff_tuple(a: tuple, b: tuple, path: Path, forward: List[DeltaOp], inverse: List[DeltaOp]) -> None:
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
    # descending, so earlier indices stay valid while later slices are replaced
    for tag, i1, i2, j1, j2 in reversed(matcher.get_opcodes()):
        if tag == "equal":
            continue
        forward.append(DeltaOp("splice", path, index=i1, removed=a[i1:i2], inserted=b[j1:j2]))
        inverse.append(DeltaOp("splice", path, index=j1, removed=b[j1:j2], inserted=a[i1:i2]))


def _diff(a: Any, b: Any, path: Path, forward: List[DeltaOp], inverse: List[DeltaOp]) -> None:
    if a is b:
        return

    if isinstance(a, dict) and isinstance(b, dict):
        for key, old in a.items():
            if key not in b:
                forward.append(DeltaOp("delete", path + (key,)))
                inverse.append(DeltaOp("set", path + (key,), value=old))
        for key, new in b.items():
            old = a.get(key, _MISSING)
            if old is _MISSING:
                forward.append(DeltaOp("set", path + (key,), value=new))
                inverse.append(DeltaOp("delete", path + (key,)))
            else:
                _diff(old, new, path + (key,), forward, inverse)
        return

    if isinstance(a, tuple) and isinstance(b, tuple) and not is_dataclass(a):
        if a != b:
            _diff_tuple(a, b, path, forward, inverse)
        return

    if _same_shape(a, b):
        for f in fields(a):
            _diff(getattr(a, f.name), getattr(b, f.name), path + (f.name,), forward, inverse)
        return

    if a != b or type(a) is not type(b):
        _set(path, a, b, forward, inverse)


def _set(path: Path, old: Any, new: Any, forward: List[DeltaOp], inverse: List[DeltaOp]) -> None:
    forward.append(DeltaOp("set", path, value=new))
    inverse.append(DeltaOp("set", path, value=old))


def diff_documents(before: Document, after: Document) -> Delta:
    """Compute the forward and inverse operations turning ``before`` into ``after``."""
    forward: List[DeltaOp] = []
    inverse: List[DeltaOp] = []
    _diff(before, after, (), forward, inverse)
    return Delta(tuple(forward), tuple(inverse))


def _child(container: Any, key: Any) -> Any:
    if isinstance(container, dict):
        return container[key]
    return getattr(container, key)


def _with_child(container: Any, key: Any, value: Any) -> Any:
    if isinstance(container, dict):
        copy = dict(container)
        copy[key] = value
        return copy
    return replace(container, **{key: value})


def _apply_op(obj: Any, path: Path, op: DeltaOp) -> Any:
    if not path:
        if op.kind != "splice":
            raise ValueError(f"Cannot {op.kind} at the document root")
        end = op.index + len(op.removed)
        if tuple(obj[op.index:end]) != tuple(op.removed):
            raise ValueError(f"Splice mismatch at {op.path!r}")
        return obj[:op.index] + tuple(op.inserted) + obj[end:]

    key = path[0]
    if len(path) == 1 and op.kind == "set":
        return _with_child(obj, key, op.value)
    if len(path) == 1 and op.kind == "delete":
        copy = dict(obj)
        del copy[key]
        return copy
    return _with_child(obj, key, _apply_op(_child(obj, key), path[1:], op))


def apply_delta(doc: Document, ops: Iterable[DeltaOp]) -> Document:
    """
    Apply a sequence of delta operations and return the resulting document.

    Raises:
        ValueError: if an operation does not fit ``doc``
    """
    for op in ops:
        doc = _apply_op(doc, op.path, op)
    return doc


class HistoryManager:
    """
    Holds the current document together with its undo and redo stacks.

    Commands run through :meth:`apply`; a command that leaves the document
    structurally unchanged is not recorded. The document and both stacks
    are only reassigned once every step that can fail has succeeded.
    """

    def __init__(self, document: Document):
        self._document = document
        self._undo: List[HistoryEntry] = []
        self._redo: List[HistoryEntry] = []

    @property
    def document(self) -> Document:
        return self._document

    def apply(self, command: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``command(draft, *args, **kwargs)`` and record its delta."""
        draft = DocumentDraft(self._document)
        result = command(draft, *args, **kwargs)
        self.commit(draft.finish(), label=getattr(command, "__name__", "command"))
        return result

    def commit(self, document: Document, label: str = "commit") -> bool:
        """
        Make ``document`` current, recording the delta from the previous one.

        Returns:
            False when nothing changed (no history entry is created)
        """
        if document is self._document:
            return False
        delta = diff_documents(self._document, document)
        if delta.is_empty:
            return False

        self._undo, self._redo, self._document = (
            self._undo + [HistoryEntry(label, delta)], [], document,
        )
        logger.debug(f"Recorded {label} ({len(delta)} op(s))")
        return True

    def undo(self) -> bool:
        if not self._undo:
            return False
        entry = self._undo[-1]
        previous = apply_delta(self._document, entry.delta.inverse)
        self._undo, self._redo, self._document = self._undo[:-1], self._redo + [entry], previous
        logger.debug(f"Undo {entry.label}")
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        entry = self._redo[-1]
        following = apply_delta(self._document, entry.delta.forward)
        self._undo, self._redo, self._document = self._undo + [entry], self._redo[:-1], following
        logger.debug(f"Redo {entry.label}")
        return True

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_labels(self) -> List[str]:
        return [entry.label for entry in self._undo]

    @property
    def redo_labels(self) -> List[str]:
        return [entry.label for entry in self._redo]

    def clear(self) -> None:
        self._undo, self._redo = [], []

    def load(self, document: Document) -> None:
        """Replace the current document and forget all history."""
        self._undo, self._redo, self._document = [], [], document
