"""
conceal.core.data_types
=======================
Core data structures shared by the extractor and the transform driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Set


# ── Enums (as string constants, matching the declared tag values) ─────────────

class FieldRole:
    NONE = ""        # unannotated, never inspected
    ID   = "id"      # holds the record's context value
    DATA = "data"    # sensitive content or a container of records


class FieldKind:
    TEXT   = "text"
    BINARY = "binary"


# ── Field declaration ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldSpec:
    """
    One declared member of a record, in declaration order.

    Attributes:
        name : Attribute name on the record instance.
        role : Declared role string ("id", "data", "" for unannotated).
               Kept as declared; validation happens in the extractor.
    """
    name: str
    role: Any = FieldRole.NONE


# ── Field handle ──────────────────────────────────────────────────────────────

@dataclass
class FieldHandle:
    """
    Mutable reference to exactly one field of a record.

    The handle keeps the owning object and the attribute name, so reading and
    overwriting go straight to the original record; nothing is copied.

    Attributes:
        owner : The record instance that holds the field.
        name  : Attribute name on the owner.
        kind  : FieldKind.TEXT or FieldKind.BINARY.
        path  : Display path from the root, e.g. "User.classes[0].name".
    """
    owner: Any
    name:  str
    kind:  str
    path:  str = ""

    def get(self) -> Any:
        return getattr(self.owner, self.name)

    def set(self, value: Any) -> None:
        if self.kind == FieldKind.BINARY and isinstance(self.get(), bytearray):
            value = bytearray(value)
        setattr(self.owner, self.name, value)

    def __repr__(self) -> str:
        return f"FieldHandle(path={self.path!r}, kind={self.kind!r})"


# ── Classification ────────────────────────────────────────────────────────────

@dataclass
class Classification:
    """
    Result of one extraction pass. Built fresh for every protect/reveal call.

    Attributes:
        identifier       : Context value passed to every cipher call ("" if none).
        has_identifier   : True once an identifier member has been read.
        text_locations   : Text field handles, depth-first declaration order.
        binary_locations : Binary field handles, depth-first declaration order.
        skipped          : Paths of data members skipped as unsupported.
    """
    identifier:       str               = ""
    has_identifier:   bool              = False
    text_locations:   List[FieldHandle] = field(default_factory=list)
    binary_locations: List[FieldHandle] = field(default_factory=list)
    skipped:          List[str]         = field(default_factory=list)
    visited:          Set[int]          = field(default_factory=set, repr=False)

    @property
    def field_count(self) -> int:
        return len(self.text_locations) + len(self.binary_locations)

    def paths(self, kind: Optional[str] = None) -> List[str]:
        """Return collected field paths, optionally only for one FieldKind."""
        handles: List[FieldHandle] = []
        if kind in (None, FieldKind.TEXT):
            handles.extend(self.text_locations)
        if kind in (None, FieldKind.BINARY):
            handles.extend(self.binary_locations)
        return [h.path for h in handles]
