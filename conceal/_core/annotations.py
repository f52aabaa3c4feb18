"""
conceal._core.annotations
=========================
How records declare field roles, and how the extractor reads them back.

A record is any mutable object that describes its fields in one of
three ways (checked in this order):

  1. ``__conceal_fields__(self)`` method returning ``[(name, role), ...]``
  2. ``__conceal__`` class attribute mapping ``{name: role}``
  3. a dataclass whose fields carry ``metadata={tag_key: role}``

Usage
-----
@dataclass
class User:
    id:    str   = concealed("id")
    name:  str   = concealed("data")
    notes: str   = ""                       # unannotated

class Account:
    __conceal__ = {"owner_id": "id", "iban": "data"}
"""

from __future__ import annotations

import dataclasses
from typing import Any, List, Optional

from conceal.core.data_types import FieldRole, FieldSpec


DEFAULT_TAG_KEY = "conceal"


def concealed(role: str, tag_key: str = DEFAULT_TAG_KEY, **field_kwargs: Any) -> Any:
    """
    Build a dataclass field declared with a conceal role.

    Any ``dataclasses.field`` keyword (default, default_factory, repr, ...)
    is passed through; existing ``metadata`` is merged.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[tag_key] = role
    return dataclasses.field(metadata=metadata, **field_kwargs)


def is_record(obj: Any, tag_key: str = DEFAULT_TAG_KEY) -> bool:
    """True if ``obj`` is an instance that describes its fields."""
    return describe_fields(obj, tag_key) is not None


def is_frozen(obj: Any) -> bool:
    """True for frozen dataclass instances, whose fields cannot be overwritten."""
    params = getattr(type(obj), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def describe_fields(obj: Any, tag_key: str = DEFAULT_TAG_KEY) -> Optional[List[FieldSpec]]:
    """
    Return the ordered field declarations of ``obj``, or None if ``obj``
    is not a record. Classes themselves are never records.
    """
    if obj is None or isinstance(obj, type):
        return None

    describer = getattr(obj, "__conceal_fields__", None)
    if callable(describer):
        return [FieldSpec(name, role) for name, role in describer()]

    declared = getattr(type(obj), "__conceal__", None)
    if isinstance(declared, dict):
        return [FieldSpec(name, role) for name, role in declared.items()]

    if dataclasses.is_dataclass(obj):
        return [
            FieldSpec(f.name, f.metadata.get(tag_key, FieldRole.NONE))
            for f in dataclasses.fields(obj)
        ]

    return None
