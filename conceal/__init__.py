"""
conceal — declarative field-level encryption
============================================
Mark record fields as "id" or "data"; protect() encrypts every data field
(recursing through nested records, lists and optional references) and
passes the id value to each cipher call. reveal() reverses it.

PUBLIC API:
  Conceal             — gateway class (protect / reveal / extract / audit)
  protect, reveal     — one-off shortcuts (encrypt / decrypt aliases)
  extract             — classification only, no modification
  concealed           — dataclass field helper for role declarations
  ConcealConfig       — typed config builder
  BaseCipher          — base class for custom ciphers
  AESGCMCipher        — AES-256-GCM reference cipher
  FieldRole           — role constants ("id", "data")
  Classification      — result of extract()
  ConcealError & subclasses

PRIVATE:
  conceal._core.*     — engine internals
"""

__version__ = "1.0.0"

from conceal.field_security import Conceal, protect, reveal, encrypt, decrypt, extract
from conceal.config.conceal_config import ConcealConfig
from conceal.core.data_types import Classification, FieldHandle, FieldKind, FieldRole
from conceal.core.exceptions import (
    BadTagValueError,
    ConcealError,
    ConfigError,
    DecodeError,
    DuplicateIDsError,
    ExtractionError,
    IDNotStringError,
    MaxDepthExceededError,
    NilValueError,
    NotPointerError,
    UnsupportedFieldError,
)
from conceal._core.annotations import concealed, describe_fields
from conceal._core.ciphers import AESGCMCipher, BaseCipher


__all__ = [
    "__version__",
    "Conceal",
    "protect",
    "reveal",
    "encrypt",
    "decrypt",
    "extract",
    "concealed",
    "describe_fields",
    "ConcealConfig",
    "BaseCipher",
    "AESGCMCipher",
    "Classification",
    "FieldHandle",
    "FieldKind",
    "FieldRole",
    "ConcealError",
    "ExtractionError",
    "NilValueError",
    "NotPointerError",
    "DuplicateIDsError",
    "IDNotStringError",
    "BadTagValueError",
    "UnsupportedFieldError",
    "MaxDepthExceededError",
    "DecodeError",
    "ConfigError",
]
