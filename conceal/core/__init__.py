"""conceal.core — foundation layer: data types, errors, logging, config loading."""

from conceal.core.data_types import (
    Classification,
    FieldHandle,
    FieldKind,
    FieldRole,
    FieldSpec,
)
from conceal.core.exceptions import (
    ConcealError,
    ConfigError,
    DecodeError,
    ExtractionError,
)
from conceal.core.config_loader import load_config, available_presets
from conceal.core.logger import StructuredLogger

__all__ = [
    "Classification",
    "FieldHandle",
    "FieldKind",
    "FieldRole",
    "FieldSpec",
    "ConcealError",
    "ConfigError",
    "DecodeError",
    "ExtractionError",
    "load_config",
    "available_presets",
    "StructuredLogger",
]
