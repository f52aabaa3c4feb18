"""
conceal.config.conceal_config
=============================
Typed, validated configuration object for extraction and transform passes.
Can be initialized from:
  - A preset name string ("default", "strict")
  - A YAML file path
  - A raw dict
"""

from __future__ import annotations

from typing import Any, Dict, Union

from conceal.core.config_loader import load_config
from conceal.config.validator import ConfigValidator


class ConcealConfig:
    """
    Typed configuration for Conceal.

    Usage
    -----
    # From preset
    cfg = ConcealConfig("strict")

    # From dict
    cfg = ConcealConfig({
        "extractor": {"on_unsupported": "fail", "max_depth": 16},
        "transform": {"text_encoding": "urlsafe_base64"},
    })

    # From YAML file
    cfg = ConcealConfig("/path/to/conceal.yaml")
    """

    def __init__(self, source: Union[str, Dict[str, Any], None] = None):
        raw = load_config(source) if source is not None else {}
        raw = ConfigValidator.validate(raw)

        # ── Extractor config ───────────────────────────────────────────────
        extractor_cfg = raw.get("extractor", {})
        self.tag_key: str        = extractor_cfg.get("tag_key", "conceal")
        self.on_unsupported: str = extractor_cfg.get("on_unsupported", "skip")
        self.max_depth: int      = int(extractor_cfg.get("max_depth", 64))

        # ── Transform config ───────────────────────────────────────────────
        transform_cfg = raw.get("transform", {})
        self.text_encoding: str = transform_cfg.get("text_encoding", "base64")
        self.charset: str       = transform_cfg.get("charset", "utf-8")

        # ── Audit config ───────────────────────────────────────────────────
        audit_cfg = raw.get("audit", {})
        self.audit_enabled: bool    = audit_cfg.get("enabled", True)
        self.audit_console: bool    = audit_cfg.get("console", False)
        self.audit_max_entries: int = int(audit_cfg.get("max_entries", 10_000))

    @classmethod
    def coerce(cls, config: Union["ConcealConfig", str, Dict[str, Any], None]) -> "ConcealConfig":
        """Return ``config`` if it is already a ConcealConfig, else build one."""
        if isinstance(config, ConcealConfig):
            return config
        return cls(config)

    @property
    def strict(self) -> bool:
        return self.on_unsupported == "fail"

    def __repr__(self) -> str:
        return (
            f"ConcealConfig(on_unsupported={self.on_unsupported!r}, "
            f"max_depth={self.max_depth}, "
            f"text_encoding={self.text_encoding!r})"
        )
