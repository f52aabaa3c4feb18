"""
conceal.config.validator
========================
Config validation. Raises ConfigError with descriptive messages
when a section has the wrong shape or an unsupported value.
"""

from __future__ import annotations

import codecs
from typing import Any, Dict

from conceal.core.exceptions import ConfigError
from conceal._core.codecs import available_codecs


_VALID_SECTIONS       = {"extractor", "transform", "audit"}
_VALID_ON_UNSUPPORTED = {"skip", "fail"}


class ConfigValidator:
    """
    Validates a conceal config dict.
    All fields are optional (defaults are applied in ConcealConfig).
    """

    @staticmethod
    def validate(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate the config dict. Returns the same dict if valid.
        Raises ConfigError if any value is invalid.
        """
        if not isinstance(config, dict):
            raise ConfigError(
                f"Config must be a dict, got {type(config).__name__}",
                details={"type": type(config).__name__},
            )

        unknown = set(config) - _VALID_SECTIONS
        if unknown:
            raise ConfigError(
                f"Unknown config section(s): {sorted(unknown)}",
                details={"valid": sorted(_VALID_SECTIONS)},
            )

        for section in _VALID_SECTIONS:
            if section in config and not isinstance(config[section], dict):
                raise ConfigError(f"{section} must be a dict")

        extractor = config.get("extractor", {})
        transform = config.get("transform", {})
        audit     = config.get("audit", {})

        # ── Extractor validation ───────────────────────────────────────────
        if "tag_key" in extractor:
            tk = extractor["tag_key"]
            if not isinstance(tk, str) or not tk:
                raise ConfigError(
                    f"extractor.tag_key must be a non-empty string, got {tk!r}"
                )

        if "on_unsupported" in extractor:
            ou = extractor["on_unsupported"]
            if ou not in _VALID_ON_UNSUPPORTED:
                raise ConfigError(
                    f"Invalid extractor.on_unsupported: {ou!r}",
                    details={"valid": sorted(_VALID_ON_UNSUPPORTED)},
                )

        if "max_depth" in extractor:
            md = extractor["max_depth"]
            if isinstance(md, bool) or not isinstance(md, int) or md < 1:
                raise ConfigError(
                    f"extractor.max_depth must be a positive int, got {md!r}"
                )

        # ── Transform validation ───────────────────────────────────────────
        if "text_encoding" in transform:
            enc = transform["text_encoding"]
            if enc not in available_codecs():
                raise ConfigError(
                    f"Invalid transform.text_encoding: {enc!r}",
                    details={"valid": available_codecs()},
                )

        if "charset" in transform:
            cs = transform["charset"]
            try:
                codecs.lookup(cs)
            except (LookupError, TypeError) as exc:
                raise ConfigError(
                    f"Unknown transform.charset: {cs!r}",
                    details={"error": str(exc)},
                ) from exc

        # ── Audit validation ───────────────────────────────────────────────
        for flag in ("enabled", "console"):
            if flag in audit and not isinstance(audit[flag], bool):
                raise ConfigError(f"audit.{flag} must be a bool")

        if "max_entries" in audit:
            me = audit["max_entries"]
            if isinstance(me, bool) or not isinstance(me, int) or me < 2:
                raise ConfigError(
                    f"audit.max_entries must be an int >= 2, got {me!r}"
                )

        return config
