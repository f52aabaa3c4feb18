"""
conceal.core.logger
===================
Structured event logger for extraction and transform passes.
Entries are JSON-style dicts; field values never go through it and
identifiers are masked before they are recorded.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


# Keys whose values are masked before an entry is stored
_MASKED_KEYS = {"identifier"}


class StructuredLogger:
    """
    Records operations as JSON-style dicts.

    Two output modes:
      console: also prints formatted log lines to stderr
      silent:  stores entries in memory only (default)

    Usage
    -----
    logger = StructuredLogger(name="extractor", console=True)
    logger.log("extract", root="User", text_fields=2, identifier="user-1")
    entries = logger.get_entries(operation="extract")
    """

    def __init__(
        self,
        name: str = "conceal",
        console: bool = False,
        max_entries: int = 10_000,
    ):
        self.name        = name
        self.console     = console
        self.max_entries = max_entries
        self._entries: List[Dict[str, Any]] = []

    def log(
        self,
        operation: str,
        level: str = "INFO",
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Record a structured log entry.

        Parameters
        ----------
        operation : str
            Short operation name (e.g. "extract", "protect", "skip_unsupported").
        level : str
            Log level: INFO / WARNING / ERROR.
        **kwargs
            Additional key-value pairs to include in the entry.

        Returns
        -------
        dict
            The log entry that was recorded.
        """
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger":    self.name,
            "level":     level,
            "operation": operation,
        }
        for key, value in kwargs.items():
            entry[key] = mask_identifier(value) if key in _MASKED_KEYS else value

        if len(self._entries) >= self.max_entries:
            self._entries = self._entries[-(self.max_entries // 2):]

        self._entries.append(entry)

        if self.console:
            self._print_entry(entry)

        return entry

    def warn(self, operation: str, **kwargs: Any) -> Dict[str, Any]:
        return self.log(operation, level="WARNING", **kwargs)

    def error(self, operation: str, **kwargs: Any) -> Dict[str, Any]:
        return self.log(operation, level="ERROR", **kwargs)

    def get_entries(
        self,
        operation: Optional[str] = None,
        level: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return stored log entries, optionally filtered by operation and level."""
        entries = self._entries
        if operation:
            entries = [e for e in entries if e.get("operation") == operation]
        if level:
            entries = [e for e in entries if e.get("level") == level]
        return list(entries)

    def _print_entry(self, entry: Dict[str, Any]) -> None:
        ts  = entry.get("timestamp", "")[:19]
        lvl = entry.get("level", "INFO").ljust(8)
        op  = entry.get("operation", "")
        extras = {
            k: v for k, v in entry.items()
            if k not in ("timestamp", "logger", "level", "operation")
        }
        extra_str = " " + json.dumps(extras, default=str) if extras else ""
        print(
            f"[{ts}] {lvl} [{self.name}] {op}{extra_str}",
            file=sys.stderr,
            flush=True,
        )

    def __repr__(self) -> str:
        return (
            f"StructuredLogger(name={self.name!r}, "
            f"entries={len(self._entries)}, "
            f"console={self.console})"
        )


def mask_identifier(identifier: Any) -> str:
    """Keep the first 4 characters of an identifier, mask the rest."""
    text = "" if identifier is None else str(identifier)
    if len(text) <= 4:
        return text[:1] + "***" if text else ""
    return text[:4] + "***"
