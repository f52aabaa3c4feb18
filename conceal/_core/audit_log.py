"""
conceal._core.audit_log
=======================
Append-only audit trail of field transforms.

Every field handled by protect() or reveal() is recorded with:
  timestamp, operation, path, kind, masked identifier, result
Field values are never recorded.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from conceal.core.logger import mask_identifier


class AuditLog:
    """
    In-memory append-only audit log of field transforms.

    Usage
    -----
    log = AuditLog()
    log.record("protect", path="User.name", kind="text", identifier="user-1")
    entries = log.get_entries(path="User.name")
    """

    def __init__(self, max_entries: int = 10_000):
        self.max_entries = max_entries
        self._entries: List[Dict[str, Any]] = []

    def record(
        self,
        operation: str,
        path: str = "",
        kind: str = "",
        identifier: str = "",
        result: str = "success",
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Append one audit entry.

        Parameters
        ----------
        operation  : "protect" | "reveal"
        path       : Display path of the field, e.g. "User.classes[0].name".
        kind       : "text" | "binary"
        identifier : Context value passed to the cipher (stored masked).
        result     : "success" | "cipher_error" | "decode_error"
        **kwargs   : Extra fields (error type, etc.)
        """
        entry: Dict[str, Any] = {
            "timestamp":  datetime.now(timezone.utc).isoformat(),
            "operation":  operation,
            "path":       path,
            "kind":       kind,
            "identifier": mask_identifier(identifier),
            "result":     result,
        }
        entry.update(kwargs)

        if len(self._entries) >= self.max_entries:
            self._entries = self._entries[-(self.max_entries // 2):]
        self._entries.append(entry)
        return entry

    def get_entries(
        self,
        path:      Optional[str] = None,
        operation: Optional[str] = None,
        result:    Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return audit entries, optionally filtered by path, operation and result."""
        entries = self._entries
        if path:
            entries = [e for e in entries if e.get("path") == path]
        if operation:
            entries = [e for e in entries if e.get("operation") == operation]
        if result:
            entries = [e for e in entries if e.get("result") == result]
        return list(entries)

    def __repr__(self) -> str:
        return f"AuditLog(entries={len(self._entries)})"
