"""
conceal.field_security
======================
Conceal — the main entry point.
Wires together the Extractor, the TransformDriver and the audit trail.

Public API:
  protect(root)                 → number of fields encrypted
  reveal(root)                  → number of fields decrypted
  extract(root)                 → Classification
  audit(path=None, operation=None) → list of audit entries

Module-level shortcuts protect()/reveal()/extract() (and encrypt()/decrypt()
aliases) build a one-off Conceal for a single call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from conceal.config.conceal_config import ConcealConfig
from conceal.core.data_types import Classification
from conceal.core.logger import StructuredLogger
from conceal._core.audit_log import AuditLog
from conceal._core.driver import TransformDriver
from conceal._core.extractor import Extractor


ConfigSource = Union[ConcealConfig, str, Dict[str, Any], None]


class Conceal:
    """
    Field-level encryption for role-annotated records.

    Fields declared "data" are encrypted with the supplied cipher; the
    value of the single "id" field is passed to every cipher call.
    Records are modified in place. Each call extracts afresh, so a
    Conceal instance keeps no per-record state between calls.

    A structural error is raised before any field is touched. A cipher
    or decode error stops the pass where it happens: fields handled
    before it stay transformed.

    The caller must hold exclusive access to the record during a call.

    Usage
    -----
    @dataclass
    class User:
        id:   str   = concealed("id")
        name: str   = concealed("data")
        blob: bytes = concealed("data", default=b"")

    guard = Conceal(AESGCMCipher(secret="..."), config="strict")
    guard.protect(user)   # user.name is now base64 ciphertext
    guard.reveal(user)    # user.name is back to the original text
    """

    def __init__(self, cipher: Any, config: ConfigSource = None):
        """
        Parameters
        ----------
        cipher : object with encrypt(bytes, str) and decrypt(bytes, str)
            The cipher applied to every field.
        config : ConcealConfig, str, dict, or None
            str  → preset name ("default", "strict") or YAML file path
            dict → raw config dict
            None → defaults
        """
        self._cfg    = ConcealConfig.coerce(config)
        self._cipher = cipher

        self._logger = StructuredLogger(
            name        = "conceal",
            console     = self._cfg.audit_console,
            max_entries = self._cfg.audit_max_entries,
        )
        self._audit = AuditLog(max_entries=self._cfg.audit_max_entries) if self._cfg.audit_enabled else None

        self._extractor = Extractor.from_config(self._cfg, logger=self._logger)
        self._driver    = TransformDriver.from_config(self._cfg, audit=self._audit, logger=self._logger)

    @property
    def config(self) -> ConcealConfig:
        return self._cfg

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    # ── Public API ────────────────────────────────────────────────────────────

    def extract(self, root: Any) -> Classification:
        """Classify the fields of ``root`` without modifying it."""
        return self._extractor.extract(root)

    def protect(self, root: Any) -> int:
        """
        Encrypt every "data" field reachable from ``root`` in place.

        Returns
        -------
        int
            Number of fields encrypted.

        Raises
        ------
        ExtractionError
            Structural problem; nothing was modified.
        Exception
            Whatever the cipher raises, unchanged.
        """
        return self._driver.protect(self._extractor.extract(root), self._cipher)

    def reveal(self, root: Any) -> int:
        """
        Decrypt every "data" field reachable from ``root`` in place.

        Returns
        -------
        int
            Number of fields decrypted.

        Raises
        ------
        ExtractionError
            Structural problem; nothing was modified.
        DecodeError
            A text field is not valid encoded ciphertext.
        Exception
            Whatever the cipher raises, unchanged.
        """
        return self._driver.reveal(self._extractor.extract(root), self._cipher)

    encrypt = protect
    decrypt = reveal

    def audit(
        self,
        path: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return field-level audit entries, or [] if audit is disabled."""
        if self._audit is None:
            return []
        return self._audit.get_entries(path=path, operation=operation)

    def __repr__(self) -> str:
        return f"Conceal(cipher={type(self._cipher).__name__}, config={self._cfg!r})"


# ── Module-level shortcuts ────────────────────────────────────────────────────

def extract(root: Any, config: ConfigSource = None) -> Classification:
    """Classify the fields of ``root`` with a one-off Extractor."""
    cfg = ConcealConfig.coerce(config)
    return Extractor.from_config(cfg).extract(root)


def protect(root: Any, cipher: Any, config: ConfigSource = None) -> int:
    """Encrypt ``root`` in place. See Conceal.protect()."""
    return Conceal(cipher, config).protect(root)


def reveal(root: Any, cipher: Any, config: ConfigSource = None) -> int:
    """Decrypt ``root`` in place. See Conceal.reveal()."""
    return Conceal(cipher, config).reveal(root)


encrypt = protect
decrypt = reveal
