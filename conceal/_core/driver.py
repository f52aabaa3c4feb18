"""
conceal._core.driver
====================
Applies a cipher to every field location in a Classification.

  protect: text   → encode(charset) → cipher.encrypt → codec.encode → str
           binary → cipher.encrypt → bytes
  reveal:  text   → codec.decode → cipher.decrypt → decode(charset) → str
           binary → cipher.decrypt → bytes

Text locations are processed first, then binary locations, each in
collection order. Fields are overwritten in place as the pass goes: an
error partway through leaves the earlier fields transformed and the rest
untouched. There is no rollback; callers that need all-or-nothing must
snapshot the value themselves.
"""

from __future__ import annotations

from typing import Any, Optional

from conceal.core.data_types import Classification, FieldHandle
from conceal.core.exceptions import ConcealError, DecodeError
from conceal.core.logger import StructuredLogger
from conceal._core.audit_log import AuditLog
from conceal._core.codecs import TextCodec, get_codec


class TransformDriver:
    """
    Parameters
    ----------
    codec : TextCodec or None
        Reversible text codec for str fields. Defaults to base64.
    charset : str
        Charset used to turn str fields into plaintext bytes and back.
    audit : AuditLog or None
        Receives one entry per field when given.
    logger : StructuredLogger or None
        Receives pass-level "protect"/"reveal" and "error" events.
    """

    def __init__(
        self,
        codec: Optional[TextCodec] = None,
        charset: str = "utf-8",
        audit: Optional[AuditLog] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.codec    = codec or get_codec("base64")
        self.charset  = charset
        self._audit   = audit
        self._logger  = logger or StructuredLogger(name="driver")

    @classmethod
    def from_config(
        cls,
        config,
        audit: Optional[AuditLog] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> "TransformDriver":
        return cls(
            codec   = get_codec(config.text_encoding),
            charset = config.charset,
            audit   = audit,
            logger  = logger,
        )

    # ── Forward pass ──────────────────────────────────────────────────────────

    def protect(self, classification: Classification, cipher: Any) -> int:
        """
        Encrypt every collected field in place.

        Returns
        -------
        int
            Number of fields encrypted.
        """
        identifier = classification.identifier

        for handle in classification.text_locations:
            plaintext = self._text_to_bytes(handle)
            ciphertext = self._call(cipher.encrypt, "protect", handle, plaintext, identifier)
            handle.set(self.codec.encode(ciphertext))
            self._record("protect", handle, identifier)

        for handle in classification.binary_locations:
            ciphertext = self._call(cipher.encrypt, "protect", handle, bytes(handle.get()), identifier)
            handle.set(ciphertext)
            self._record("protect", handle, identifier)

        self._logger.log("protect", fields=classification.field_count, identifier=identifier)
        return classification.field_count

    # ── Inverse pass ──────────────────────────────────────────────────────────

    def reveal(self, classification: Classification, cipher: Any) -> int:
        """
        Decrypt every collected field in place.

        Raises
        ------
        DecodeError
            If a text field is not valid codec text, or its plaintext is
            not valid text in the configured charset.

        Returns
        -------
        int
            Number of fields decrypted.
        """
        identifier = classification.identifier

        for handle in classification.text_locations:
            try:
                ciphertext = self.codec.decode(handle.get(), path=handle.path)
            except DecodeError:
                self._record("reveal", handle, identifier, result="decode_error")
                self._logger.error("error", path=handle.path, reason="decode")
                raise
            plaintext = self._call(cipher.decrypt, "reveal", handle, ciphertext, identifier)
            handle.set(self._bytes_to_text(handle, plaintext, identifier))
            self._record("reveal", handle, identifier)

        for handle in classification.binary_locations:
            plaintext = self._call(cipher.decrypt, "reveal", handle, bytes(handle.get()), identifier)
            handle.set(plaintext)
            self._record("reveal", handle, identifier)

        self._logger.log("reveal", fields=classification.field_count, identifier=identifier)
        return classification.field_count

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _call(self, op, operation: str, handle: FieldHandle, value: bytes, identifier: str) -> bytes:
        """Invoke a cipher method; its exceptions propagate unchanged."""
        try:
            return op(value, identifier)
        except Exception as exc:
            self._record(operation, handle, identifier, result="cipher_error",
                         error=type(exc).__name__)
            self._logger.error("error", path=handle.path, reason="cipher",
                               error=type(exc).__name__)
            raise

    def _text_to_bytes(self, handle: FieldHandle) -> bytes:
        try:
            return handle.get().encode(self.charset)
        except UnicodeEncodeError as exc:
            raise ConcealError(
                f"Text field cannot be encoded as {self.charset}",
                details={"path": handle.path, "error": str(exc)},
            ) from exc

    def _bytes_to_text(self, handle: FieldHandle, plaintext: bytes, identifier: str) -> str:
        try:
            return bytes(plaintext).decode(self.charset)
        except UnicodeDecodeError as exc:
            self._record("reveal", handle, identifier, result="decode_error")
            raise DecodeError(
                f"Decrypted value is not valid {self.charset} text",
                details={"path": handle.path},
            ) from exc

    def _record(self, operation: str, handle: FieldHandle, identifier: str,
                result: str = "success", **kwargs: Any) -> None:
        if self._audit is not None:
            self._audit.record(operation, path=handle.path, kind=handle.kind,
                               identifier=identifier, result=result, **kwargs)
