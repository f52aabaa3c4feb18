"""
conceal._core.codecs
====================
Reversible bytes ↔ text codecs for storing ciphertext in str fields.

Each codec validates its alphabet before decoding so malformed text
fails loudly instead of decoding to garbage.

Codec names:
  base64          standard alphabet, padded (default)
  urlsafe_base64  "-" and "_" instead of "+" and "/", padded
  base32          RFC 4648 base32, padded
  hex             lowercase or uppercase hex digits
"""

from __future__ import annotations

import base64
import binascii
from typing import Callable, Dict, List

import regex

from conceal.core.exceptions import DecodeError


class TextCodec:
    """A named pair of bytes → str and str → bytes functions."""

    def __init__(
        self,
        name: str,
        encoder: Callable[[bytes], bytes],
        decoder: Callable[[bytes], bytes],
        alphabet: "regex.Pattern",
    ):
        self.name      = name
        self._encoder  = encoder
        self._decoder  = decoder
        self._alphabet = alphabet

    def encode(self, data: bytes) -> str:
        return self._encoder(bytes(data)).decode("ascii")

    def decode(self, text: str, path: str = "") -> bytes:
        """
        Decode ``text`` back to bytes.

        Raises
        ------
        DecodeError
            If ``text`` is not a str, uses characters outside the codec's
            alphabet, or has an invalid length or padding.
        """
        if not isinstance(text, str):
            raise DecodeError(
                f"Cannot {self.name}-decode a {type(text).__name__} value",
                details={"path": path, "codec": self.name},
            )
        if not self._alphabet.fullmatch(text):
            raise DecodeError(
                f"Value is not valid {self.name} text",
                details={"path": path, "codec": self.name, "reason": "alphabet"},
            )
        try:
            return self._decoder(text.encode("ascii"))
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(
                f"Value is not valid {self.name} text",
                details={"path": path, "codec": self.name, "reason": str(exc)},
            ) from exc

    def __repr__(self) -> str:
        return f"TextCodec({self.name!r})"


_CODECS: Dict[str, TextCodec] = {
    "base64": TextCodec(
        "base64",
        base64.b64encode,
        lambda b: base64.b64decode(b, validate=True),
        regex.compile(r"[A-Za-z0-9+/]*={0,2}"),
    ),
    "urlsafe_base64": TextCodec(
        "urlsafe_base64",
        base64.urlsafe_b64encode,
        base64.urlsafe_b64decode,
        regex.compile(r"[A-Za-z0-9\-_]*={0,2}"),
    ),
    "base32": TextCodec(
        "base32",
        base64.b32encode,
        base64.b32decode,
        regex.compile(r"[A-Z2-7]*={0,6}"),
    ),
    "hex": TextCodec(
        "hex",
        binascii.hexlify,
        binascii.unhexlify,
        regex.compile(r"(?:[0-9A-Fa-f]{2})*"),
    ),
}


def get_codec(name: str) -> TextCodec:
    """Return the codec registered under ``name``; KeyError if unknown."""
    return _CODECS[name]


def available_codecs() -> List[str]:
    return sorted(_CODECS)
