"""
conceal._core.ciphers.aesgcm_cipher
===================================
AES-256-GCM field cipher.

The key for each identifier is derived from a secret + the identifier
via PBKDF2-HMAC-SHA256, so records with different identifiers are
encrypted under different keys and no key storage is needed.

Output layout: nonce (12 bytes) || ciphertext+tag
"""

from __future__ import annotations

import hashlib
import os
from collections import OrderedDict
from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from conceal.core.exceptions import ConfigError
from conceal._core.ciphers.base_cipher import BaseCipher


_SECRET_ENV = "CONCEAL_SECRET"
_NONCE_SIZE = 12


class AESGCMCipher(BaseCipher):
    """
    Parameters
    ----------
    secret : str or None
        Master secret. Falls back to the CONCEAL_SECRET environment variable.
    iterations : int
        PBKDF2 iterations used for each key derivation.
    bind_identifier : bool
        Also pass the identifier as GCM associated data, so ciphertext
        moved to a record with another identifier fails to decrypt even
        if the derived keys were to collide.
    max_cached_keys : int
        Number of derived keys kept in memory. The least recently used key
        is dropped once the limit is reached.

    Raises
    ------
    ConfigError
        If no secret is given and CONCEAL_SECRET is not set.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        iterations: int = 100_000,
        bind_identifier: bool = True,
        max_cached_keys: int = 1024,
    ):
        secret = secret if secret is not None else os.environ.get(_SECRET_ENV)
        if not secret:
            raise ConfigError(
                "AESGCMCipher needs a secret",
                details={"env": _SECRET_ENV},
            )
        self._secret          = secret.encode("utf-8")
        self._iterations      = iterations
        self._bind_identifier = bind_identifier
        self._max_cached_keys = max(1, max_cached_keys)
        self._keys: "OrderedDict[str, bytes]" = OrderedDict()

    def encrypt(self, value: bytes, identifier: str) -> bytes:
        aesgcm = AESGCM(self._key_for(identifier))
        nonce  = os.urandom(_NONCE_SIZE)
        return nonce + aesgcm.encrypt(nonce, bytes(value), self._aad(identifier))

    def decrypt(self, value: bytes, identifier: str) -> bytes:
        """
        Raises
        ------
        ValueError
            If the value is too short to hold a nonce.
        cryptography.exceptions.InvalidTag
            If the key is wrong or the data was tampered with.
        """
        if len(value) < _NONCE_SIZE:
            raise ValueError("ciphertext too short")
        aesgcm = AESGCM(self._key_for(identifier))
        nonce, ct = bytes(value[:_NONCE_SIZE]), bytes(value[_NONCE_SIZE:])
        return aesgcm.decrypt(nonce, ct, self._aad(identifier))

    def _aad(self, identifier: str) -> Optional[bytes]:
        return identifier.encode("utf-8") if self._bind_identifier else None

    def _key_for(self, identifier: str) -> bytes:
        key = self._keys.get(identifier)
        if key is not None:
            self._keys.move_to_end(identifier)
            return key

        key = hashlib.pbkdf2_hmac(
            hash_name  = "sha256",
            password   = self._secret,
            salt       = identifier.encode("utf-8"),
            iterations = self._iterations,
            dklen      = 32,
        )
        self._keys[identifier] = key
        if len(self._keys) > self._max_cached_keys:
            self._keys.popitem(last=False)
        return key

    def __repr__(self) -> str:
        return f"AESGCMCipher(iterations={self._iterations}, cached_keys={len(self._keys)})"
