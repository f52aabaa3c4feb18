"""Abstract cipher interface."""
from __future__ import annotations
from abc import ABC, abstractmethod


class BaseCipher(ABC):
    """
    Abstract interface for the encrypt/decrypt pair applied to each field.

    ``identifier`` is the value of the record tree's "id" member, or ""
    when none is declared. How it is used (key lookup, key derivation,
    associated data) is up to the cipher.

    Any object with matching ``encrypt``/``decrypt`` methods can be passed
    to protect() and reveal(); inheriting this class is optional.
    Exceptions raised here reach the caller unchanged.
    """

    @abstractmethod
    def encrypt(self, value: bytes, identifier: str) -> bytes:
        """Return the ciphertext for ``value``."""
        ...

    @abstractmethod
    def decrypt(self, value: bytes, identifier: str) -> bytes:
        """Return the plaintext for ``value``, or raise if it cannot be opened."""
        ...
