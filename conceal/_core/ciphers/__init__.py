"""Cipher implementations."""
from conceal._core.ciphers.base_cipher   import BaseCipher
from conceal._core.ciphers.aesgcm_cipher import AESGCMCipher

__all__ = ["BaseCipher", "AESGCMCipher"]
