"""Shared fixtures: a recording cipher and the sample User/Class records."""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dataclasses import dataclass
from typing import List, Optional

import pytest

from conceal import BaseCipher, concealed


class RecordingCipher(BaseCipher):
    """
    Reversible toy cipher: XOR with a key byte, prefixed with a marker.
    Records every call as (operation, value, identifier). With fail_on_call=N
    the call with 0-based index N raises RuntimeError.
    """

    MARKER = b"\x00enc:"

    def __init__(self, key: int = 0x5A, fail_on_call: Optional[int] = None):
        self.key = key
        self.fail_on_call = fail_on_call
        self.calls = []

    def _xor(self, value: bytes) -> bytes:
        return bytes(b ^ self.key for b in value)

    def _maybe_fail(self):
        if self.fail_on_call is not None and len(self.calls) - 1 == self.fail_on_call:
            raise RuntimeError("cipher unavailable")

    def encrypt(self, value, identifier):
        self.calls.append(("encrypt", bytes(value), identifier))
        self._maybe_fail()
        return self.MARKER + self._xor(value)

    def decrypt(self, value, identifier):
        self.calls.append(("decrypt", bytes(value), identifier))
        self._maybe_fail()
        if not value.startswith(self.MARKER):
            raise ValueError("not produced by RecordingCipher")
        return self._xor(value[len(self.MARKER):])

    def contexts(self):
        return [c[2] for c in self.calls]


@dataclass
class Class:
    name: str = concealed("data", default="")


@dataclass
class User:
    id:      str             = concealed("id", default="")
    name:    str             = concealed("data", default="")
    classes: List[Class]     = concealed("data", default_factory=list)
    top:     Optional[Class] = concealed("data", default=None)
    raw:     bytes           = concealed("data", default=b"")
    note:    str             = ""


@pytest.fixture
def cipher():
    return RecordingCipher()


@pytest.fixture
def user():
    return User(
        id="1",
        name="John",
        classes=[Class(name="Cool")],
        raw=b"hello world",
        note="leave me alone",
    )
