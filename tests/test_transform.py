"""
Transform tests — protect/reveal passes, identifier propagation,
partial failure and the audit trail.
Run with: python -m pytest tests/ -v
"""

import base64
import copy

import pytest

from conceal import (
    Conceal,
    ConcealError,
    DecodeError,
    DuplicateIDsError,
    decrypt,
    encrypt,
    protect,
    reveal,
)

from conftest import Class, RecordingCipher, User


# ── Protect ───────────────────────────────────────────────────────────────────

class TestProtect:
    def test_concrete_scenario(self, user, cipher):
        count = protect(user, cipher)
        assert count == 3
        assert user.name != "John"
        assert user.classes[0].name != "Cool"
        assert user.raw != b"hello world"
        assert [c[0] for c in cipher.calls] == ["encrypt"] * 3
        assert cipher.contexts() == ["1", "1", "1"]

    def test_text_fields_hold_base64(self, user, cipher):
        protect(user, cipher)
        raw = base64.b64decode(user.name, validate=True)
        assert raw.startswith(RecordingCipher.MARKER)

    def test_binary_fields_hold_raw_ciphertext(self, user, cipher):
        protect(user, cipher)
        assert isinstance(user.raw, bytes)
        assert user.raw.startswith(RecordingCipher.MARKER)

    def test_plaintext_sent_as_utf8(self, cipher):
        protect(User(id="u", name="Zoë"), cipher)
        assert cipher.calls[0][1] == "Zoë".encode("utf-8")

    def test_unannotated_never_touched(self, user, cipher):
        protect(user, cipher)
        assert user.note == "leave me alone"
        assert all(b"leave me alone" != c[1] for c in cipher.calls)

    def test_collection_gets_one_call_per_element(self, cipher):
        user = User(id="team-9", classes=[Class(name=f"c{i}") for i in range(5)])
        protect(user, cipher)
        class_calls = [c for c in cipher.calls if c[1].startswith(b"c")]
        assert len(class_calls) == 5
        assert {c[2] for c in cipher.calls} == {"team-9"}

    def test_missing_identifier_passes_empty_context(self, cipher):
        protect(Class(name="anon"), cipher)
        assert cipher.contexts() == [""]

    def test_text_before_binary(self, user, cipher):
        protect(user, cipher)
        assert cipher.calls[-1][1] == b"hello world"

    def test_bytearray_stays_bytearray(self, cipher):
        user = User(id="1", raw=bytearray(b"abc"))
        protect(user, cipher)
        assert isinstance(user.raw, bytearray)
        reveal(user, cipher)
        assert user.raw == bytearray(b"abc")


# ── Reveal ────────────────────────────────────────────────────────────────────

class TestReveal:
    def test_round_trip(self, user, cipher):
        user.top = Class(name="Cool 2")
        original = copy.deepcopy(user)
        protect(user, cipher)
        reveal(user, cipher)
        assert user == original
        assert [c[0] for c in cipher.calls] == ["encrypt"] * 4 + ["decrypt"] * 4
        assert set(cipher.contexts()) == {"1"}

    def test_round_trip_empty_strings(self, cipher):
        user = User(id="1", name="", raw=b"")
        protect(user, cipher)
        assert user.name != ""
        reveal(user, cipher)
        assert user.name == ""
        assert user.raw == b""

    def test_malformed_text_raises_decode_error(self, cipher):
        user = User(id="1", name="not base64!")
        with pytest.raises(DecodeError) as exc_info:
            reveal(user, cipher)
        assert exc_info.value.details["path"] == "User.name"
        assert cipher.calls == []

    def test_bad_padding_raises_decode_error(self, cipher):
        with pytest.raises(DecodeError):
            reveal(User(id="1", name="abcde"), cipher)

    def test_non_utf8_plaintext_raises_decode_error(self, cipher):
        user = User(id="1")
        user.name = base64.b64encode(RecordingCipher.MARKER + cipher._xor(b"\xff\xfe")).decode()
        with pytest.raises(DecodeError):
            reveal(user, cipher)

    def test_aliases(self, user, cipher):
        encrypt(user, cipher)
        decrypt(user, cipher)
        assert user.name == "John"


# ── Failure behaviour ─────────────────────────────────────────────────────────

class TestFailures:
    def test_structural_error_before_any_mutation(self, cipher):
        user = User(id="1", name="John", classes=[Class(name="Cool")])
        user.classes.append(User(id="2"))
        with pytest.raises(DuplicateIDsError):
            protect(user, cipher)
        assert user.name == "John"
        assert cipher.calls == []

    def test_cipher_error_propagates_unchanged(self, user):
        cipher = RecordingCipher(fail_on_call=1)
        with pytest.raises(RuntimeError, match="cipher unavailable"):
            protect(user, cipher)

    def test_partial_mutation_is_kept(self, user):
        cipher = RecordingCipher(fail_on_call=1)
        with pytest.raises(RuntimeError):
            protect(user, cipher)
        assert user.name != "John"
        assert user.classes[0].name == "Cool"
        assert user.raw == b"hello world"

    def test_reveal_partial_mutation_is_kept(self, user, cipher):
        protect(user, cipher)
        protected_raw = user.raw
        user.classes[0].name = "not base64!"
        with pytest.raises(DecodeError):
            reveal(user, cipher)
        assert user.name == "John"
        assert user.classes[0].name == "not base64!"
        assert user.raw == protected_raw

    def test_reveal_cipher_error_propagates(self, user, cipher):
        user.name = base64.b64encode(b"garbage").decode()
        with pytest.raises(ValueError, match="not produced"):
            reveal(user, cipher)

    def test_unencodable_text(self, cipher):
        guard = Conceal(cipher, config={"transform": {"charset": "ascii"}})
        with pytest.raises(ConcealError):
            guard.protect(User(id="1", name="Zoë"))


# ── Codecs ────────────────────────────────────────────────────────────────────

class TestCodecs:
    @pytest.mark.parametrize("encoding", ["base64", "urlsafe_base64", "base32", "hex"])
    def test_round_trip_with_each_codec(self, encoding, user, cipher):
        guard = Conceal(cipher, config={"transform": {"text_encoding": encoding}})
        guard.protect(user)
        assert user.name != "John"
        guard.reveal(user)
        assert user.name == "John"
        assert user.classes[0].name == "Cool"

    def test_hex_field_content(self, cipher):
        user = User(id="1", name="a")
        Conceal(cipher, config={"transform": {"text_encoding": "hex"}}).protect(user)
        assert bytes.fromhex(user.name).startswith(RecordingCipher.MARKER)


# ── Conceal gateway ───────────────────────────────────────────────────────────

class TestConcealGateway:
    def test_audit_records_each_field(self, user, cipher):
        guard = Conceal(cipher)
        guard.protect(user)
        guard.reveal(user)
        assert len(guard.audit(operation="protect")) == 3
        assert len(guard.audit(operation="reveal")) == 3
        entry = guard.audit(path="User.classes[0].name", operation="protect")[0]
        assert entry["kind"] == "text"
        assert entry["result"] == "success"
        assert entry["identifier"] == "1***"

    def test_audit_never_holds_values(self, user, cipher):
        guard = Conceal(cipher)
        guard.protect(user)
        assert "John" not in repr(guard.audit())

    def test_audit_records_cipher_error(self, user):
        guard = Conceal(RecordingCipher(fail_on_call=0))
        with pytest.raises(RuntimeError):
            guard.protect(user)
        failed = guard.audit()[0]
        assert failed["result"] == "cipher_error"
        assert failed["error"] == "RuntimeError"

    def test_audit_disabled(self, user, cipher):
        guard = Conceal(cipher, config={"audit": {"enabled": False}})
        guard.protect(user)
        assert guard.audit() == []

    def test_extract_only(self, user, cipher):
        guard = Conceal(cipher)
        result = guard.extract(user)
        assert result.field_count == 3
        assert cipher.calls == []

    def test_instance_is_reusable(self, cipher):
        guard = Conceal(cipher)
        first, second = User(id="a", name="x"), User(id="b", name="y")
        guard.protect(first)
        guard.protect(second)
        assert cipher.contexts() == ["a", "a", "b", "b"]

    def test_pass_events_logged(self, user, cipher):
        guard = Conceal(cipher)
        guard.protect(user)
        assert guard.logger.get_entries(operation="protect")[0]["fields"] == 3
