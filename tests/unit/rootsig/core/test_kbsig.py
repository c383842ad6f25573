"""Unit tests for kbsig envelopes."""

from __future__ import annotations

import base64

import msgpack
import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519

from rootsig.core.crypto import KeyPair
from rootsig.core.exceptions import BadSignatureError, MalformedInputError
from rootsig.core.kbsig import (
    SIG_TAG,
    SIG_VERSION,
    KbSig,
    decode_kbsig,
    encode_kbsig,
    unpack_kbsig,
    verify_kbsig,
)


def _pack(envelope: dict) -> str:
    return base64.b64encode(msgpack.packb(envelope, use_bin_type=True)).decode("ascii")


def _envelope(sig: object, payload: object) -> dict:
    return {"body": {"sig": sig, "payload": payload}, "tag": SIG_TAG, "version": SIG_VERSION}


def test_verify_kbsig_returns_payload(root_nacl_key: KeyPair, root_json: str) -> None:
    envelope = encode_kbsig(root_json.encode("utf-8"), root_nacl_key)
    output = verify_kbsig(envelope, root_nacl_key.public_key)
    assert output.decode("utf-8") == root_json


def test_verify_kbsig_is_repeatable(root_nacl_key: KeyPair) -> None:
    envelope = encode_kbsig(b"root", root_nacl_key)
    outputs = {verify_kbsig(envelope, root_nacl_key.public_key) for _ in range(3)}
    assert outputs == {b"root"}


def test_decode_kbsig_fields(root_nacl_key: KeyPair) -> None:
    decoded = decode_kbsig(encode_kbsig(b"root", root_nacl_key))
    assert isinstance(decoded, KbSig)
    assert decoded.tag == SIG_TAG
    assert decoded.version == SIG_VERSION
    assert decoded.body.payload == b"root"
    assert len(decoded.body.sig) == 64
    assert decoded.body.detached is True
    assert decoded.signer_kid == root_nacl_key.kid


def test_flipped_payload_is_bad_signature(root_nacl_key: KeyPair) -> None:
    payload = b'{"seqno":5360668}'
    envelope = _envelope(root_nacl_key.sign(payload), payload[:-1] + b"]")
    with pytest.raises(BadSignatureError):
        verify_kbsig(_pack(envelope), root_nacl_key.public_key)


def test_all_ff_key_is_bad_signature(root_nacl_key: KeyPair) -> None:
    envelope = encode_kbsig(b"root", root_nacl_key)
    key = ed25519.Ed25519PublicKey.from_public_bytes(b"\xff" * 32)
    with pytest.raises(BadSignatureError, match="signature verification failed"):
        verify_kbsig(envelope, key)


def test_other_key_is_bad_signature(root_nacl_key: KeyPair) -> None:
    envelope = encode_kbsig(b"root", root_nacl_key)
    with pytest.raises(BadSignatureError):
        verify_kbsig(envelope, KeyPair.generate().public_key)


def test_claimed_key_is_not_trusted(root_nacl_key: KeyPair) -> None:
    other = KeyPair.generate()
    payload = b"root"
    envelope = _envelope(other.sign(payload), payload)
    envelope["body"]["key"] = bytes.fromhex(root_nacl_key.kid)
    with pytest.raises(BadSignatureError):
        verify_kbsig(_pack(envelope), root_nacl_key.public_key)


def test_whitespace_in_base64_is_ignored(root_nacl_key: KeyPair) -> None:
    envelope = encode_kbsig(b"root", root_nacl_key)
    wrapped = "\n".join(envelope[i : i + 64] for i in range(0, len(envelope), 64)) + "\n"
    assert verify_kbsig(wrapped, root_nacl_key.public_key) == b"root"


def test_bytes_input_is_accepted(root_nacl_key: KeyPair) -> None:
    envelope = encode_kbsig(b"root", root_nacl_key).encode("ascii")
    assert verify_kbsig(envelope, root_nacl_key.public_key) == b"root"


def test_invalid_base64() -> None:
    with pytest.raises(MalformedInputError, match="base64"):
        decode_kbsig("not base64!!")


def test_invalid_msgpack() -> None:
    with pytest.raises(MalformedInputError, match="msgpack"):
        unpack_kbsig(b"\xc1")


def test_truncated_msgpack(root_nacl_key: KeyPair) -> None:
    raw = base64.b64decode(encode_kbsig(b"root", root_nacl_key))
    with pytest.raises(MalformedInputError):
        unpack_kbsig(raw[:-5])


def test_payload_as_string_is_rejected(root_nacl_key: KeyPair) -> None:
    envelope = _envelope(root_nacl_key.sign(b"root"), "root")
    with pytest.raises(MalformedInputError, match="invalid kbsig envelope"):
        decode_kbsig(_pack(envelope))


def test_sig_as_integer_array_is_rejected(root_nacl_key: KeyPair) -> None:
    envelope = _envelope(list(root_nacl_key.sign(b"root")), b"root")
    with pytest.raises(MalformedInputError, match="invalid kbsig envelope"):
        decode_kbsig(_pack(envelope))


@pytest.mark.parametrize("envelope", [{}, {"body": {}}, {"body": {"sig": b"x"}}, [1, 2, 3]])
def test_missing_fields_are_rejected(envelope) -> None:
    with pytest.raises(MalformedInputError):
        decode_kbsig(_pack(envelope))


def test_short_signature_is_malformed(root_nacl_key: KeyPair) -> None:
    envelope = _envelope(b"\x00" * 10, b"root")
    with pytest.raises(MalformedInputError, match="bad sig length"):
        verify_kbsig(_pack(envelope), root_nacl_key.public_key)


def test_unknown_fields_are_ignored(root_nacl_key: KeyPair) -> None:
    envelope = _envelope(root_nacl_key.sign(b"root"), b"root")
    envelope["body"]["seqno"] = 7
    envelope["prev"] = b"\x00"
    assert verify_kbsig(_pack(envelope), root_nacl_key.public_key) == b"root"
