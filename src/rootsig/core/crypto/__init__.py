# SPDX-License-Identifier: MPL-2.0
"""NaCl (Ed25519) key identifiers and detached signatures.

Ed25519 public keys travel as *key identifiers*: a hex string made of a two
byte type tag (``01 20``), the 32 raw key bytes and a one byte terminator
(``0a``). Producers of these identifiers depend on the exact layout, so every
byte is checked before the key is used.

The signature math itself is done by :mod:`cryptography`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from ..encoding import decode_hex
from ..exceptions import (
    BadKeyLengthError,
    BadSignatureError,
    MalformedInputError,
    WrongKeySuffixError,
    WrongKeyTypeError,
)

KEY_TYPE_ED25519 = bytes([0x01, 0x20])
KEY_ID_SUFFIX = bytes([0x0A])
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


def public_bytes(public_key: ed25519.Ed25519PublicKey) -> bytes:
    """Return the raw 32 key bytes of ``public_key``."""
    return cast(
        "bytes",
        public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        ),
    )


def public_key_from_bytes(key_bytes: bytes) -> ed25519.Ed25519PublicKey:
    """Build a public key from exactly 32 raw bytes."""
    if len(key_bytes) != PUBLIC_KEY_SIZE:
        raise BadKeyLengthError(
            "bad key length",
            details={"expected": PUBLIC_KEY_SIZE, "actual": len(key_bytes)},
        )
    try:
        return ed25519.Ed25519PublicKey.from_public_bytes(key_bytes)
    except ValueError as exc:
        raise BadKeyLengthError(f"bad key length: {exc}") from exc


def decode_key_id(kid: str) -> ed25519.Ed25519PublicKey:
    """Decode a hex key identifier into an Ed25519 public key.

    Args:
        kid: Hex string ``0120`` + 64 hex key characters + ``0a``.

    Raises:
        MalformedHexError: ``kid`` is not valid hex.
        WrongKeyTypeError: the type tag is not ``01 20``.
        WrongKeySuffixError: the last byte is not ``0a``.
        BadKeyLengthError: the key bytes are not 32 bytes long.
    """
    raw = decode_hex(kid)
    if len(raw) < len(KEY_TYPE_ED25519) + len(KEY_ID_SUFFIX):
        raise BadKeyLengthError(
            "key identifier too short", details={"length": len(raw)}
        )

    # Strip the prefix and suffix.
    type_bytes = raw[: len(KEY_TYPE_ED25519)]
    suffix_bytes = raw[-len(KEY_ID_SUFFIX):]
    key_bytes = raw[len(KEY_TYPE_ED25519): -len(KEY_ID_SUFFIX)]

    if type_bytes != KEY_TYPE_ED25519:
        raise WrongKeyTypeError(
            f"wrong key type: {type_bytes.hex()}", details={"type": type_bytes.hex()}
        )
    if suffix_bytes != KEY_ID_SUFFIX:
        raise WrongKeySuffixError(
            f"wrong key suffix: {suffix_bytes.hex()}",
            details={"suffix": suffix_bytes.hex()},
        )
    return public_key_from_bytes(key_bytes)


load_nacl_key = decode_key_id


def encode_key_id(public_key: ed25519.Ed25519PublicKey) -> str:
    """Return the hex key identifier for ``public_key``."""
    return (KEY_TYPE_ED25519 + public_bytes(public_key) + KEY_ID_SUFFIX).hex()


def verify_detached(
    signature: bytes, payload: bytes, key: ed25519.Ed25519PublicKey
) -> bytes:
    """Verify a detached Ed25519 ``signature`` over ``payload``.

    Returns:
        ``payload`` unchanged when the signature is good.

    Raises:
        MalformedInputError: the signature is not 64 bytes long.
        BadSignatureError: the signature does not check out.
    """
    if len(signature) != SIGNATURE_SIZE:
        raise MalformedInputError(
            "bad sig length",
            details={"expected": SIGNATURE_SIZE, "actual": len(signature)},
        )
    try:
        key.verify(signature, payload)
    except InvalidSignature as exc:
        raise BadSignatureError() from exc
    return payload


@dataclass
class KeyPair:
    """An Ed25519 key pair that produces detached signatures."""

    private_key: ed25519.Ed25519PrivateKey
    public_key: ed25519.Ed25519PublicKey

    @classmethod
    def generate(cls) -> KeyPair:
        """Generate a new key pair."""
        private_key = ed25519.Ed25519PrivateKey.generate()
        return cls(private_key=private_key, public_key=private_key.public_key())

    @classmethod
    def from_private_bytes(cls, private_bytes: bytes) -> KeyPair:
        """Create a KeyPair from the 32 byte private seed."""
        private_key = ed25519.Ed25519PrivateKey.from_private_bytes(private_bytes)
        return cls(private_key=private_key, public_key=private_key.public_key())

    @property
    def kid(self) -> str:
        return encode_key_id(self.public_key)

    def sign(self, data: bytes) -> bytes:
        """Return a detached signature over ``data``."""
        return cast("bytes", self.private_key.sign(data))

    def public_bytes(self) -> bytes:
        return public_bytes(self.public_key)
