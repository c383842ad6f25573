# SPDX-License-Identifier: MPL-2.0
"""
kbsig signature envelopes.

A kbsig is base64 text wrapping a MessagePack map::

    {"body": {"sig": <bin>, "payload": <bin>, "key": <bin>, ...},
     "tag": 514, "version": 1}

``sig`` is a detached Ed25519 signature over ``payload``. Both must be
MessagePack *bin* values; a string or an array of integers in their place is
rejected as malformed rather than reinterpreted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import msgpack
from cryptography.hazmat.primitives.asymmetric import ed25519
from pydantic import BaseModel, ConfigDict, StrictBytes, ValidationError

from .crypto import KeyPair, encode_key_id, verify_detached
from .encoding import decode_base64, encode_base64
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

SIG_TAG = 514
SIG_VERSION = 1
HASH_TYPE_SHA512 = 10
SIG_TYPE_NONE = 0


class KbSigBody(BaseModel):
    """The signed part of the envelope."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sig: StrictBytes
    payload: StrictBytes
    key: Optional[StrictBytes] = None
    detached: Optional[bool] = None
    hash_type: Optional[int] = None
    sig_type: Optional[int] = None


class KbSig(BaseModel):
    """A decoded kbsig envelope."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    body: KbSigBody
    tag: Optional[int] = None
    version: Optional[int] = None

    @property
    def signer_kid(self) -> Optional[str]:
        """Key identifier claimed by the envelope, if any. Never trusted."""
        return self.body.key.hex() if self.body.key is not None else None


def unpack_kbsig(data: bytes) -> KbSig:
    """Decode raw MessagePack bytes into a :class:`KbSig`."""
    try:
        obj = msgpack.unpackb(data, raw=False)
    except (ValueError, msgpack.UnpackException) as exc:
        raise MalformedInputError(f"invalid msgpack envelope: {exc}") from exc

    try:
        return KbSig.model_validate(obj)
    except ValidationError as exc:
        raise MalformedInputError(
            "invalid kbsig envelope",
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc


def decode_kbsig(signed_message: str | bytes) -> KbSig:
    """Decode base64 kbsig text into a :class:`KbSig`."""
    return unpack_kbsig(decode_base64(signed_message))


def verify_kbsig(signed_message: str | bytes, key: ed25519.Ed25519PublicKey) -> bytes:
    """Verify a kbsig envelope with ``key`` and return its payload.

    Raises:
        MalformedInputError: the envelope cannot be decoded.
        BadSignatureError: the signature does not match the payload.
    """
    envelope = decode_kbsig(signed_message)
    claimed = envelope.signer_kid
    if claimed is not None and claimed != encode_key_id(key):
        logger.debug("kbsig claims signer %s, verifying with a different key", claimed)
    return verify_detached(envelope.body.sig, envelope.body.payload, key)


def encode_kbsig(payload: bytes, key_pair: KeyPair) -> str:
    """Sign ``payload`` and wrap it in a base64 kbsig envelope."""
    body: Dict[str, Any] = {
        "detached": True,
        "hash_type": HASH_TYPE_SHA512,
        "key": bytes.fromhex(key_pair.kid),
        "payload": payload,
        "sig": key_pair.sign(payload),
        "sig_type": SIG_TYPE_NONE,
    }
    packed = msgpack.packb(
        {"body": body, "tag": SIG_TAG, "version": SIG_VERSION}, use_bin_type=True
    )
    return encode_base64(packed)
