# SPDX-License-Identifier: MPL-2.0
"""
OpenPGP verification.

Parsing and signature math are done by PGPy. This module turns what PGPy
reports into a :data:`~rootsig.core.models.MessageStructure` and hands it to
the verification policy, which alone decides whether the message is
authentic.

Candidate public keys are supplied by a :class:`KeyHelper` passed in by the
caller; :class:`SingleKeyHelper` supplies the one expected signer.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence, Set, Union

import pgpy
from pgpy.errors import PGPError
from pgpy.packet.packets import LiteralData

from .exceptions import MalformedInputError
from .models import (
    EncryptionLayer,
    MessageStructure,
    SignatureGroup,
    VerificationOutcome,
)
from .policy import DEFAULT_POLICY, VerificationPolicy, evaluate

logger = logging.getLogger(__name__)

Blob = Union[str, bytes, bytearray]

_PARSE_ERRORS = (PGPError, ValueError, TypeError, IndexError, KeyError, NotImplementedError)


class KeyHelper(Protocol):
    """Supplies candidate public keys for the signer ids found in a message."""

    def get_public_keys(self, key_ids: Sequence[str]) -> List[pgpy.PGPKey]:
        ...


class SingleKeyHelper:
    """Returns the one expected key whatever ids are asked for."""

    def __init__(self, key: pgpy.PGPKey) -> None:
        self.key = key

    def get_public_keys(self, key_ids: Sequence[str]) -> List[pgpy.PGPKey]:
        return [self.key]


def load_pgp_key(key: Blob) -> pgpy.PGPKey:
    """Load a certificate from armored or binary bytes.

    Private keys are reduced to their public half.

    Raises:
        MalformedInputError: ``key`` is not a parseable OpenPGP key.
    """
    try:
        loaded, _ = pgpy.PGPKey.from_blob(key)
    except _PARSE_ERRORS as exc:
        raise MalformedInputError(f"invalid PGP key: {exc}") from exc
    if not loaded.is_public:
        loaded = loaded.pubkey
    return loaded


def key_ids(key: pgpy.PGPKey) -> Set[str]:
    """Ids of the primary key and every subkey of ``key``."""
    return {key.fingerprint.keyid} | set(key.subkeys)


def _find_key(candidates: Iterable[pgpy.PGPKey], signer: str) -> Optional[pgpy.PGPKey]:
    for candidate in candidates:
        if signer in key_ids(candidate):
            return candidate
    return None


def _check(key: pgpy.PGPKey, subject: Blob, signature: pgpy.PGPSignature) -> VerificationOutcome:
    signer = signature.signer
    try:
        good = bool(key.verify(subject, signature))
    except _PARSE_ERRORS as exc:
        logger.debug("signature by %s could not be checked: %s", signer, exc)
        good = False
    return VerificationOutcome.good(signer) if good else VerificationOutcome.bad(signer)


def build_structure(
    signatures: Sequence[pgpy.PGPSignature],
    subject: Blob,
    helper: KeyHelper,
) -> MessageStructure:
    """Check each signature over ``subject`` and return the message structure.

    All signatures sit in a single level 0 group, in message order. A
    signature whose signer is not among the supplied keys gets a
    ``MissingKey`` result instead of being checked.
    """
    if not signatures:
        return []

    candidates = helper.get_public_keys([sig.signer for sig in signatures])
    results = []
    for sig in signatures:
        key = _find_key(candidates, sig.signer)
        if key is None:
            results.append(VerificationOutcome.missing_key(sig.signer))
        else:
            results.append(_check(key, subject, sig))
    return [SignatureGroup(tuple(results))]


def _literal_data(message: pgpy.PGPMessage) -> bytes:
    """The literal data of ``message`` exactly as the signer hashed it."""
    if message.type == "cleartext":
        return message.message.encode("utf-8")
    literal = next((pkt for pkt in message if isinstance(pkt, LiteralData)), None)
    if literal is None:
        return b""
    # PGPy hands text-mode data back decoded; undo it with the same codec.
    if literal.format == "t":
        return literal.contents.encode("latin-1")
    if literal.format == "u":
        return literal.contents.encode("utf-8")
    return bytes(literal.contents)


def verify_pgp(
    signed_message: Blob,
    sender: pgpy.PGPKey,
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> bytes:
    """Verify a signed OpenPGP message and return its literal data.

    Accepts inline-signed and cleartext-signed messages, armored or binary.

    Raises:
        MalformedInputError: the message cannot be parsed.
        PolicyError: the policy rejected the message.
    """
    try:
        message = pgpy.PGPMessage.from_blob(signed_message)
    except _PARSE_ERRORS as exc:
        raise MalformedInputError(f"invalid PGP message: {exc}") from exc

    if message.is_encrypted:
        structure: MessageStructure = [EncryptionLayer()]
        content = b""
    else:
        content = _literal_data(message)
        signatures = list(message.signatures)
        logger.debug("PGP message signed by %s", [sig.signer for sig in signatures])
        structure = build_structure(signatures, content, SingleKeyHelper(sender))

    evaluate(structure, policy)
    return content


def verify_pgp_detached(
    signature: Blob,
    payload: bytes,
    sender: pgpy.PGPKey,
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> bytes:
    """Verify a detached OpenPGP signature over ``payload``.

    Returns:
        ``payload`` unchanged when the policy accepts the signature.
    """
    try:
        sig = pgpy.PGPSignature.from_blob(signature)
    except _PARSE_ERRORS as exc:
        raise MalformedInputError(f"invalid PGP signature: {exc}") from exc

    structure = build_structure([sig], payload, SingleKeyHelper(sender))
    evaluate(structure, policy)
    return payload
