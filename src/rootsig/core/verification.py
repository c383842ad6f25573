# SPDX-License-Identifier: MPL-2.0
"""
Verification entry points for rootsig.

This module routes a signed message to the verifier for its scheme, loads
key material in the form each scheme expects, and reports the outcome either
as plaintext bytes (:func:`verify`) or as a :class:`VerificationResult`
(:func:`check`, :func:`verify_file`).

Format failures and authenticity failures are logged differently: the first
usually means a producer bug, the second possible tampering.
"""

import base64
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pgpy
from cryptography.hazmat.primitives.asymmetric import ed25519

from .crypto import PUBLIC_KEY_SIZE, decode_key_id, public_key_from_bytes, verify_detached
from .exceptions import MalformedInputError, RootSigError, VerificationError
from .kbsig import verify_kbsig
from .pgp import load_pgp_key, verify_pgp, verify_pgp_detached
from .policy import DEFAULT_POLICY, VerificationPolicy

logger = logging.getLogger(__name__)

# NaCl key identifier of the key that signs published merkle roots.
KEYBASE_ROOT_KID = "01209ec31411b9b287f62630c2486005af27548ba62a59bbc802e656b888991a20230a"

KeyMaterial = Union[str, bytes, pgpy.PGPKey, ed25519.Ed25519PublicKey]


class Scheme(str, Enum):
    """Supported signature schemes."""

    PGP = "pgp"
    PGP_DETACHED = "pgp-detached"
    KBSIG = "kbsig"
    NACL = "nacl"

    @property
    def uses_pgp_key(self) -> bool:
        return self in (Scheme.PGP, Scheme.PGP_DETACHED)

    @property
    def needs_signature(self) -> bool:
        return self in (Scheme.PGP_DETACHED, Scheme.NACL)


@dataclass
class VerificationResult:
    """Result of a verification attempt."""

    is_valid: bool
    scheme: str
    plaintext: Optional[bytes] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary."""
        text = None
        encoded = None
        if self.plaintext is not None:
            encoded = base64.b64encode(self.plaintext).decode("ascii")
            try:
                text = self.plaintext.decode("utf-8")
            except UnicodeDecodeError:
                text = None
        return {
            "is_valid": self.is_valid,
            "scheme": self.scheme,
            "plaintext": text,
            "plaintext_b64": encoded,
            "error": self.error,
            "error_kind": self.error_kind,
            "details": self.details,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert the result to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def load_key(scheme: Union[Scheme, str], material: KeyMaterial) -> Any:
    """Turn ``material`` into the key object ``scheme`` verifies with.

    PGP schemes take a certificate (armored or binary). NaCl schemes take a
    hex key identifier or the raw 32 key bytes.
    """
    scheme = Scheme(scheme)
    if scheme.uses_pgp_key:
        if isinstance(material, pgpy.PGPKey):
            return material
        if isinstance(material, ed25519.Ed25519PublicKey):
            raise MalformedInputError(f"{scheme.value} needs a PGP key, got an Ed25519 key")
        return load_pgp_key(material)

    if isinstance(material, ed25519.Ed25519PublicKey):
        return material
    if isinstance(material, pgpy.PGPKey):
        raise MalformedInputError(f"{scheme.value} needs an Ed25519 key, got a PGP key")
    if isinstance(material, bytes):
        if len(material) == PUBLIC_KEY_SIZE:
            return public_key_from_bytes(material)
        material = material.decode("ascii", errors="replace")
    return decode_key_id(material)


def verify(
    scheme: Union[Scheme, str],
    message: Union[str, bytes],
    key: KeyMaterial,
    signature: Optional[bytes] = None,
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> bytes:
    """Verify ``message`` under ``scheme`` and return the verified bytes.

    Args:
        scheme: One of :class:`Scheme`.
        message: The signed message, the kbsig text, or the payload for the
            detached schemes.
        key: Key object or key material, see :func:`load_key`.
        signature: Detached signature, required for ``pgp-detached`` and
            ``nacl``.
        policy: Policy applied to PGP signature results.

    Raises:
        MalformedInputError: inputs could not be decoded.
        VerificationError: the message is not authentic.
    """
    scheme = Scheme(scheme)
    try:
        loaded = load_key(scheme, key)
        if scheme.needs_signature and signature is None:
            raise MalformedInputError(f"{scheme.value} needs a detached signature")

        if scheme is Scheme.PGP:
            plaintext = verify_pgp(message, loaded, policy)
        elif scheme is Scheme.PGP_DETACHED:
            plaintext = verify_pgp_detached(signature, _as_bytes(message), loaded, policy)
        elif scheme is Scheme.KBSIG:
            plaintext = verify_kbsig(message, loaded)
        else:
            plaintext = verify_detached(signature, _as_bytes(message), loaded)
    except MalformedInputError as exc:
        logger.warning("%s input malformed: %s", scheme.value, exc.message)
        raise
    except VerificationError as exc:
        logger.error("%s signature rejected: %s", scheme.value, exc.message)
        raise

    logger.info("%s signature accepted (%d bytes)", scheme.value, len(plaintext))
    return plaintext


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def error_kind(exc: RootSigError) -> str:
    """``"malformed"`` for format errors, ``"rejected"`` for everything else."""
    return "malformed" if isinstance(exc, MalformedInputError) else "rejected"


def check(
    scheme: Union[Scheme, str],
    message: Union[str, bytes],
    key: KeyMaterial,
    signature: Optional[bytes] = None,
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> VerificationResult:
    """Like :func:`verify` but returns a :class:`VerificationResult`."""
    scheme = Scheme(scheme)
    try:
        plaintext = verify(scheme, message, key, signature, policy)
    except RootSigError as exc:
        details = dict(exc.details)
        details["error_type"] = type(exc).__name__
        return VerificationResult(
            is_valid=False,
            scheme=scheme.value,
            error=exc.message,
            error_kind=error_kind(exc),
            details=details,
        )
    return VerificationResult(is_valid=True, scheme=scheme.value, plaintext=plaintext)


def verify_file(
    scheme: Union[Scheme, str],
    message_path: Union[str, Path],
    key: Union[str, Path, KeyMaterial],
    signature_path: Optional[Union[str, Path]] = None,
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> VerificationResult:
    """Convenience function to verify a message stored on disk.

    Args:
        scheme: One of :class:`Scheme`.
        message_path: File holding the signed message or payload.
        key: For PGP schemes a path to the certificate; for NaCl schemes a
            hex key identifier, or a :class:`~pathlib.Path` to a file holding
            one. Key objects are used as is.
        signature_path: File holding the raw detached signature.
        policy: Policy applied to PGP signature results.
    """
    scheme = Scheme(scheme)
    try:
        message = Path(message_path).read_bytes()
        if scheme.uses_pgp_key and isinstance(key, (str, Path)):
            key = Path(key).read_bytes()
        elif isinstance(key, Path):
            key = key.read_text(encoding="ascii").strip()
        signature = Path(signature_path).read_bytes() if signature_path else None
    except OSError as exc:
        logger.warning("could not read %s input: %s", scheme.value, exc)
        return VerificationResult(
            is_valid=False,
            scheme=scheme.value,
            error=f"Error reading input: {exc}",
            error_kind="malformed",
            details={"file_path": str(message_path), "error_type": type(exc).__name__},
        )

    return check(scheme, message, key, signature, policy)
