# SPDX-License-Identifier: MPL-2.0
"""Data models for rootsig.

The PGP adapter reports what the signature library found as a
:data:`MessageStructure`: an ordered list of layers, each one a tagged
variant. The policy evaluator only understands a single
:class:`SignatureGroup` and rejects everything else.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union


class OutcomeKind(str, Enum):
    """Kind of a single signature check."""

    GOOD_CHECKSUM = "good_checksum"
    BAD_CHECKSUM = "bad_checksum"
    MISSING_KEY = "missing_key"


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of mathematically checking one signature against a key."""

    kind: OutcomeKind
    key_id: Optional[str] = None

    @classmethod
    def good(cls, key_id: Optional[str] = None) -> "VerificationOutcome":
        return cls(OutcomeKind.GOOD_CHECKSUM, key_id)

    @classmethod
    def bad(cls, key_id: Optional[str] = None) -> "VerificationOutcome":
        return cls(OutcomeKind.BAD_CHECKSUM, key_id)

    @classmethod
    def missing_key(cls, key_id: Optional[str] = None) -> "VerificationOutcome":
        return cls(OutcomeKind.MISSING_KEY, key_id)


@dataclass(frozen=True)
class SignatureGroup:
    """Signatures made over the same data."""

    results: Sequence[VerificationOutcome] = field(default_factory=tuple)


@dataclass(frozen=True)
class EncryptionLayer:
    """The data was encrypted."""


@dataclass(frozen=True)
class CompressionLayer:
    """The data was compressed."""

    algorithm: str = "unknown"


MessageLayer = Union[SignatureGroup, EncryptionLayer, CompressionLayer]
MessageStructure = List[MessageLayer]

__all__ = [
    "OutcomeKind",
    "VerificationOutcome",
    "SignatureGroup",
    "EncryptionLayer",
    "CompressionLayer",
    "MessageLayer",
    "MessageStructure",
]
