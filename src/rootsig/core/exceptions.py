# SPDX-License-Identifier: MPL-2.0
"""Custom exceptions for rootsig.

Errors fall into two families that callers are expected to tell apart:

* :class:`MalformedInputError` - the message or key was never properly
  prepared (bad hex, bad base64, bad MessagePack framing, a key identifier
  with the wrong tag, suffix or length).
* :class:`VerificationError` - the input was well formed but failed an
  authenticity check (missing signer key, bad signature, unexpected
  message structure).

Every error is terminal; retrying a verification cannot change its result.
"""

from typing import Any, Dict, Optional


class RootSigError(Exception):
    """Base exception for all rootsig errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedInputError(RootSigError):
    """Raised when hex, base64, MessagePack or PGP framing cannot be decoded."""

    pass


class MalformedHexError(MalformedInputError):
    """Raised when a hex string cannot be decoded."""

    pass


class KeyFormatError(MalformedInputError):
    """Base exception for key identifier format violations."""

    pass


class WrongKeyTypeError(KeyFormatError):
    """Raised when a key identifier does not start with the Ed25519 type tag."""

    pass


class WrongKeySuffixError(KeyFormatError):
    """Raised when a key identifier does not end with the terminator byte."""

    pass


class BadKeyLengthError(KeyFormatError):
    """Raised when the key bytes are not the size the key type requires."""

    pass


class VerificationError(RootSigError):
    """Base exception for authenticity failures."""

    pass


class PolicyError(VerificationError):
    """Raised when the verification policy rejects a message."""

    pass


class BadSignatureError(PolicyError):
    """Raised when a signature fails its cryptographic check."""

    def __init__(
        self,
        message: str = "signature verification failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)


class MissingKeyError(PolicyError):
    """Raised when no supplied public key matches the claimed signer."""

    def __init__(
        self,
        key_id: Optional[str] = None,
        message: str = "missing PGP key for signature",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the missing key exception.

        Args:
            key_id: Key id the signature claims to be made by
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message, details)
        self.key_id = key_id


class NoSignatureError(PolicyError):
    """Raised when a message carries no signature result to check."""

    def __init__(
        self,
        message: str = "no signature",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)


class UnexpectedStructureError(PolicyError):
    """Raised when the message is not a single flat signature layer."""

    def __init__(
        self,
        message: str = "unexpected message structure",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)


class ConfigurationError(RootSigError):
    """Raised when configuration is invalid or missing."""

    pass
