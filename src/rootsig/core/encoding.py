# SPDX-License-Identifier: MPL-2.0
"""Hex and base64 decoding that raises classified errors."""

from __future__ import annotations

import base64
import binascii

from .exceptions import MalformedHexError, MalformedInputError


def decode_hex(data: str) -> bytes:
    """Decode a hex string, raising :class:`MalformedHexError` on bad input.

    Surrounding whitespace is dropped; whitespace between digits is an error.
    """
    try:
        return binascii.unhexlify(data.strip())
    except (ValueError, TypeError, AttributeError) as exc:
        raise MalformedHexError(f"invalid hex: {exc}") from exc


def decode_base64(data: str | bytes) -> bytes:
    """Decode standard base64, ignoring surrounding and embedded whitespace."""
    if isinstance(data, str):
        data = data.encode("ascii", errors="replace")
    compact = b"".join(data.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedInputError(f"invalid base64: {exc}") from exc


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
