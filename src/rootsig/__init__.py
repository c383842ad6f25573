# SPDX-License-Identifier: MPL-2.0
"""
rootsig - Verify signed merkle root announcements.

This package checks OpenPGP, raw NaCl (Ed25519) and kbsig signatures against a
single expected signer and returns the verified plaintext.
"""

import contextlib
from importlib.metadata import version

# Set up version
__version__ = "0.1.0"

with contextlib.suppress(Exception):
    __version__ = version("rootsig")


# Core components
from rootsig.core import (
    KEYBASE_ROOT_KID,
    Scheme,
    VerificationResult,
    check,
    decode_key_id,
    load_pgp_key,
    verify,
    verify_detached,
    verify_file,
    verify_kbsig,
    verify_pgp,
)

# Public API
__all__ = [
    "KEYBASE_ROOT_KID",
    "Scheme",
    "VerificationResult",
    "check",
    "decode_key_id",
    "load_pgp_key",
    "verify",
    "verify_detached",
    "verify_file",
    "verify_kbsig",
    "verify_pgp",
    "__version__",
]
