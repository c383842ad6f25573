# SPDX-License-Identifier: MPL-2.0
"""Core functionality for rootsig."""
from rootsig.core.crypto import KeyPair, decode_key_id, encode_key_id, load_nacl_key, verify_detached
from rootsig.core.kbsig import decode_kbsig, encode_kbsig, verify_kbsig
from rootsig.core.pgp import load_pgp_key, verify_pgp, verify_pgp_detached
from rootsig.core.policy import SingleSignerPolicy, VerificationPolicy, evaluate
from rootsig.core.verification import (
    KEYBASE_ROOT_KID,
    Scheme,
    VerificationResult,
    check,
    verify,
    verify_file,
)

__all__ = [
    "KEYBASE_ROOT_KID",
    "KeyPair",
    "Scheme",
    "SingleSignerPolicy",
    "VerificationPolicy",
    "VerificationResult",
    "check",
    "decode_kbsig",
    "decode_key_id",
    "encode_kbsig",
    "encode_key_id",
    "evaluate",
    "load_nacl_key",
    "load_pgp_key",
    "verify",
    "verify_detached",
    "verify_file",
    "verify_kbsig",
    "verify_pgp",
    "verify_pgp_detached",
]
