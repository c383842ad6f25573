# SPDX-License-Identifier: MPL-2.0
"""Shared fixtures: signing keys, a signed root announcement and GnuPG output."""

from __future__ import annotations

import json
from pathlib import Path

import pgpy
import pytest
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from rootsig.core.crypto import KeyPair

ROOT_JSON = json.dumps(
    {
        "body": {
            "key": {"fingerprint": "03e146cdaf8136680ad566912a32340cec8c9492", "key_id": "2A32340CEC8C9492"},
            "legacy_uid_root": "d6ca1ae2e2f2a5a2d7d3a8d7c2e8e1a8e8f9a0b1c2d3e4f5a6b7c8d9e0f1a2b3",
            "prev": "a1f3d38f8b2a1f2d2e0a3b6c7d8e9f0a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6e",
            "root": "3c4e2f5b1a7d8c9e0f1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d3e",
            "seqno": 5360668,
            "txid": "b6e2c8f0d9a1e3f5a7c9e1f3a5b7c9e1",
            "type": "merkle_root",
            "version": 1,
        },
        "ctime": 1556822431,
        "tag": "signature",
    },
    sort_keys=True,
    separators=(",", ":"),
)


def _new_pgp_key(name: str) -> pgpy.PGPKey:
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    uid = pgpy.PGPUID.new(name, email=f"{name.lower()}@example.com")
    key.add_uid(
        uid,
        usage={KeyFlags.Sign, KeyFlags.Certify},
        hashes=[HashAlgorithm.SHA256],
        ciphers=[SymmetricKeyAlgorithm.AES256],
        compression=[CompressionAlgorithm.ZLIB, CompressionAlgorithm.Uncompressed],
    )
    return key


@pytest.fixture(scope="session")
def root_pgp_key() -> pgpy.PGPKey:
    """Private key of the root signer."""
    return _new_pgp_key("Root")


@pytest.fixture(scope="session")
def jack_pgp_key() -> pgpy.PGPKey:
    """Private key of somebody who did not sign the root."""
    return _new_pgp_key("Jack")


@pytest.fixture(scope="session")
def root_pgp_message(root_pgp_key: pgpy.PGPKey) -> str:
    """Armored, inline-signed root announcement."""
    message = pgpy.PGPMessage.new(ROOT_JSON.encode("utf-8"))
    message |= root_pgp_key.sign(message)
    return str(message)


@pytest.fixture(scope="session")
def root_nacl_key() -> KeyPair:
    return KeyPair.generate()


@pytest.fixture
def root_json() -> str:
    return ROOT_JSON


@pytest.fixture(scope="session")
def gpg_fixtures() -> Path:
    """Messages and certificates produced by GnuPG 2.2 (``gpg --sign`` and friends)."""
    return Path(__file__).parent / "fixtures" / "pgp"
