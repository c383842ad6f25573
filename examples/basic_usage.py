# SPDX-License-Identifier: MPL-2.0
"""Basic usage example for rootsig."""
import json

from rootsig import Scheme, check, verify_kbsig
from rootsig.core import KeyPair, decode_key_id, encode_kbsig


def main() -> None:
    # Example root announcement
    root = json.dumps({"seqno": 5360668, "type": "merkle_root"}).encode("utf-8")

    key_pair = KeyPair.generate()
    print(f"Signer kid: {key_pair.kid}")

    # Sign it into a kbsig envelope
    envelope = encode_kbsig(root, key_pair)

    # Verify with the key identifier
    payload = verify_kbsig(envelope, decode_key_id(key_pair.kid))
    print(f"Verified payload: {payload.decode('utf-8')}")

    # A different signer is rejected
    result = check(Scheme.KBSIG, envelope, KeyPair.generate().kid)
    print(f"Other key valid: {result.is_valid} ({result.error})")


if __name__ == "__main__":
    main()
