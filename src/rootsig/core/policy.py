# SPDX-License-Identifier: MPL-2.0
"""
Verification policy for signed messages.

The signature library only says whether a signature checks out
mathematically. Whether the message is *authentic* is decided here, so that
trust rules can change without touching the cryptography.

The current policy trusts exactly one signer: the message must be a single
flat signature layer and its first signature must be good.
"""

from typing import Sequence

from .exceptions import (
    BadSignatureError,
    MissingKeyError,
    NoSignatureError,
    UnexpectedStructureError,
)
from .models import MessageLayer, OutcomeKind, SignatureGroup


class VerificationPolicy:
    """Decides whether a message structure is authentic.

    Subclasses implement :meth:`check` and raise a
    :class:`~rootsig.core.exceptions.PolicyError` to reject.
    """

    def check(self, structure: Sequence[MessageLayer]) -> None:
        raise NotImplementedError


class SingleSignerPolicy(VerificationPolicy):
    """Accept only a level 0 signature group whose first result is good.

    Any further results in the group are not consulted.
    """

    def check(self, structure: Sequence[MessageLayer]) -> None:
        good = False
        for i, layer in enumerate(structure):
            if i == 0 and isinstance(layer, SignatureGroup):
                # Only the first signature over the data counts.
                if not layer.results:
                    raise NoSignatureError()
                result = layer.results[0]
                if result.kind is OutcomeKind.GOOD_CHECKSUM:
                    good = True
                elif result.kind is OutcomeKind.MISSING_KEY:
                    raise MissingKeyError(result.key_id, details={"key_id": result.key_id})
                elif result.kind is OutcomeKind.BAD_CHECKSUM:
                    raise BadSignatureError(details={"key_id": result.key_id})
                else:
                    raise UnexpectedStructureError(
                        f"unknown verification outcome: {result.kind!r}"
                    )
            else:
                raise UnexpectedStructureError(
                    details={"layer_index": i, "layer": type(layer).__name__}
                )

        if not good:
            # Zero layers.
            raise NoSignatureError()


DEFAULT_POLICY = SingleSignerPolicy()


def evaluate(
    structure: Sequence[MessageLayer],
    policy: VerificationPolicy = DEFAULT_POLICY,
) -> None:
    """Apply ``policy`` to ``structure``.

    Returns ``None`` when the message is accepted and raises a
    :class:`~rootsig.core.exceptions.PolicyError` otherwise.
    """
    policy.check(structure)
