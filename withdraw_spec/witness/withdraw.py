"""Witness generation for the withdrawal relation.

Computes the nullifier/secret bit decompositions and the two derived public
values. derive_commitment() and derive_nullifier_tag() are the plain
(unconstrained) versions of the commitment hasher, used by clients to create
deposits and by the relation to report its outputs.
"""

import logging
from typing import Dict

from withdraw_spec.constraints.errors import OutOfRangeSecret
from withdraw_spec.primitives.field import FF
from withdraw_spec.primitives.pedersen import get_pedersen_hasher

from .base import WitnessModule, decompose

logger = logging.getLogger(__name__)


def _check_width(name: str, value: int, n_bits: int) -> None:
    if value >> n_bits:
        raise OutOfRangeSecret(f"derive.{name}", f"{name} does not fit in {n_bits} bits")


def derive_commitment(nullifier: int, secret: int, n_bits: int) -> int:
    """Commitment = Pedersen_2n(bits(nullifier) || bits(secret)).

    Raises:
        OutOfRangeSecret: If nullifier or secret is >= 2^n_bits
    """
    _check_width("nullifier", nullifier, n_bits)
    _check_width("secret", secret, n_bits)
    bits = decompose(nullifier, n_bits) + decompose(secret, n_bits)
    return get_pedersen_hasher(2 * n_bits).hash_bits(bits)


def derive_nullifier_tag(nullifier: int, n_bits: int) -> int:
    """Nullifier tag = Pedersen_n(bits(nullifier)). Does not depend on the secret.

    Raises:
        OutOfRangeSecret: If nullifier is >= 2^n_bits
    """
    _check_width("nullifier", nullifier, n_bits)
    return get_pedersen_hasher(n_bits).hash_bits(decompose(nullifier, n_bits))


class WithdrawWitness(WitnessModule):
    """Witness generation for the withdrawal relation."""

    def __init__(self, n_bits: int):
        self.n_bits = n_bits

    def compute_intermediates(self, witness) -> Dict[str, FF]:
        """Bit decompositions of nullifier and secret."""
        return {
            "nullifier_bits": FF(decompose(witness.nullifier, self.n_bits)),
            "secret_bits": FF(decompose(witness.secret, self.n_bits)),
        }

    def derive(self, nullifier: int, secret: int) -> tuple[int, int]:
        """(commitment, nullifier_tag) for a note."""
        commitment = derive_commitment(nullifier, secret, self.n_bits)
        nullifier_tag = derive_nullifier_tag(nullifier, self.n_bits)
        logger.debug("derived commitment=%d nullifier_tag=%d", commitment, nullifier_tag)
        return commitment, nullifier_tag
