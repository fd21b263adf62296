"""Hash gadgets: Pedersen commitment hasher and MiMC pair hasher."""

from typing import Tuple

from withdraw_spec.primitives.field import FF
from withdraw_spec.primitives.mimc import hash_pair
from withdraw_spec.primitives.pedersen import get_pedersen_hasher

from .base import ConstraintContext
from .bits import num2bits


def pedersen(bits: FF) -> FF:
    """Pedersen hash of bits (width = len(bits)); returns the x coordinate.

    Adds no constraints of its own: the output is a function of the bits,
    which the caller must already have constrained boolean.
    """
    return FF(get_pedersen_hasher(len(bits)).hash_bits(bits.tolist()))


def commitment_hasher(
    ctx: ConstraintContext, nullifier: FF, secret: FF, nullifier_bits: FF, secret_bits: FF
) -> Tuple[FF, FF]:
    """
    Derive the commitment and the nullifier tag.

        commitment    = Pedersen_2n(bits(nullifier) || bits(secret))
        nullifier_tag = Pedersen_n(bits(nullifier))

    The tag only sees the nullifier bits, so it is independent of the secret.

    Returns:
        (commitment, nullifier_tag)
    """
    if len(nullifier_bits) != len(secret_bits):
        raise ValueError(
            f"nullifier and secret widths differ: {len(nullifier_bits)} vs {len(secret_bits)}"
        )
    num2bits(ctx, nullifier, nullifier_bits, "num2bits.nullifier")
    num2bits(ctx, secret, secret_bits, "num2bits.secret")

    preimage = FF(nullifier_bits.tolist() + secret_bits.tolist())
    commitment = pedersen(preimage)
    nullifier_tag = pedersen(nullifier_bits)
    return commitment, nullifier_tag


def hash_left_right(left: FF, right: FF) -> FF:
    """MiMC sponge of (left, right) as a field element."""
    return FF(hash_pair(int(left), int(right)))
