"""Bit decomposition gadget.

Binds a field element to a claimed little-endian bit sequence:

    bits[i] * (1 - bits[i]) = 0           for every i
    sum(bits[i] * 2^i) = value

The reconstruction is a constraint on the claimed bits, not a recomputation,
so a value >= 2^n_bits has no satisfying assignment.
"""

from functools import lru_cache
from typing import Type

import numpy as np

from withdraw_spec.primitives.field import FF, FIELD_BITS

from .base import ConstraintContext
from .errors import ConstraintViolation, MalformedWitness, OutOfRangeSecret


@lru_cache(maxsize=None)
def _weights(n_bits: int) -> FF:
    return FF([1 << i for i in range(n_bits)])


def bits_to_num(bits: FF) -> FF:
    """Little-endian weighted sum of bits, computed in the field."""
    return np.add.reduce(bits * _weights(len(bits)))


def num2bits(ctx: ConstraintContext, value: FF, bits: FF, label: str) -> FF:
    """
    Enforce that bits is the n-bit decomposition of value.

    Args:
        ctx: Constraint context
        value: Field element being decomposed
        bits: Claimed bits (FF array), least significant first
        label: Constraint name prefix

    Returns:
        bits, now constrained boolean and bound to value

    Raises:
        ValueError: If the width cannot represent every sum without wrapping
    """
    n_bits = len(bits)
    if not 1 <= n_bits < FIELD_BITS:
        raise ValueError(f"bit width must be in [1, {FIELD_BITS - 1}], got {n_bits}")

    ctx.enforce_boolean(bits, f"{label}.boolean", MalformedWitness)

    reconstructed = bits_to_num(bits)
    error = MalformedWitness
    if int(reconstructed) != int(value):
        # only a witness that already fails is classified by its value
        error = _reconstruction_error(value, n_bits)
    ctx.enforce_equal(reconstructed, value, f"{label}.reconstruct", error)
    return bits


def _reconstruction_error(value: FF, n_bits: int) -> Type[ConstraintViolation]:
    """OutOfRangeSecret when value needs more than n_bits bits, else MalformedWitness."""
    return OutOfRangeSecret if int(value) >> n_bits else MalformedWitness
