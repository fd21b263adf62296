"""BN254 scalar field GF(p).

Uses galois for the field type FF. Every signal of the withdrawal relation is
an element of this field; the modulus must match the scalar field of the
proving backend that consumes the relation.

Hash permutations and curve formulas work on plain ints reduced mod
BN254_PRIME for speed. Values entering the relation from outside go through
to_field(), which rejects anything outside [0, p) instead of reducing it.
"""

from typing import Iterable, List, Union

import galois
import numpy as np
from Crypto.Hash import keccak

# --- Field Construction ---

BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

FIELD_BITS = BN254_PRIME.bit_length()

# 5 generates the multiplicative group; passing it skips factoring p - 1.
FF = galois.GF(BN254_PRIME, primitive_element=5, verify=False)
"""Prime field GF(p) - BN254 scalar field."""


# --- Conversion ---

def to_field(value: Union[int, str]) -> int:
    """Validate a field element given as int or decimal/hex string.

    Raises:
        TypeError: If value is not an int or str (bools are rejected too)
        ValueError: If value lies outside [0, p)
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"field element must be int or str, got {type(value).__name__}")
    if isinstance(value, str):
        text = value.strip()
        value = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    if not 0 <= value < BN254_PRIME:
        raise ValueError(f"value {value} is not a field element (must be in [0, p))")
    return value


def to_field_list(values: Iterable[Union[int, str]]) -> List[int]:
    """Validate a sequence of field elements."""
    return [to_field(v) for v in values]


def ff_sqrt(value: int) -> Union[int, None]:
    """Return the smaller square root of value, or None for a non-residue."""
    # galois square roots need a 1-d array; 0-d arrays fail inside np.sqrt
    x = FF([value % BN254_PRIME])
    if not x.is_square()[0]:
        return None
    root = int(np.sqrt(x)[0])
    return min(root, BN254_PRIME - root)


def keccak_to_field(data: bytes) -> int:
    """keccak256(data) interpreted big-endian and reduced mod p."""
    return int.from_bytes(keccak256(data), "big") % BN254_PRIME


def keccak256(data: bytes) -> bytes:
    """Ethereum keccak256 (original Keccak padding, not SHA3-256)."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()

