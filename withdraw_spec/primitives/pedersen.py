"""Pedersen hash over Baby Jubjub.

Maps a fixed-length bit sequence to a field element. Bits are consumed in
segments of 200 (50 windows of 4 bits). For a window (b0, b1, b2, b3):

    window = (1 + b0 + 2*b1 + 4*b2) * (1 - 2*b3)

and a segment scalar is sum(window_j * 32^j) reduced mod the subgroup order.
The hash point is sum(scalar_s * G_s) and the output is its x coordinate.

Each hasher width gets its own generator set, derived from a tag that
includes the width, so the 248-bit and 496-bit instances share no bases.
"""

from functools import lru_cache
from typing import List, Sequence

from .babyjub import (
    IDENTITY,
    SUBGROUP_ORDER,
    AffinePoint,
    from_affine,
    hash_to_subgroup,
    point_add,
    scalar_mul,
    to_affine,
)

# --- Window Layout ---

WINDOW_SIZE = 4
WINDOWS_PER_SEGMENT = 50
BITS_PER_SEGMENT = WINDOW_SIZE * WINDOWS_PER_SEGMENT

GENERATOR_PREFIX = "PedersenGenerator"


class PedersenHasher:
    """Pedersen hash for inputs of exactly n_bits bits.

    Usage:
        hasher = get_pedersen_hasher(248)
        tag = hasher.hash_bits(bits)
    """

    def __init__(self, n_bits: int) -> None:
        if n_bits < 1:
            raise ValueError(f"n_bits must be >= 1, got {n_bits}")
        self.n_bits = n_bits
        self.n_segments = (n_bits - 1) // BITS_PER_SEGMENT + 1
        self.generators: List[AffinePoint] = [
            hash_to_subgroup(self._generator_tag(s)) for s in range(self.n_segments)
        ]

    def _generator_tag(self, segment: int) -> str:
        return f"{GENERATOR_PREFIX}_{self.n_bits:04d}_{segment:032d}"

    def segment_scalars(self, bits: Sequence[int]) -> List[int]:
        """Compute the per-segment scalars for a bit sequence."""
        if len(bits) != self.n_bits:
            raise ValueError(f"expected {self.n_bits} bits, got {len(bits)}")

        scalars = []
        for s in range(self.n_segments):
            segment = bits[s * BITS_PER_SEGMENT:(s + 1) * BITS_PER_SEGMENT]
            scalar = 0
            weight = 1
            for w in range(0, len(segment), WINDOW_SIZE):
                window = segment[w:w + WINDOW_SIZE]
                magnitude = 1 + sum(b << j for j, b in enumerate(window[:WINDOW_SIZE - 1]))
                # a short final window has no sign bit
                sign = 1 - 2 * window[WINDOW_SIZE - 1] if len(window) == WINDOW_SIZE else 1
                scalar += magnitude * sign * weight
                weight <<= WINDOW_SIZE + 1
            scalars.append(scalar % SUBGROUP_ORDER)
        return scalars

    def hash_point(self, bits: Sequence[int]) -> AffinePoint:
        """Hash bits to a curve point."""
        acc = IDENTITY
        for generator, scalar in zip(self.generators, self.segment_scalars(bits)):
            acc = point_add(acc, scalar_mul(from_affine(generator), scalar))
        return to_affine(acc)

    def hash_bits(self, bits: Sequence[int]) -> int:
        """Hash bits to a field element (x coordinate of the hash point)."""
        return self.hash_point(bits)[0]


@lru_cache(maxsize=None)
def get_pedersen_hasher(n_bits: int) -> PedersenHasher:
    """Shared hasher per width; generator derivation runs once per process."""
    return PedersenHasher(n_bits)
