"""Baby Jubjub twisted Edwards curve over the BN254 scalar field.

    a*x^2 + y^2 = 1 + d*x^2*y^2,   a = 168700, d = 168696

The curve has order 8*l for the prime l below. Points are handled in extended
coordinates (X, Y, Z, T) with x = X/Z, y = Y/Z, x*y = T/Z so that addition
needs no inversion. The addition law is complete (a is a square, d is not),
so the same formula serves for doubling and for the identity.

Scalar multiplication runs a fixed number of double-and-add-always
iterations and selects results arithmetically, so control flow does not
depend on the scalar bits.
"""

import hashlib
from typing import Optional, Tuple

from .field import BN254_PRIME, ff_sqrt

# --- Curve Parameters ---

A = 168700
D = 168696

SUBGROUP_ORDER = 2736030358979909402780800718157159386076813972158567259200215660948447373041
COFACTOR = 8

SCALAR_BITS = SUBGROUP_ORDER.bit_length()

# --- Type Aliases ---

AffinePoint = Tuple[int, int]
ExtendedPoint = Tuple[int, int, int, int]

IDENTITY: ExtendedPoint = (0, 1, 1, 0)


# --- Coordinates ---

def from_affine(point: AffinePoint) -> ExtendedPoint:
    x, y = point
    return (x, y, 1, (x * y) % BN254_PRIME)


def to_affine(point: ExtendedPoint) -> AffinePoint:
    X, Y, Z, _ = point
    z_inv = pow(Z, BN254_PRIME - 2, BN254_PRIME)
    return ((X * z_inv) % BN254_PRIME, (Y * z_inv) % BN254_PRIME)


def is_on_curve(point: AffinePoint) -> bool:
    x, y = point
    p = BN254_PRIME
    x2 = (x * x) % p
    y2 = (y * y) % p
    return (A * x2 + y2) % p == (1 + D * x2 * y2) % p


def is_identity(point: ExtendedPoint) -> bool:
    X, Y, Z, _ = point
    return X % BN254_PRIME == 0 and (Y - Z) % BN254_PRIME == 0


# --- Group Law ---

def point_add(P: ExtendedPoint, Q: ExtendedPoint) -> ExtendedPoint:
    """Unified addition (Hisil-Wong-Carter-Dawson, a-twisted)."""
    p = BN254_PRIME
    X1, Y1, Z1, T1 = P
    X2, Y2, Z2, T2 = Q
    a = (X1 * X2) % p
    b = (Y1 * Y2) % p
    c = (D * T1 * T2) % p
    d = (Z1 * Z2) % p
    e = ((X1 + Y1) * (X2 + Y2) - a - b) % p
    f = (d - c) % p
    g = (d + c) % p
    h = (b - A * a) % p
    return ((e * f) % p, (g * h) % p, (f * g) % p, (e * h) % p)


def point_select(bit: int, if_one: ExtendedPoint, if_zero: ExtendedPoint) -> ExtendedPoint:
    """Return if_one when bit == 1 and if_zero when bit == 0, without branching."""
    p = BN254_PRIME
    return tuple(  # type: ignore[return-value]
        (z + bit * (o - z)) % p for o, z in zip(if_one, if_zero)
    )


def scalar_mul(point: ExtendedPoint, scalar: int) -> ExtendedPoint:
    """
    Compute scalar * point with a fixed-length ladder.

    Args:
        point: Point in extended coordinates
        scalar: Integer in [0, 2^SCALAR_BITS)

    Returns:
        scalar * point in extended coordinates

    Raises:
        ValueError: If scalar is out of range
    """
    if not 0 <= scalar < (1 << SCALAR_BITS):
        raise ValueError(f"scalar must be in [0, 2^{SCALAR_BITS}), got {scalar}")

    acc = IDENTITY
    for i in range(SCALAR_BITS - 1, -1, -1):
        acc = point_add(acc, acc)
        bit = (scalar >> i) & 1
        acc = point_select(bit, point_add(acc, point), acc)
    return acc


def in_subgroup(point: ExtendedPoint) -> bool:
    return is_identity(scalar_mul(point, SUBGROUP_ORDER))


# --- Hash to Curve ---

def decompress(buf: bytes) -> Optional[AffinePoint]:
    """
    Decode a 32-byte little-endian point encoding.

    Bits 0..254 hold y, bit 255 holds the sign of x. Returns None when the
    encoding does not describe a curve point.
    """
    if len(buf) != 32:
        raise ValueError(f"point encoding must be 32 bytes, got {len(buf)}")
    raw = int.from_bytes(buf, "little")
    sign = raw >> 255
    y = raw & ((1 << 255) - 1)
    if y >= BN254_PRIME:
        return None

    p = BN254_PRIME
    y2 = (y * y) % p
    denominator = (A - D * y2) % p
    if denominator == 0:
        return None
    x2 = ((1 - y2) * pow(denominator, p - 2, p)) % p
    x = ff_sqrt(x2)
    if x is None:
        return None
    if sign:
        x = (p - x) % p
    return (x, y)


def hash_to_subgroup(tag: str) -> AffinePoint:
    """
    Derive a prime-order generator from a domain tag by try-and-increment.

    Candidate i is blake2s-256 of f"{tag}_{i:032d}" with bit 254 cleared,
    decoded as a point and multiplied by the cofactor.

    Returns:
        Generator in affine coordinates
    """
    attempt = 0
    while True:
        digest = bytearray(hashlib.blake2s(f"{tag}_{attempt:032d}".encode()).digest())
        digest[31] &= 0xBF
        candidate = decompress(bytes(digest))
        if candidate is not None:
            point = scalar_mul(from_affine(candidate), COFACTOR)
            if not is_identity(point):
                if not in_subgroup(point):
                    raise ArithmeticError(f"cofactor-cleared point for '{tag}' is outside the subgroup")
                return to_affine(point)
        attempt += 1
