"""Tests for Baby Jubjub curve arithmetic."""

import pytest

from withdraw_spec.primitives.babyjub import (
    COFACTOR,
    IDENTITY,
    SCALAR_BITS,
    SUBGROUP_ORDER,
    decompress,
    from_affine,
    in_subgroup,
    is_identity,
    is_on_curve,
    point_add,
    point_select,
    scalar_mul,
    to_affine,
)
from withdraw_spec.primitives.field import BN254_PRIME

# Prime-order base point (8 * generator of the full group)
BASE8 = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)

BASE8_DOUBLED = (
    10031262171927540148667355526369034398030886437092045105752248699557385197826,
    633281375905621697187330766174974863687049529291089048651929454608812697683,
)


class TestCurveParameters:

    def test_subgroup_order(self) -> None:
        assert SCALAR_BITS == 251
        assert COFACTOR == 8

    def test_base_point_on_curve(self) -> None:
        assert is_on_curve(BASE8)
        assert is_on_curve((0, 1))
        assert not is_on_curve((1, 1))


class TestGroupLaw:

    def test_identity_is_neutral(self) -> None:
        P = from_affine(BASE8)
        assert to_affine(point_add(P, IDENTITY)) == BASE8
        assert to_affine(point_add(IDENTITY, P)) == BASE8

    def test_doubling(self) -> None:
        P = from_affine(BASE8)
        assert to_affine(point_add(P, P)) == BASE8_DOUBLED
        assert to_affine(scalar_mul(P, 2)) == BASE8_DOUBLED

    def test_negation(self) -> None:
        """(x, y) + (-x, y) is the identity."""
        x, y = BASE8
        total = point_add(from_affine(BASE8), from_affine(((BN254_PRIME - x) % BN254_PRIME, y)))
        assert is_identity(total)

    def test_scalar_mul_small_scalars(self) -> None:
        P = from_affine(BASE8)
        assert is_identity(scalar_mul(P, 0))
        assert to_affine(scalar_mul(P, 1)) == BASE8
        three = point_add(point_add(P, P), P)
        assert to_affine(scalar_mul(P, 3)) == to_affine(three)

    def test_scalar_mul_rejects_out_of_range(self) -> None:
        P = from_affine(BASE8)
        with pytest.raises(ValueError):
            scalar_mul(P, -1)
        with pytest.raises(ValueError):
            scalar_mul(P, 1 << SCALAR_BITS)

    def test_subgroup_membership(self) -> None:
        P = from_affine(BASE8)
        assert in_subgroup(P)
        assert is_identity(scalar_mul(P, SUBGROUP_ORDER))
        assert to_affine(scalar_mul(P, SUBGROUP_ORDER - 1)) == ((BN254_PRIME - BASE8[0]) % BN254_PRIME, BASE8[1])

    def test_point_select(self) -> None:
        P = from_affine(BASE8)
        assert point_select(1, P, IDENTITY) == P
        assert point_select(0, P, IDENTITY) == IDENTITY


class TestDecompress:

    def _encode(self, point, negative: bool = False) -> bytes:
        raw = point[1] | (int(negative) << 255)
        return raw.to_bytes(32, "little")

    def test_roundtrip_base_point(self) -> None:
        x, y = BASE8
        decoded = decompress(self._encode(BASE8))
        assert decoded is not None
        # The decoder picks the smaller root unless the sign bit is set
        assert decoded[1] == y
        assert decoded[0] in (x, BN254_PRIME - x)
        assert decoded[0] <= BN254_PRIME - decoded[0]

    def test_sign_bit_negates_x(self) -> None:
        plain = decompress(self._encode(BASE8))
        negated = decompress(self._encode(BASE8, negative=True))
        assert negated == ((BN254_PRIME - plain[0]) % BN254_PRIME, plain[1])

    def test_rejects_y_out_of_field(self) -> None:
        assert decompress(BN254_PRIME.to_bytes(32, "little")) is None

    def test_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError):
            decompress(b"\x00" * 31)
