"""Tests for the num2bits, dual_mux and Merkle inclusion gadgets."""

import pytest

from withdraw_spec.constraints.base import CollectingConstraintContext, StrictConstraintContext
from withdraw_spec.constraints.bits import bits_to_num, num2bits
from withdraw_spec.constraints.errors import (
    InclusionMismatch,
    MalformedWitness,
    OutOfRangeSecret,
)
from withdraw_spec.constraints.merkle import merkle_tree_checker
from withdraw_spec.constraints.mux import dual_mux
from withdraw_spec.primitives.field import FF
from withdraw_spec.primitives.mimc import hash_pair
from withdraw_spec.witness.base import decompose


# --- num2bits ---

class TestNum2Bits:

    def test_decomposition_accepted(self) -> None:
        ctx = StrictConstraintContext()
        bits = FF(decompose(0b1011, 8))
        num2bits(ctx, FF(0b1011), bits, "n")
        assert int(bits_to_num(bits)) == 0b1011
        # 8 boolean constraints plus one reconstruction
        assert ctx.n_constraints == 9

    @pytest.mark.parametrize("value", [0, 1, 0xDEADBEEF, (1 << 247) + 12345, (1 << 248) - 1])
    def test_roundtrip_248(self, value) -> None:
        ctx = StrictConstraintContext()
        bits = FF(decompose(value, 248))
        num2bits(ctx, FF(value), bits, "n")
        assert int(bits_to_num(bits)) == value

    def test_max_value_accepted(self) -> None:
        ctx = StrictConstraintContext()
        num2bits(ctx, FF(255), FF([1] * 8), "n")

    def test_value_too_wide_is_out_of_range(self) -> None:
        """256 has no 8-bit decomposition; the truncated bits fail reconstruction."""
        ctx = StrictConstraintContext()
        with pytest.raises(OutOfRangeSecret) as exc_info:
            num2bits(ctx, FF(256), FF(decompose(256, 8)), "num2bits.secret")
        assert exc_info.value.label == "num2bits.secret.reconstruct"

    def test_wrong_bits_are_malformed(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(MalformedWitness) as exc_info:
            num2bits(ctx, FF(5), FF(decompose(6, 8)), "n")
        assert exc_info.value.label == "n.reconstruct"

    def test_non_boolean_bit(self) -> None:
        """A '2' digit can reconstruct the value but is still rejected."""
        ctx = StrictConstraintContext()
        bits = FF([2, 0, 0, 0])  # 2 * 2^0 == 2
        with pytest.raises(MalformedWitness) as exc_info:
            num2bits(ctx, FF(2), bits, "n")
        assert exc_info.value.label == "n.boolean[0]"

    def test_valid_decomposition_is_not_classified(self, monkeypatch) -> None:
        """A satisfied reconstruction never inspects the value's high bits."""
        from withdraw_spec.constraints import bits as bits_module

        def fail(*args):
            raise AssertionError("classified a satisfied reconstruction")

        monkeypatch.setattr(bits_module, "_reconstruction_error", fail)
        ctx = StrictConstraintContext()
        num2bits(ctx, FF((1 << 248) - 1), FF([1] * 248), "n")

    def test_width_limits(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(ValueError):
            num2bits(ctx, FF(0), FF([0] * 254), "n")


# --- dual_mux ---

class TestDualMux:

    def test_select_zero_keeps_order(self) -> None:
        ctx = StrictConstraintContext()
        out0, out1 = dual_mux(ctx, FF(10), FF(20), FF(0), "mux")
        assert (int(out0), int(out1)) == (10, 20)

    def test_select_one_swaps(self) -> None:
        ctx = StrictConstraintContext()
        out0, out1 = dual_mux(ctx, FF(10), FF(20), FF(1), "mux")
        assert (int(out0), int(out1)) == (20, 10)

    def test_non_boolean_selector_rejected(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(MalformedWitness) as exc_info:
            dual_mux(ctx, FF(10), FF(20), FF(2), "merkle.level0.mux")
        assert exc_info.value.label == "merkle.level0.mux.boolean"


# --- Merkle inclusion ---

LEAF, SIBLING_A, SIBLING_B = 1001, 2002, 3003


class TestMerkleTreeChecker:
    """Two-level path: leaf is a left child, then its parent is a right child."""

    def _root(self) -> int:
        return hash_pair(SIBLING_B, hash_pair(LEAF, SIBLING_A))

    def _check(self, ctx, root: int, indices=(0, 1)):
        return merkle_tree_checker(
            ctx,
            FF(LEAF),
            FF(root),
            [FF(SIBLING_A), FF(SIBLING_B)],
            [FF(i) for i in indices],
        )

    def test_accepts_valid_path(self) -> None:
        ctx = StrictConstraintContext()
        computed = self._check(ctx, self._root())
        assert int(computed) == self._root()
        # one selector constraint per level plus the root check
        assert ctx.n_constraints == 3

    def test_root_off_by_one_bit(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(InclusionMismatch) as exc_info:
            self._check(ctx, self._root() ^ 1)
        assert exc_info.value.label == "merkle.root"

    def test_wrong_direction(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(InclusionMismatch):
            self._check(ctx, self._root(), indices=(1, 1))

    def test_non_boolean_index(self) -> None:
        """The selector violation is reported before the root mismatch."""
        ctx = CollectingConstraintContext()
        self._check(ctx, self._root(), indices=(0, 2))
        assert isinstance(ctx.violations[0], MalformedWitness)
        assert ctx.violations[0].label == "merkle.level1.mux.boolean"
        assert isinstance(ctx.violations[-1], InclusionMismatch)

    def test_length_mismatch(self) -> None:
        ctx = StrictConstraintContext()
        with pytest.raises(ValueError):
            merkle_tree_checker(ctx, FF(LEAF), FF(0), [FF(1), FF(2)], [FF(0)])


# --- Pedersen gadget ---

def test_pedersen_gadget_matches_hasher() -> None:
    """pedersen() returns the x coordinate of the hash point for the given bits."""
    from withdraw_spec.constraints.hashers import pedersen
    from withdraw_spec.primitives.pedersen import get_pedersen_hasher

    bits = decompose(0x2AB, 10)
    assert int(pedersen(FF(bits))) == get_pedersen_hasher(10).hash_bits(bits)


def test_commitment_hasher_counts_only_decompositions() -> None:
    """The commitment hasher's constraints are the two bit decompositions."""
    from withdraw_spec.constraints.hashers import commitment_hasher

    ctx = StrictConstraintContext()
    commitment_hasher(ctx, FF(5), FF(9), FF(decompose(5, 8)), FF(decompose(9, 8)))
    assert ctx.report() == {"num2bits.nullifier": 9, "num2bits.secret": 9}
