"""Withdrawal relation constraints.

Public inputs:  root, nullifier_tag
Private inputs: nullifier, secret, path_elements[levels], path_indices[levels]
Intermediates:  nullifier_bits, secret_bits (from the witness module)

The relation holds iff:
1. nullifier_bits / secret_bits are boolean and reconstruct nullifier / secret
2. Pedersen_n(nullifier_bits) == nullifier_tag
3. commitment = Pedersen_2n(nullifier_bits || secret_bits) is a leaf under root
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from withdraw_spec.primitives.field import FF

from .base import ConstraintContext, ConstraintModule
from .errors import NullifierTagMismatch
from .hashers import commitment_hasher
from .merkle import merkle_tree_checker

if TYPE_CHECKING:
    from withdraw_spec.protocol.config import RelationConfig
    from withdraw_spec.protocol.data import PublicStatement, Witness


@dataclass(frozen=True)
class WithdrawOutputs:
    """Values computed while enforcing the relation."""
    commitment: int
    nullifier_tag: int
    computed_root: int


class WithdrawConstraints(ConstraintModule):
    """Constraint evaluation for the withdrawal relation."""

    def __init__(self, config: "RelationConfig"):
        self.config = config

    def enforce(
        self,
        ctx: ConstraintContext,
        statement: "PublicStatement",
        witness: "Witness",
        intermediates: Dict[str, FF],
    ) -> WithdrawOutputs:
        """Enforce all constraints for one (statement, witness) pair.

        Raises:
            ValueError: If the witness shape does not match the relation
        """
        levels = self.config.levels
        if len(witness.path_elements) != levels or len(witness.path_indices) != levels:
            raise ValueError(
                f"relation has {levels} levels, witness path has "
                f"{len(witness.path_elements)} elements and {len(witness.path_indices)} indices"
            )
        nullifier_bits = intermediates["nullifier_bits"]
        secret_bits = intermediates["secret_bits"]
        for name, bits in (("nullifier_bits", nullifier_bits), ("secret_bits", secret_bits)):
            if len(bits) != self.config.n_bits:
                raise ValueError(f"{name} must have {self.config.n_bits} entries, got {len(bits)}")

        commitment, nullifier_tag = commitment_hasher(
            ctx, FF(witness.nullifier), FF(witness.secret), nullifier_bits, secret_bits
        )
        ctx.enforce_equal(
            nullifier_tag, FF(statement.nullifier_tag), "withdraw.nullifier_tag", NullifierTagMismatch
        )

        computed_root = merkle_tree_checker(
            ctx,
            commitment,
            FF(statement.root),
            [FF(e) for e in witness.path_elements],
            [FF(i) for i in witness.path_indices],
        )
        return WithdrawOutputs(
            commitment=int(commitment),
            nullifier_tag=int(nullifier_tag),
            computed_root=int(computed_root),
        )
