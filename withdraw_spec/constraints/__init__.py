"""Constraint evaluation modules.

Gadgets enforce their constraints through a ConstraintContext; the
WithdrawConstraints module assembles them into the withdrawal relation.
"""

from .base import (
    CollectingConstraintContext,
    ConstraintContext,
    ConstraintModule,
    StrictConstraintContext,
)
from .bits import bits_to_num, num2bits
from .errors import (
    ConstraintViolation,
    InclusionMismatch,
    MalformedWitness,
    NullifierTagMismatch,
    OutOfRangeSecret,
)
from .hashers import commitment_hasher, hash_left_right, pedersen
from .merkle import merkle_tree_checker
from .mux import dual_mux
from .withdraw import WithdrawConstraints, WithdrawOutputs

__all__ = [
    "ConstraintContext",
    "StrictConstraintContext",
    "CollectingConstraintContext",
    "ConstraintModule",
    # Errors
    "ConstraintViolation",
    "MalformedWitness",
    "OutOfRangeSecret",
    "InclusionMismatch",
    "NullifierTagMismatch",
    # Gadgets
    "num2bits",
    "bits_to_num",
    "pedersen",
    "commitment_hasher",
    "hash_left_right",
    "dual_mux",
    "merkle_tree_checker",
    # Relation
    "WithdrawConstraints",
    "WithdrawOutputs",
]
