"""
Withdrawal relation executable specification

A Python implementation of the shielded-pool withdrawal relation: a prover
holding (nullifier, secret) shows that commitment(nullifier, secret) is a leaf
of a Merkle tree with a public root, and publishes nullifier_tag(nullifier)
so the same note cannot be withdrawn twice.

This package provides:
- BN254 scalar field arithmetic (via galois)
- MiMC sponge pair hash and Pedersen hash over Baby Jubjub
- Constraint gadgets (bit decomposition, selector, Merkle inclusion)
- The withdrawal relation with evaluate / derive entry points
- Deposit notes, a client-side Merkle tree and witness construction

Usage:
    from withdraw_spec import MerkleTree, Note, WithdrawalRelation, build_witness

    note = Note.random()
    tree = MerkleTree(levels=20, leaves=[note.commitment])
    witness, statement = build_witness(note, tree)
    assert WithdrawalRelation().evaluate(witness, statement)
"""

# Field and hashes
from .primitives import (
    BN254_PRIME,
    FF,
    MerklePath,
    MerkleTree,
    hash_pair,
    get_pedersen_hasher,
    to_field,
)

# Constraint errors
from .constraints import (
    ConstraintViolation,
    InclusionMismatch,
    MalformedWitness,
    NullifierTagMismatch,
    OutOfRangeSecret,
)

# Witness derivation
from .witness import derive_commitment, derive_nullifier_tag

# Relation interface
from .protocol import (
    EvaluationResult,
    Note,
    PublicStatement,
    RelationConfig,
    WithdrawalRelation,
    Witness,
    build_witness,
    evaluate_batch,
)

__version__ = "0.1.0"
__all__ = [
    # Field
    "FF",
    "BN254_PRIME",
    "to_field",
    # Hash
    "hash_pair",
    "get_pedersen_hasher",
    # Merkle
    "MerkleTree",
    "MerklePath",
    # Errors
    "ConstraintViolation",
    "MalformedWitness",
    "OutOfRangeSecret",
    "InclusionMismatch",
    "NullifierTagMismatch",
    # Derivation
    "derive_commitment",
    "derive_nullifier_tag",
    # Relation
    "RelationConfig",
    "Witness",
    "PublicStatement",
    "EvaluationResult",
    "WithdrawalRelation",
    "evaluate_batch",
    "Note",
    "build_witness",
]
