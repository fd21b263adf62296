"""Primitives - field, curve and hash building blocks of the withdrawal relation."""

from withdraw_spec.primitives.babyjub import (
    SUBGROUP_ORDER,
    hash_to_subgroup,
    is_on_curve,
    scalar_mul,
)
from withdraw_spec.primitives.field import (
    BN254_PRIME,
    FF,
    FIELD_BITS,
    keccak256,
    keccak_to_field,
    to_field,
    to_field_list,
)
from withdraw_spec.primitives.merkle_tree import (
    ZERO_VALUE,
    MerklePath,
    MerkleTree,
    zero_hashes,
)
from withdraw_spec.primitives.mimc import (
    MIMC_CONSTANTS,
    MIMC_KEY,
    MIMC_ROUNDS,
    hash_pair,
    mimc_feistel,
    mimc_sponge,
)
from withdraw_spec.primitives.pedersen import PedersenHasher, get_pedersen_hasher

__all__ = [
    # Field
    "FF",
    "BN254_PRIME",
    "FIELD_BITS",
    "to_field",
    "to_field_list",
    "keccak256",
    "keccak_to_field",
    # Curve
    "SUBGROUP_ORDER",
    "hash_to_subgroup",
    "is_on_curve",
    "scalar_mul",
    # Hashes
    "MIMC_CONSTANTS",
    "MIMC_ROUNDS",
    "MIMC_KEY",
    "mimc_feistel",
    "mimc_sponge",
    "hash_pair",
    "PedersenHasher",
    "get_pedersen_hasher",
    # Merkle Tree
    "MerkleTree",
    "MerklePath",
    "ZERO_VALUE",
    "zero_hashes",
]
