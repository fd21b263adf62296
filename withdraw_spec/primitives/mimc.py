"""
MiMC-Feistel sponge over the BN254 scalar field.

The pair hasher of the withdrawal relation: a two-input, one-output sponge
built on a 220-round Feistel permutation with S-box x^5. The round count and
the key (0) are protocol constants; changing either changes every Merkle root.

Round constants are derived from the seed "mimcsponge": the seed is hashed
with keccak256, then each constant is keccak256 of the previous digest,
reduced mod p. The first and last constants are zero.
"""

from typing import List, Sequence, Tuple

from .field import BN254_PRIME, keccak256

# --- Protocol Constants ---

MIMC_SEED = b"mimcsponge"
MIMC_ROUNDS = 220
MIMC_KEY = 0


def _derive_constants(seed: bytes, n_rounds: int) -> List[int]:
    constants = [0] * n_rounds
    digest = keccak256(seed)
    for i in range(1, n_rounds):
        digest = keccak256(digest)
        constants[i] = int.from_bytes(digest, "big") % BN254_PRIME
    constants[n_rounds - 1] = 0
    return constants


MIMC_CONSTANTS: List[int] = _derive_constants(MIMC_SEED, MIMC_ROUNDS)


# --- Permutation ---

def mimc_feistel(x_left: int, x_right: int, key: int = MIMC_KEY) -> Tuple[int, int]:
    """
    Apply the MiMC Feistel permutation to (x_left, x_right).

    Each round computes t = x_left + key + c[i] and
    (x_left, x_right) <- (x_right + t^5, x_left); the last round does not
    swap and only updates x_right.

    Args:
        x_left: Left lane (field element as int)
        x_right: Right lane (field element as int)
        key: Permutation key

    Returns:
        (x_left, x_right) after MIMC_ROUNDS rounds
    """
    p = BN254_PRIME
    for i in range(MIMC_ROUNDS - 1):
        t = (x_left + key + MIMC_CONSTANTS[i]) % p
        x_left, x_right = (x_right + pow(t, 5, p)) % p, x_left
    t = (x_left + key + MIMC_CONSTANTS[MIMC_ROUNDS - 1]) % p
    x_right = (x_right + pow(t, 5, p)) % p
    return x_left, x_right


# --- Sponge ---

def mimc_sponge(inputs: Sequence[int], key: int = MIMC_KEY, n_outputs: int = 1) -> List[int]:
    """
    Absorb inputs into the rate lane and squeeze n_outputs elements.

    Args:
        inputs: Field elements to absorb, in order
        key: Permutation key
        n_outputs: Number of output elements

    Returns:
        List of n_outputs field elements
    """
    if n_outputs < 1:
        raise ValueError(f"n_outputs must be >= 1, got {n_outputs}")

    rate, capacity = 0, 0
    for value in inputs:
        rate = (rate + value) % BN254_PRIME
        rate, capacity = mimc_feistel(rate, capacity, key)

    outputs = [rate]
    for _ in range(n_outputs - 1):
        rate, capacity = mimc_feistel(rate, capacity, key)
        outputs.append(rate)
    return outputs


def hash_pair(left: int, right: int) -> int:
    """Merkle node hash H(left, right). Order-sensitive."""
    return mimc_sponge([left, right], MIMC_KEY, 1)[0]
