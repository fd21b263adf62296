"""Witness generation modules.

Each relation has a WitnessModule computing the intermediate values the
prover supplies next to its private inputs.
"""

from .base import WitnessModule, decompose
from .withdraw import WithdrawWitness, derive_commitment, derive_nullifier_tag

__all__ = [
    'WitnessModule',
    'WithdrawWitness',
    'decompose',
    'derive_commitment',
    'derive_nullifier_tag',
]
