"""Base class for witness generation."""

from abc import ABC, abstractmethod
from typing import Dict

from withdraw_spec.primitives.field import FF


class WitnessModule(ABC):
    """Per-relation witness generation. Used by the prover only.

    A witness module computes the intermediate values a prover has to supply
    alongside its private inputs (bit decompositions and similar). Unlike a
    ConstraintModule it never checks anything: the constraint module decides
    whether the values it is handed are acceptable.
    """

    @abstractmethod
    def compute_intermediates(self, witness) -> Dict[str, FF]:
        """Compute intermediate signals for a witness.

        Returns:
            Dictionary mapping signal names to field arrays.
            Example: {'nullifier_bits': FF([...]), 'secret_bits': FF([...])}
        """
        pass


def decompose(value: int, n_bits: int) -> list[int]:
    """Little-endian n_bits-bit decomposition of value.

    Fixed-length shift/mask loop; bits above n_bits are dropped, so an
    out-of-range value yields bits that fail reconstruction.
    """
    return [(value >> i) & 1 for i in range(n_bits)]
