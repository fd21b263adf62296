"""Structural parameters of the withdrawal relation."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from withdraw_spec.primitives.field import FIELD_BITS

DEFAULT_LEVELS = 20
DEFAULT_N_BITS = 248


@dataclass(frozen=True)
class RelationConfig:
    """Relation shape, fixed at construction time.

    A relation built for one tree depth cannot evaluate witnesses for another;
    `levels` must match the depth of the tree the ledger maintains.

    Attributes:
        levels: Merkle tree depth
        n_bits: Decomposition width of nullifier and secret. Values >= 2^n_bits
                cannot be used (248 leaves 6 bits of the field unused).
    """

    levels: int = DEFAULT_LEVELS
    n_bits: int = DEFAULT_N_BITS

    def __post_init__(self) -> None:
        if isinstance(self.levels, bool) or not isinstance(self.levels, int) or self.levels < 1:
            raise ValueError(f"levels must be a positive int, got {self.levels!r}")
        if isinstance(self.n_bits, bool) or not isinstance(self.n_bits, int):
            raise ValueError(f"n_bits must be an int, got {self.n_bits!r}")
        if not 1 <= self.n_bits < FIELD_BITS:
            raise ValueError(f"n_bits must be in [1, {FIELD_BITS - 1}], got {self.n_bits}")

    @property
    def commitment_bits(self) -> int:
        """Width of the commitment preimage (nullifier bits || secret bits)."""
        return 2 * self.n_bits

    @property
    def max_secret(self) -> int:
        """Largest nullifier or secret value the relation accepts."""
        return (1 << self.n_bits) - 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RelationConfig":
        """Build from a JSON-like mapping; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown RelationConfig keys: {sorted(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> dict:
        return {"levels": self.levels, "n_bits": self.n_bits}
