"""Data structures exchanged with the relation.

    Witness            private inputs held by the prover
    PublicStatement    public inputs shared with the verifier
    EvaluationResult   verdict plus the derived public values

All values are ints validated into [0, p) on construction. Witnesses are
scoped to one evaluation; the secret halves are kept out of repr().
"""

from dataclasses import dataclass, field
from typing import List, Optional

from withdraw_spec.constraints.errors import MalformedWitness, OutOfRangeSecret
from withdraw_spec.primitives.field import to_field, to_field_list

from .config import RelationConfig


@dataclass(frozen=True)
class PublicStatement:
    """Public inputs: Merkle root and nullifier tag.

    Attributes:
        root: Root of the commitment tree
        nullifier_tag: Tag published to prevent spending the same note twice
    """
    root: int
    nullifier_tag: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", to_field(self.root))
        object.__setattr__(self, "nullifier_tag", to_field(self.nullifier_tag))


@dataclass
class Witness:
    """Private inputs for one withdrawal.

    Attributes:
        nullifier: Nullifier half of the note
        secret: Secret half of the note
        path_elements: Sibling hash at each level, leaf level first
        path_indices: Direction bit at each level (1 = current node is the right child)
    """
    nullifier: int = field(repr=False)
    secret: int = field(repr=False)
    path_elements: List[int] = field(default_factory=list)
    path_indices: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.nullifier = to_field(self.nullifier)
        self.secret = to_field(self.secret)
        self.path_elements = to_field_list(self.path_elements)
        self.path_indices = to_field_list(self.path_indices)

    @property
    def levels(self) -> int:
        return len(self.path_elements)

    def validate(self, config: RelationConfig) -> None:
        """Reject a witness that can never satisfy the relation.

        Meant for client code building witnesses, so bad inputs surface before
        any proving work starts.

        Raises:
            ValueError: If the path does not have config.levels entries
            OutOfRangeSecret: If nullifier or secret does not fit n_bits
            MalformedWitness: If a path index is not 0 or 1
        """
        if len(self.path_elements) != config.levels or len(self.path_indices) != config.levels:
            raise ValueError(
                f"path must have {config.levels} levels, got {len(self.path_elements)} "
                f"elements and {len(self.path_indices)} indices"
            )
        if self.nullifier > config.max_secret:
            raise OutOfRangeSecret("witness.nullifier", f"nullifier does not fit in {config.n_bits} bits")
        if self.secret > config.max_secret:
            raise OutOfRangeSecret("witness.secret", f"secret does not fit in {config.n_bits} bits")
        for level, index in enumerate(self.path_indices):
            if index not in (0, 1):
                raise MalformedWitness(f"witness.path_indices[{level}]", f"path index {index} is not boolean")


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one relation evaluation.

    Attributes:
        satisfied: True iff every constraint holds
        commitment: Commitment derived from the witness (None if derivation failed)
        nullifier_tag: Nullifier tag derived from the witness (None if derivation failed)
        failure: Name of the violation class when unsatisfied
        failed_constraint: Label of the violated constraint when unsatisfied
    """
    satisfied: bool
    commitment: Optional[int] = None
    nullifier_tag: Optional[int] = None
    failure: Optional[str] = None
    failed_constraint: Optional[str] = None

    def __bool__(self) -> bool:
        return self.satisfied
