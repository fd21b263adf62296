"""Prover-side witness construction.

Turns a deposit note and the prover's copy of the commitment tree into the
(witness, statement) pair the relation evaluates.
"""

import logging
from typing import Optional, Tuple

from withdraw_spec.primitives.merkle_tree import MerkleTree

from .config import RelationConfig
from .data import PublicStatement, Witness
from .note import Note

logger = logging.getLogger(__name__)


def build_witness(
    note: Note,
    tree: MerkleTree,
    index: Optional[int] = None,
    config: Optional[RelationConfig] = None,
) -> Tuple[Witness, PublicStatement]:
    """
    Build the withdrawal witness for a note deposited in tree.

    Args:
        note: The deposit note
        tree: Prover's copy of the commitment tree
        index: Leaf index of the deposit; looked up by commitment when omitted
        config: Relation shape (defaults to the tree depth and the note width)

    Returns:
        (witness, statement) with statement.root = tree.root

    Raises:
        ValueError: If the tree depth or note width does not match config,
                    or the commitment is not in the tree
    """
    if config is None:
        config = RelationConfig(levels=tree.levels, n_bits=note.n_bits)
    if tree.levels != config.levels:
        raise ValueError(f"tree has {tree.levels} levels, relation expects {config.levels}")
    if note.n_bits != config.n_bits:
        raise ValueError(f"note is {note.n_bits}-bit, relation expects {config.n_bits}")

    commitment = note.commitment
    if index is None:
        try:
            index = tree.index_of(commitment)
        except ValueError:
            raise ValueError("note commitment is not in the tree") from None

    path = tree.path(index)
    witness = Witness(
        nullifier=note.nullifier,
        secret=note.secret,
        path_elements=path.path_elements,
        path_indices=path.path_indices,
    )
    witness.validate(config)

    statement = PublicStatement(root=tree.root, nullifier_tag=note.nullifier_tag)
    logger.info("built witness for leaf %d: root=%d nullifier_tag=%d",
                index, statement.root, statement.nullifier_tag)
    return witness, statement
