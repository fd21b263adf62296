"""Merkle inclusion gadget.

Folds a leaf and its authentication path into a root:

    acc = leaf
    for i in range(levels):
        left, right = dual_mux(acc, path_elements[i], path_indices[i])
        acc = H(left, right)
    acc == root

Each level depends on the previous accumulator, so levels are evaluated in
sequence.
"""

from typing import Sequence

from withdraw_spec.primitives.field import FF

from .base import ConstraintContext
from .errors import InclusionMismatch
from .hashers import hash_left_right
from .mux import dual_mux


def merkle_tree_checker(
    ctx: ConstraintContext,
    leaf: FF,
    root: FF,
    path_elements: Sequence[FF],
    path_indices: Sequence[FF],
) -> FF:
    """
    Enforce that leaf is included under root.

    Args:
        ctx: Constraint context
        leaf: Leaf value
        root: Expected root
        path_elements: Sibling at each level, leaf level first
        path_indices: Direction bit at each level (1 = current node is the right child)

    Returns:
        The root computed from the path

    Raises:
        ValueError: If path_elements and path_indices differ in length
    """
    if len(path_elements) != len(path_indices):
        raise ValueError(
            f"Length mismatch: {len(path_elements)} path elements but "
            f"{len(path_indices)} path indices"
        )

    acc = leaf
    for level, (sibling, index) in enumerate(zip(path_elements, path_indices)):
        left, right = dual_mux(ctx, acc, sibling, index, f"merkle.level{level}.mux")
        acc = hash_left_right(left, right)

    ctx.enforce_equal(acc, root, "merkle.root", InclusionMismatch)
    return acc
