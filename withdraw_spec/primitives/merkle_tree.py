"""Fixed-depth append-only Merkle tree using the MiMC pair hash.

This is the client-side tree a prover keeps to extract authentication paths.
Empty leaves hold ZERO_VALUE = keccak256("tornado") mod p and an empty subtree
of height i hashes to zeros[i], where zeros[i + 1] = H(zeros[i], zeros[i]).
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from .field import keccak_to_field, to_field
from .mimc import hash_pair

# --- Constants ---

ZERO_VALUE = keccak_to_field(b"tornado")


def zero_hashes(levels: int, zero_value: int = ZERO_VALUE) -> List[int]:
    """Roots of empty subtrees: result[i] is the root of an empty height-i tree."""
    zeros = [zero_value]
    for _ in range(levels):
        zeros.append(hash_pair(zeros[-1], zeros[-1]))
    return zeros


# --- Data Classes ---

@dataclass
class MerklePath:
    """Authentication path for one leaf.

    Attributes:
        path_elements: Sibling hash at each level, leaf level first
        path_indices: 0 if the current node is a left child, 1 if right
    """
    path_elements: List[int] = field(default_factory=list)
    path_indices: List[int] = field(default_factory=list)

    @property
    def leaf_index(self) -> int:
        return sum(bit << i for i, bit in enumerate(self.path_indices))


# --- Merkle Tree ---

class MerkleTree:
    """Append-only binary Merkle tree of fixed depth."""

    def __init__(self, levels: int, leaves: Iterable[int] = (), zero_value: int = ZERO_VALUE):
        if levels < 1:
            raise ValueError(f"levels must be >= 1, got {levels}")
        self.levels = levels
        self.capacity = 1 << levels
        self.zeros = zero_hashes(levels, zero_value)
        # layers[0] are the leaves, layers[levels] holds the root once non-empty
        self.layers: List[List[int]] = [[] for _ in range(levels + 1)]
        self.bulk_insert(leaves)

    def __len__(self) -> int:
        return len(self.layers[0])

    @property
    def leaves(self) -> List[int]:
        return list(self.layers[0])

    @property
    def root(self) -> int:
        top = self.layers[self.levels]
        return top[0] if top else self.zeros[self.levels]

    # --- Mutation ---

    def insert(self, leaf: int) -> int:
        """Append a leaf and return its index."""
        if len(self) >= self.capacity:
            raise ValueError(f"tree is full ({self.capacity} leaves)")
        index = len(self)
        self.layers[0].append(to_field(leaf))
        self._update_path(index)
        return index

    def bulk_insert(self, leaves: Iterable[int]) -> None:
        for leaf in leaves:
            self.insert(leaf)

    def _update_path(self, index: int) -> None:
        for level in range(self.levels):
            index >>= 1
            left = self._node(level, 2 * index)
            right = self._node(level, 2 * index + 1)
            parent = hash_pair(left, right)
            layer = self.layers[level + 1]
            if index < len(layer):
                layer[index] = parent
            else:
                layer.append(parent)

    def _node(self, level: int, index: int) -> int:
        layer = self.layers[level]
        return layer[index] if index < len(layer) else self.zeros[level]

    # --- Queries ---

    def index_of(self, leaf: int) -> int:
        """Index of the first occurrence of leaf. Raises ValueError if absent."""
        return self.layers[0].index(leaf)

    def path(self, index: int) -> MerklePath:
        """Authentication path for the leaf at index."""
        if not 0 <= index < len(self):
            raise ValueError(f"index {index} out of range for tree with {len(self)} leaves")
        elements = []
        indices = []
        for level in range(self.levels):
            elements.append(self._node(level, index ^ 1))
            indices.append(index & 1)
            index >>= 1
        return MerklePath(path_elements=elements, path_indices=indices)
