"""Tests for the client-side Merkle tree."""

import pytest

from withdraw_spec.constraints.base import StrictConstraintContext
from withdraw_spec.constraints.merkle import merkle_tree_checker
from withdraw_spec.primitives.field import FF
from withdraw_spec.primitives.merkle_tree import ZERO_VALUE, MerklePath, MerkleTree, zero_hashes
from withdraw_spec.primitives.mimc import hash_pair

COMMITMENT_1_2 = 7849489527905007604036839084543264732139881988616147822667456706423240472196


def test_empty_tree_root() -> None:
    """An empty tree's root is the empty subtree root of its height."""
    tree = MerkleTree(3)
    assert len(tree) == 0
    assert tree.root == 14506027710748750947258687001455876266559341618222612722926156490737302846427
    assert tree.root == zero_hashes(3)[3]


def test_pinned_root() -> None:
    """Root of a depth-3 tree holding [111, commitment(1, 2)]."""
    tree = MerkleTree(3, leaves=[111, COMMITMENT_1_2])
    assert tree.root == 8790263303303964047827718251018673784823158099294210964058829270605349776831

    path = tree.path(1)
    assert path.path_indices == [1, 0, 0]
    assert path.path_elements == [
        111,
        16923532097304556005972200564242292693309333953544141029519619077135960040221,
        7833458610320835472520144237082236871909694928684820466656733259024982655488,
    ]


def test_root_matches_manual_fold() -> None:
    tree = MerkleTree(2)
    tree.bulk_insert([5, 6, 7])
    expected = hash_pair(hash_pair(5, 6), hash_pair(7, ZERO_VALUE))
    assert tree.root == expected


def test_insert_returns_index() -> None:
    tree = MerkleTree(2)
    assert tree.insert(10) == 0
    assert tree.insert("0x14") == 1
    assert tree.leaves == [10, 20]


def test_full_tree_rejects_insert() -> None:
    tree = MerkleTree(1, leaves=[1, 2])
    with pytest.raises(ValueError):
        tree.insert(3)


def test_rejects_bad_levels_and_leaves() -> None:
    with pytest.raises(ValueError):
        MerkleTree(0)
    with pytest.raises(ValueError):
        MerkleTree(2, leaves=[-1])


def test_index_of() -> None:
    tree = MerkleTree(2, leaves=[4, 5, 4])
    assert tree.index_of(4) == 0
    assert tree.index_of(5) == 1
    with pytest.raises(ValueError):
        tree.index_of(6)


def test_path_out_of_range() -> None:
    tree = MerkleTree(2, leaves=[1])
    with pytest.raises(ValueError):
        tree.path(1)
    with pytest.raises(ValueError):
        tree.path(-1)


def test_every_path_verifies() -> None:
    """Paths extracted from the tree satisfy the inclusion gadget."""
    leaves = [3, 1, 4, 1, 5, 9]
    tree = MerkleTree(3, leaves=leaves)
    for index, leaf in enumerate(leaves):
        path = tree.path(index)
        assert path.leaf_index == index
        ctx = StrictConstraintContext()
        merkle_tree_checker(
            ctx,
            FF(leaf),
            FF(tree.root),
            [FF(e) for e in path.path_elements],
            [FF(i) for i in path.path_indices],
        )


def test_path_goes_stale_after_insert() -> None:
    """Inserting a leaf changes the root; old paths no longer open to it."""
    tree = MerkleTree(2, leaves=[1, 2])
    old_root = tree.root
    tree.insert(3)
    assert tree.root != old_root
    assert tree.path(0).path_elements[1] == hash_pair(3, ZERO_VALUE)


def test_merkle_path_leaf_index() -> None:
    assert MerklePath(path_elements=[0, 0, 0], path_indices=[1, 0, 1]).leaf_index == 5
