"""
Pytest configuration and shared fixtures for withdraw_spec tests.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from withdraw_spec.primitives.merkle_tree import MerkleTree  # noqa: E402
from withdraw_spec.protocol.config import RelationConfig  # noqa: E402
from withdraw_spec.protocol.note import Note  # noqa: E402
from withdraw_spec.protocol.prover import build_witness  # noqa: E402

# Shallow tree so MiMC work per test stays small
TEST_LEVELS = 4


@pytest.fixture
def config() -> RelationConfig:
    return RelationConfig(levels=TEST_LEVELS)


@pytest.fixture
def note() -> Note:
    return Note(nullifier=123456789, secret=987654321)


@pytest.fixture
def tree(note: Note) -> MerkleTree:
    """Tree with the note's commitment at index 3 among unrelated leaves."""
    return MerkleTree(TEST_LEVELS, leaves=[11, 22, 33, note.commitment, 44])


@pytest.fixture
def valid_pair(note, tree, config):
    """(witness, statement) for the note in the tree."""
    return build_witness(note, tree, config=config)
