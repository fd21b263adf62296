"""Protocol - relation interface, client-side notes and witness construction."""

from withdraw_spec.protocol.config import DEFAULT_LEVELS, DEFAULT_N_BITS, RelationConfig
from withdraw_spec.protocol.data import EvaluationResult, PublicStatement, Witness
from withdraw_spec.protocol.interchange import (
    dump_input,
    dump_public,
    load_input,
    load_public,
    read_input,
    read_public,
    write_input,
    write_public,
)
from withdraw_spec.protocol.note import Note
from withdraw_spec.protocol.relation import WithdrawalRelation
from withdraw_spec.protocol.prover import build_witness
from withdraw_spec.protocol.batch import evaluate_batch

__all__ = [
    # Configuration and data structures
    "RelationConfig",
    "DEFAULT_LEVELS",
    "DEFAULT_N_BITS",
    "Witness",
    "PublicStatement",
    "EvaluationResult",
    # Relation
    "WithdrawalRelation",
    "evaluate_batch",
    # Client side
    "Note",
    "build_witness",
    # JSON interchange
    "dump_input",
    "load_input",
    "dump_public",
    "load_public",
    "read_input",
    "write_input",
    "read_public",
    "write_public",
]
