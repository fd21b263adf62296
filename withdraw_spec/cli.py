"""Command line interface.

    withdraw-spec note                      create a random deposit note
    withdraw-spec witness --note N --leaves leaves.json
                                            write input.json / public.json for a note
    withdraw-spec evaluate --input input.json
                                            evaluate the relation (exit 1 if unsatisfied)
    withdraw-spec info                      constraint counts per gadget
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from withdraw_spec.primitives.merkle_tree import MerkleTree
from withdraw_spec.protocol.config import DEFAULT_LEVELS, DEFAULT_N_BITS, RelationConfig
from withdraw_spec.protocol.interchange import read_input, read_public, write_input, write_public
from withdraw_spec.protocol.note import Note
from withdraw_spec.protocol.prover import build_witness
from withdraw_spec.protocol.relation import WithdrawalRelation

logger = logging.getLogger(__name__)


def _config(args: argparse.Namespace) -> RelationConfig:
    return RelationConfig(levels=args.levels, n_bits=args.n_bits)


def cmd_note(args: argparse.Namespace) -> int:
    note = Note.random(_config(args))
    print(f"note:          {note}")
    print(f"commitment:    {note.commitment}")
    print(f"nullifierHash: {note.nullifier_tag}")
    return 0


def cmd_witness(args: argparse.Namespace) -> int:
    note = Note.parse(args.note)
    with open(args.leaves) as f:
        leaves = json.load(f)
    if not isinstance(leaves, list):
        raise ValueError(f"{args.leaves} must contain a JSON list of leaves")

    tree = MerkleTree(args.levels, leaves=leaves)
    config = RelationConfig(levels=args.levels, n_bits=note.n_bits)
    witness, statement = build_witness(note, tree, index=args.index, config=config)

    write_input(args.out_input, witness, statement)
    write_public(args.out_public, statement)
    logger.info("wrote %s and %s", args.out_input, args.out_public)
    return 0


def cmd_evaluate(args: argparse.Namespace) -> int:
    witness, statement = read_input(args.input)
    if args.public is not None:
        public = read_public(args.public)
        if public != statement:
            print("public.json does not match the public signals of input.json", file=sys.stderr)
            return 1

    relation = WithdrawalRelation(_config(args))
    result = relation.evaluate(witness, statement)
    print(f"satisfied:     {result.satisfied}")
    print(f"commitment:    {result.commitment}")
    print(f"nullifierHash: {result.nullifier_tag}")
    if not result.satisfied:
        if args.all:
            for violation in relation.diagnose(witness, statement):
                print(f"violation:     {type(violation).__name__} at {violation.label}")
        else:
            print(f"violation:     {result.failure} at {result.failed_constraint}")
    return 0 if result.satisfied else 1


def cmd_info(args: argparse.Namespace) -> int:
    relation = WithdrawalRelation(_config(args))
    report = relation.constraint_report()
    print(f"# levels: {relation.config.levels}, n_bits: {relation.config.n_bits}")
    for gadget, count in report.items():
        print(f"{gadget:32s} {count}")
    print(f"{'total':32s} {sum(report.values())}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="withdraw-spec",
        description="Shielded-pool withdrawal relation tools",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_shape(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--levels", type=int, default=DEFAULT_LEVELS,
                         help=f"Merkle tree depth (default: {DEFAULT_LEVELS})")
        sub.add_argument("--n-bits", type=int, default=DEFAULT_N_BITS,
                         help=f"Nullifier/secret width (default: {DEFAULT_N_BITS})")

    note = subparsers.add_parser("note", help="Create a random deposit note")
    add_shape(note)
    note.set_defaults(func=cmd_note)

    witness = subparsers.add_parser("witness", help="Build input.json/public.json for a note")
    witness.add_argument("--note", required=True, help="Note string")
    witness.add_argument("--leaves", type=Path, required=True,
                         help="JSON list of tree leaves (commitments) in insertion order")
    witness.add_argument("--index", type=int, default=None,
                         help="Leaf index of the deposit (looked up by commitment if omitted)")
    witness.add_argument("--levels", type=int, default=DEFAULT_LEVELS,
                         help=f"Merkle tree depth (default: {DEFAULT_LEVELS})")
    witness.add_argument("--out-input", type=Path, default=Path("input.json"))
    witness.add_argument("--out-public", type=Path, default=Path("public.json"))
    witness.set_defaults(func=cmd_witness)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate the relation on input.json")
    evaluate.add_argument("--input", type=Path, required=True, help="input.json path")
    evaluate.add_argument("--public", type=Path, default=None,
                          help="public.json to cross-check against input.json")
    evaluate.add_argument("--all", action="store_true", help="List every violated constraint")
    add_shape(evaluate)
    evaluate.set_defaults(func=cmd_evaluate)

    info = subparsers.add_parser("info", help="Constraint counts per gadget")
    add_shape(info)
    info.set_defaults(func=cmd_info)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
