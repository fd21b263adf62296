"""JSON interchange in circom/snarkjs conventions.

input.json holds every relation input by signal name, field elements as
decimal strings:

    {"root": "...", "nullifierHash": "...", "nullifier": "...", "secret": "...",
     "pathElements": ["...", ...], "pathIndices": ["0", "1", ...]}

public.json lists the public signals in declaration order: [root, nullifierHash].
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .data import PublicStatement, Witness

PUBLIC_SIGNALS = ("root", "nullifierHash")
PRIVATE_SIGNALS = ("nullifier", "secret", "pathElements", "pathIndices")


def dump_input(witness: Witness, statement: PublicStatement) -> Dict[str, Any]:
    return {
        "root": str(statement.root),
        "nullifierHash": str(statement.nullifier_tag),
        "nullifier": str(witness.nullifier),
        "secret": str(witness.secret),
        "pathElements": [str(e) for e in witness.path_elements],
        "pathIndices": [str(i) for i in witness.path_indices],
    }


def load_input(data: Dict[str, Any]) -> Tuple[Witness, PublicStatement]:
    """Parse an input.json mapping.

    Raises:
        ValueError: If a signal is missing or a value is not a field element
    """
    missing = [name for name in PUBLIC_SIGNALS + PRIVATE_SIGNALS if name not in data]
    if missing:
        raise ValueError(f"input is missing signals: {missing}")
    for name in ("pathElements", "pathIndices"):
        if not isinstance(data[name], list):
            raise ValueError(f"{name} must be a list")

    statement = PublicStatement(root=data["root"], nullifier_tag=data["nullifierHash"])
    witness = Witness(
        nullifier=data["nullifier"],
        secret=data["secret"],
        path_elements=data["pathElements"],
        path_indices=data["pathIndices"],
    )
    return witness, statement


def dump_public(statement: PublicStatement) -> List[str]:
    return [str(statement.root), str(statement.nullifier_tag)]


def load_public(data: List[Union[int, str]]) -> PublicStatement:
    if not isinstance(data, list) or len(data) != len(PUBLIC_SIGNALS):
        raise ValueError(f"public signals must be a list of {len(PUBLIC_SIGNALS)} values")
    return PublicStatement(root=data[0], nullifier_tag=data[1])


# --- Files ---

def write_input(path: Path, witness: Witness, statement: PublicStatement) -> None:
    with open(path, "w") as f:
        json.dump(dump_input(witness, statement), f, indent=2)


def read_input(path: Path) -> Tuple[Witness, PublicStatement]:
    with open(path) as f:
        return load_input(json.load(f))


def write_public(path: Path, statement: PublicStatement) -> None:
    with open(path, "w") as f:
        json.dump(dump_public(statement), f, indent=2)


def read_public(path: Path) -> PublicStatement:
    with open(path) as f:
        return load_public(json.load(f))
