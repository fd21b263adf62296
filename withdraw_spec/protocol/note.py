"""Deposit notes.

A note is the (nullifier, secret) pair a depositor keeps to withdraw later.
Its text form is

    withdraw-note-<n_bits>-0x<preimage hex>

where the preimage is nullifier || secret, each little-endian in
ceil(n_bits / 8) bytes.
"""

import re
import secrets
from dataclasses import dataclass, field
from typing import Optional

from withdraw_spec.constraints.errors import OutOfRangeSecret
from withdraw_spec.witness.withdraw import derive_commitment, derive_nullifier_tag

from .config import DEFAULT_N_BITS, RelationConfig

NOTE_PREFIX = "withdraw-note"

_NOTE_PATTERN = re.compile(rf"^{NOTE_PREFIX}-(?P<n_bits>\d+)-0x(?P<preimage>[0-9a-fA-F]+)$")


@dataclass(frozen=True)
class Note:
    """A deposit note.

    Attributes:
        nullifier: Nullifier half, < 2^n_bits
        secret: Secret half, < 2^n_bits
        n_bits: Width both halves are decomposed to
    """
    nullifier: int = field(repr=False)
    secret: int = field(repr=False)
    n_bits: int = DEFAULT_N_BITS

    def __post_init__(self) -> None:
        for name in ("nullifier", "secret"):
            value = getattr(self, name)
            if not 0 <= value < (1 << self.n_bits):
                raise OutOfRangeSecret(f"note.{name}", f"{name} must be in [0, 2^{self.n_bits})")

    @classmethod
    def random(cls, config: Optional[RelationConfig] = None) -> "Note":
        """Fresh note with uniformly random nullifier and secret."""
        n_bits = (config or RelationConfig()).n_bits
        return cls(secrets.randbits(n_bits), secrets.randbits(n_bits), n_bits)

    @property
    def byte_length(self) -> int:
        return (self.n_bits + 7) // 8

    @property
    def preimage(self) -> bytes:
        return (
            self.nullifier.to_bytes(self.byte_length, "little")
            + self.secret.to_bytes(self.byte_length, "little")
        )

    @property
    def commitment(self) -> int:
        return derive_commitment(self.nullifier, self.secret, self.n_bits)

    @property
    def nullifier_tag(self) -> int:
        return derive_nullifier_tag(self.nullifier, self.n_bits)

    def __str__(self) -> str:
        return f"{NOTE_PREFIX}-{self.n_bits}-0x{self.preimage.hex()}"

    @classmethod
    def parse(cls, text: str) -> "Note":
        """Inverse of str(note).

        Raises:
            ValueError: If text is not a note string
            OutOfRangeSecret: If a half does not fit the declared width
        """
        match = _NOTE_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"not a {NOTE_PREFIX} string")
        n_bits = int(match["n_bits"])
        preimage = bytes.fromhex(match["preimage"])
        byte_length = (n_bits + 7) // 8
        if len(preimage) != 2 * byte_length:
            raise ValueError(
                f"preimage must be {2 * byte_length} bytes for {n_bits}-bit notes, got {len(preimage)}"
            )
        nullifier = int.from_bytes(preimage[:byte_length], "little")
        secret = int.from_bytes(preimage[byte_length:], "little")
        return cls(nullifier, secret, n_bits)
