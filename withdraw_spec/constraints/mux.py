"""Dual multiplexer (selector) gadget."""

from typing import Tuple

from withdraw_spec.primitives.field import FF

from .base import ConstraintContext
from .errors import MalformedWitness


def dual_mux(ctx: ConstraintContext, in0: FF, in1: FF, s: FF, label: str) -> Tuple[FF, FF]:
    """
    Order (in0, in1) by the selector bit s.

    Enforces s * (1 - s) = 0 and computes

        out0 = (in1 - in0) * s + in0
        out1 = (in0 - in1) * s + in1

    so (out0, out1) = (in0, in1) for s = 0 and (in1, in0) for s = 1.

    Returns:
        (out0, out1)
    """
    ctx.enforce_boolean(s, f"{label}.boolean", MalformedWitness)
    out0 = (in1 - in0) * s + in0
    out1 = (in0 - in1) * s + in1
    return out0, out1
