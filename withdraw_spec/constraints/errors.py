"""Constraint violation taxonomy.

Every violation is terminal for the evaluation that raised it: the relation
is unsatisfiable for that witness and the prover has to regenerate it.
"""


class ConstraintViolation(ValueError):
    """A constraint of the relation does not hold.

    Attributes:
        label: Name of the violated constraint (e.g. 'merkle.level3.mux.boolean')
    """

    def __init__(self, label: str, message: str | None = None):
        self.label = label
        super().__init__(message or f"constraint '{label}' violated")


class MalformedWitness(ConstraintViolation):
    """A direction bit or decomposition bit is not boolean, or bits do not match."""


class OutOfRangeSecret(ConstraintViolation):
    """Nullifier or secret does not fit the decomposition width."""


class InclusionMismatch(ConstraintViolation):
    """The root computed from the authentication path differs from the public root."""


class NullifierTagMismatch(ConstraintViolation):
    """The nullifier tag computed from the nullifier differs from the public tag."""
