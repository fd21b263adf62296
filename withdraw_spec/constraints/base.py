"""Base classes for constraint evaluation.

Gadgets compute their outputs from witness values and enforce every relation
those values must satisfy through a ConstraintContext. The context decides
what a violation means:

    StrictConstraintContext       first violation raises (one verdict)
    CollectingConstraintContext   records all violations (diagnostics)

Both count the enforced constraints per label, which gives the shape of the
constraint system independently of whether a particular witness satisfies it.

Example:
    def eval_gadget(ctx: ConstraintContext, s):
        ctx.enforce_boolean(s, 'mux.boolean')
        ...

    eval_gadget(StrictConstraintContext(), FF(1))
"""

import re
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, List, Type

import numpy as np

from withdraw_spec.primitives.field import FF

from .errors import ConstraintViolation, MalformedWitness


class ConstraintContext(ABC):
    """Uniform interface for enforcing constraints on field values."""

    def __init__(self) -> None:
        self.counts: Counter = Counter()

    def enforce_zero(
        self, expr: FF, label: str, error: Type[ConstraintViolation] = ConstraintViolation
    ) -> None:
        """Enforce expr == 0 elementwise.

        Args:
            expr: Scalar or array of field elements
            label: Constraint name, reported on violation and used for counting
            error: Violation class raised or recorded when the constraint fails
        """
        values = np.asarray(expr).ravel().tolist()
        self.counts[label] += len(values)
        failing = [i for i, v in enumerate(values) if v != 0]
        if failing:
            name = label if np.ndim(expr) == 0 else f"{label}[{failing[0]}]"
            self._on_violation(error(name))

    def enforce_equal(
        self, lhs: FF, rhs: FF, label: str, error: Type[ConstraintViolation] = ConstraintViolation
    ) -> None:
        """Enforce lhs == rhs elementwise."""
        self.enforce_zero(lhs - rhs, label, error)

    def enforce_boolean(
        self, value: FF, label: str, error: Type[ConstraintViolation] = MalformedWitness
    ) -> None:
        """Enforce value * (1 - value) == 0, i.e. value in {0, 1}."""
        self.enforce_zero(value * (FF(1) - value), label, error)

    @property
    def n_constraints(self) -> int:
        return sum(self.counts.values())

    def report(self) -> Dict[str, int]:
        """Constraint counts grouped by gadget.

        The last label component is dropped and level numbers collapse, so
        'merkle.level3.mux.boolean' counts towards 'merkle.level*.mux'.
        """
        grouped: Counter = Counter()
        for label, count in self.counts.items():
            grouped[re.sub(r"level\d+", "level*", label.rsplit(".", 1)[0])] += count
        return dict(sorted(grouped.items()))

    @abstractmethod
    def _on_violation(self, error: ConstraintViolation) -> None:
        pass


class StrictConstraintContext(ConstraintContext):
    """Raises the first violation. Satisfiability is binary."""

    def _on_violation(self, error: ConstraintViolation) -> None:
        raise error


class CollectingConstraintContext(ConstraintContext):
    """Records every violation and keeps evaluating."""

    def __init__(self) -> None:
        super().__init__()
        self.violations: List[ConstraintViolation] = []

    @property
    def satisfied(self) -> bool:
        return not self.violations

    def _on_violation(self, error: ConstraintViolation) -> None:
        self.violations.append(error)


class ConstraintModule(ABC):
    """A relation whose constraints are evaluated through a ConstraintContext."""

    @abstractmethod
    def enforce(self, ctx: ConstraintContext, *args, **kwargs):
        """Enforce all constraints of the relation and return its outputs."""
        pass
