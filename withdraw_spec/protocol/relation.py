"""Withdrawal relation: the single entry point for evaluating witnesses.

Usage:
    relation = WithdrawalRelation(RelationConfig(levels=20))
    commitment, nullifier_tag = relation.derive(witness)
    result = relation.evaluate(witness, statement)
    if not result:
        print(result.failure, result.failed_constraint)

evaluate() is a pure function of its inputs; a relation object holds no
per-evaluation state and can be shared between threads.
"""

import logging
from typing import Dict, List, Optional, Tuple

from withdraw_spec.constraints.base import (
    CollectingConstraintContext,
    ConstraintContext,
    StrictConstraintContext,
)
from withdraw_spec.constraints.errors import ConstraintViolation
from withdraw_spec.constraints.withdraw import WithdrawConstraints, WithdrawOutputs
from withdraw_spec.witness.withdraw import WithdrawWitness

from .config import RelationConfig
from .data import EvaluationResult, PublicStatement, Witness

logger = logging.getLogger(__name__)


class WithdrawalRelation:
    """Satisfiability predicate over (root, nullifier_tag; nullifier, secret, path)."""

    def __init__(self, config: Optional[RelationConfig] = None):
        self.config = config or RelationConfig()
        self.constraints = WithdrawConstraints(self.config)
        self.witness_module = WithdrawWitness(self.config.n_bits)

    def __repr__(self) -> str:
        return f"WithdrawalRelation(levels={self.config.levels}, n_bits={self.config.n_bits})"

    # --- Witness Side ---

    def derive(self, witness: Witness) -> Tuple[int, int]:
        """(commitment, nullifier_tag) for the note held by witness.

        Raises:
            OutOfRangeSecret: If nullifier or secret does not fit n_bits
        """
        return self.witness_module.derive(witness.nullifier, witness.secret)

    # --- Constraint Side ---

    def _enforce(
        self, ctx: ConstraintContext, witness: Witness, statement: PublicStatement
    ) -> WithdrawOutputs:
        intermediates = self.witness_module.compute_intermediates(witness)
        return self.constraints.enforce(ctx, statement, witness, intermediates)

    def check(self, witness: Witness, statement: PublicStatement) -> WithdrawOutputs:
        """Enforce the relation, raising the first violated constraint.

        Raises:
            ConstraintViolation: If the relation is not satisfied
            ValueError: If the witness shape does not match the relation
        """
        return self._enforce(StrictConstraintContext(), witness, statement)

    def diagnose(self, witness: Witness, statement: PublicStatement) -> List[ConstraintViolation]:
        """All violated constraints, in evaluation order (empty if satisfied)."""
        ctx = CollectingConstraintContext()
        self._enforce(ctx, witness, statement)
        return ctx.violations

    def evaluate(self, witness: Witness, statement: PublicStatement) -> EvaluationResult:
        """Evaluate the relation and return the verdict with the derived values.

        The derived commitment and nullifier tag are reported even when the
        relation fails; the failure fields name the first violated constraint.

        Raises:
            ValueError: If the witness shape does not match the relation
        """
        ctx = CollectingConstraintContext()
        outputs = self._enforce(ctx, witness, statement)

        if ctx.satisfied:
            logger.debug(
                "relation satisfied: root=%d nullifier_tag=%d", statement.root, statement.nullifier_tag
            )
            return EvaluationResult(
                satisfied=True,
                commitment=outputs.commitment,
                nullifier_tag=outputs.nullifier_tag,
            )

        first = ctx.violations[0]
        logger.warning(
            "relation unsatisfied (%s at %s, %d violations): root=%d nullifier_tag=%d",
            type(first).__name__, first.label, len(ctx.violations),
            statement.root, statement.nullifier_tag,
        )
        return EvaluationResult(
            satisfied=False,
            commitment=outputs.commitment,
            nullifier_tag=outputs.nullifier_tag,
            failure=type(first).__name__,
            failed_constraint=first.label,
        )

    def constraint_report(self) -> Dict[str, int]:
        """Constraints enforced per gadget for one evaluation of this relation."""
        levels = self.config.levels
        witness = Witness(nullifier=0, secret=0, path_elements=[0] * levels, path_indices=[0] * levels)
        ctx = CollectingConstraintContext()
        self._enforce(ctx, witness, PublicStatement(root=0, nullifier_tag=0))
        return ctx.report()
