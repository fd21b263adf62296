"""Batch evaluation of independent withdrawals.

Evaluations share no state, so a batch is spread over a concurrent.futures
executor with no coordination beyond collecting results in input order.
"""

import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from .config import RelationConfig
from .data import EvaluationResult, PublicStatement, Witness
from .relation import WithdrawalRelation

logger = logging.getLogger(__name__)

BatchItem = Tuple[Witness, PublicStatement]


@lru_cache(maxsize=None)
def _relation_for(config: RelationConfig) -> WithdrawalRelation:
    return WithdrawalRelation(config)


def _evaluate_one(config: RelationConfig, item: BatchItem) -> EvaluationResult:
    witness, statement = item
    return _relation_for(config).evaluate(witness, statement)


def evaluate_batch(
    items: Iterable[BatchItem],
    config: Optional[RelationConfig] = None,
    max_workers: Optional[int] = None,
    use_processes: bool = False,
) -> List[EvaluationResult]:
    """
    Evaluate many (witness, statement) pairs concurrently.

    Args:
        items: Pairs to evaluate
        config: Relation shape shared by every pair
        max_workers: Executor size (executor default when None)
        use_processes: Use a process pool instead of a thread pool. Processes
                       give real parallelism; each worker derives the Pedersen
                       generators once.

    Returns:
        One EvaluationResult per item, in input order
    """
    config = config or RelationConfig()
    items = list(items)
    if not items:
        return []

    executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
    executor: Executor
    with executor_cls(max_workers=max_workers) as executor:
        results = list(executor.map(_evaluate_one, [config] * len(items), items))

    n_satisfied = sum(1 for r in results if r.satisfied)
    logger.info("evaluated batch of %d: %d satisfied, %d unsatisfied",
                len(results), n_satisfied, len(results) - n_satisfied)
    return results
