"""Tests for concurrent batch evaluation."""

from withdraw_spec.protocol.batch import evaluate_batch
from withdraw_spec.protocol.data import PublicStatement


def test_empty_batch(config) -> None:
    assert evaluate_batch([], config) == []


def test_results_in_input_order(valid_pair, config) -> None:
    witness, statement = valid_pair
    bad = PublicStatement(root=statement.root ^ 1, nullifier_tag=statement.nullifier_tag)
    items = [(witness, statement), (witness, bad), (witness, statement), (witness, bad)]

    results = evaluate_batch(items, config, max_workers=2)
    assert [r.satisfied for r in results] == [True, False, True, False]
    assert results[1].failure == "InclusionMismatch"


def test_process_pool(valid_pair, config) -> None:
    witness, statement = valid_pair
    results = evaluate_batch([(witness, statement)] * 2, config, max_workers=2, use_processes=True)
    assert all(results)
    assert results[0] == results[1]
