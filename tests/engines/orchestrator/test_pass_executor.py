"""Tests for sequential and parallel pass execution."""

import threading
import time
from collections.abc import Callable

import pytest

from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.engines.contradiction import default_passes
from truth_engine.engines.orchestrator import PassExecutor
from truth_engine.models.contradiction import Contradiction
from truth_engine.models.statement import Statement


class SlowPass(ContradictionPass):
    """Pass that sleeps so later passes finish first on a pool."""

    name = "slow"

    def __init__(self, delay: float) -> None:
        super().__init__()
        self.delay = delay

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        time.sleep(self.delay)
        return []


class FailingPass(ContradictionPass):
    name = "failing"

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        raise RuntimeError("pass exploded")


class ThreadRecordingPass(ContradictionPass):
    name = "recording"

    def __init__(self, seen: set[str]) -> None:
        super().__init__()
        self.seen = seen

    def detect(self, context: DetectionContext) -> list[Contradiction]:
        self.seen.add(threading.current_thread().name)
        return []


@pytest.fixture
def context(
    make_statement: Callable[..., Statement],
    make_context: Callable[..., DetectionContext],
) -> DetectionContext:
    return make_context(
        [
            make_statement("I signed the contract", statement_id="s-1"),
            make_statement("I never signed the contract", statement_id="s-2"),
        ]
    )


class TestPassExecutor:
    """Tests for PassExecutor."""

    def test_no_passes(self, context: DetectionContext) -> None:
        assert PassExecutor().execute([], context) == []

    def test_sequential_results_in_pass_order(self, context: DetectionContext) -> None:
        results = PassExecutor(max_workers=1).execute(default_passes(), context)

        assert [r.name for r in results] == [
            "direct",
            "semantic",
            "timeline",
            "entity",
            "cross_entity",
        ]
        assert len(results[0].contradictions) == 1

    def test_parallel_results_keep_pass_order(self, context: DetectionContext) -> None:
        passes = [SlowPass(0.05), *default_passes()]

        results = PassExecutor(max_workers=4).execute(passes, context)

        assert [r.name for r in results] == ["slow"] + [p.name for p in default_passes()]

    def test_parallel_matches_sequential(self, context: DetectionContext) -> None:
        sequential = PassExecutor(max_workers=1).execute(default_passes(), context)
        parallel = PassExecutor(max_workers=3).execute(default_passes(), context)

        assert [[c.contradiction_id for c in r.contradictions] for r in parallel] == [
            [c.contradiction_id for c in r.contradictions] for r in sequential
        ]

    def test_parallel_runs_off_main_thread(self, context: DetectionContext) -> None:
        seen: set[str] = set()

        PassExecutor(max_workers=2).execute(
            [ThreadRecordingPass(seen), ThreadRecordingPass(seen)], context
        )

        assert threading.main_thread().name not in seen

    def test_failure_propagates(self, context: DetectionContext) -> None:
        with pytest.raises(RuntimeError, match="pass exploded"):
            PassExecutor(max_workers=2).execute([FailingPass(), SlowPass(0.0)], context)

    def test_worker_count_floor(self) -> None:
        assert PassExecutor(max_workers=0).max_workers == 1
