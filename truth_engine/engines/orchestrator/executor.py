"""Pass executor for contradiction detection.

Runs the detection passes over one read-only DetectionContext, either
sequentially or on a thread pool. Results are always gathered back in pass
order so the combined output does not depend on scheduling.
"""

import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import structlog

from truth_engine.engines.base import ContradictionPass, DetectionContext
from truth_engine.models.contradiction import Contradiction

logger = structlog.get_logger(__name__)


@dataclass
class PassResult:
    """Output and timing of one detection pass."""

    name: str
    contradictions: list[Contradiction] = field(default_factory=list)
    execution_time_ms: int = 0


class PassExecutor:
    """Execute detection passes with optional parallelism.

    Example:
        >>> executor = PassExecutor(max_workers=4)
        >>> results = executor.execute(default_passes(), context)
        >>> [r.name for r in results]
        ['direct', 'semantic', 'timeline', 'entity', 'cross_entity']
    """

    def __init__(self, max_workers: int = 1) -> None:
        """Initialize the executor.

        Args:
            max_workers: Thread pool size. 1 or less runs passes sequentially.
        """
        self.max_workers = max(1, max_workers)

    def execute(
        self,
        passes: Sequence[ContradictionPass],
        context: DetectionContext,
    ) -> list[PassResult]:
        """Run every pass over the context.

        Args:
            passes: Passes in their fixed order.
            context: Shared read-only snapshot.

        Returns:
            One PassResult per pass, in the order of ``passes``.

        Raises:
            Exception: Any error raised by a pass is logged and re-raised.
        """
        if not passes:
            return []

        start_time = time.time()

        if self.max_workers == 1 or len(passes) == 1:
            results = [self._run_pass(detection_pass, context) for detection_pass in passes]
        else:
            results = self._run_parallel(passes, context)

        logger.info(
            "detection_passes_complete",
            pass_count=len(passes),
            max_workers=self.max_workers,
            contradictions_found=sum(len(r.contradictions) for r in results),
            wall_clock_time_ms=int((time.time() - start_time) * 1000),
        )
        return results

    def _run_parallel(
        self,
        passes: Sequence[ContradictionPass],
        context: DetectionContext,
    ) -> list[PassResult]:
        slots: list[PassResult | None] = [None] * len(passes)

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(passes))) as executor:
            futures = {
                executor.submit(self._run_pass, detection_pass, context): i
                for i, detection_pass in enumerate(passes)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    slots[index] = future.result()
                except Exception as e:
                    logger.error(
                        "detection_pass_failed",
                        pass_name=passes[index].name,
                        error=str(e),
                    )
                    raise

        return [result for result in slots if result is not None]

    @staticmethod
    def _run_pass(detection_pass: ContradictionPass, context: DetectionContext) -> PassResult:
        start_time = time.time()
        contradictions = detection_pass.detect(context)
        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.debug(
            "detection_pass_complete",
            pass_name=detection_pass.name,
            contradictions_found=len(contradictions),
            execution_time_ms=execution_time_ms,
        )
        return PassResult(
            name=detection_pass.name,
            contradictions=contradictions,
            execution_time_ms=execution_time_ms,
        )
