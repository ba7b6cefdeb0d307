import logging
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import List, Optional, Tuple

from .plan import PrecisionPlan
from .splitter import Triple, binary_split


logger = logging.getLogger(__name__)

EXECUTOR_KINDS = ("process", "thread")


def lane_bounds(terms: int, lanes: int) -> List[Tuple[int, int]]:
    """Cut [0, terms) into `lanes` contiguous ranges; the last one takes the remainder."""
    terms = int(terms)
    lanes = int(lanes)
    if lanes < 1:
        raise ValueError("lanes must be >= 1")
    if terms < 0:
        raise ValueError("terms must be >= 0")
    width = terms // lanes
    bounds = []
    for i in range(lanes):
        start = i * width
        end = terms if i == lanes - 1 else (i + 1) * width
        bounds.append((start, end))
    return bounds


def make_executor(kind: str, workers: int) -> Executor:
    kind = (kind or "process").lower().strip()
    if kind == "process":
        return ProcessPoolExecutor(max_workers=workers)
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    raise ValueError("unsupported executor")


def _split_lane(job: Tuple[int, int, bool, int]) -> Triple:
    a, b, factor, level = job
    logger.debug("lane [%d, %d) started", a, b)
    result = binary_split(a, b, factor, level)
    logger.debug("lane [%d, %d) finished", a, b)
    return result


def split_lanes(plan: PrecisionPlan, executor: Optional[Executor] = None, factor: bool = False) -> List[Triple]:
    """Evaluate every lane of the plan and return the triples in lane order."""
    ranges = lane_bounds(plan.iters_needed, plan.threads)
    logger.debug("lanes: %s", ranges)
    # Lanes start below the levels the lane merges themselves would occupy.
    level = (plan.threads - 1).bit_length()
    jobs = [(a, b, factor, level) for a, b in ranges]
    if executor is None:
        return [_split_lane(job) for job in jobs]
    return list(executor.map(_split_lane, jobs))
