import logging
import math
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List

from .assemble import assemble, truncate_digits
from .partition import EXECUTOR_KINDS, make_executor, split_lanes
from .plan import PrecisionPlan, plan_precision
from .reduction import reduce_ordered
from .splitter import Triple, merge


logger = logging.getLogger(__name__)

_LOG10_2 = math.log10(2)
# Stays under CPython's default int-to-str digit limit.
_EXACT_SIZE_BITS = 4096


@dataclass(frozen=True)
class PiResult:
    text: str
    plan: PrecisionPlan
    p_digits: int
    q_digits: int
    timings: Dict[str, float] = field(default_factory=dict)


def decimal_size(n: int) -> int:
    """Count of decimal digits in `n`; past a few thousand bits it may be one too many."""
    n = abs(n)
    bits = n.bit_length()
    if bits <= _EXACT_SIZE_BITS:
        return len(str(n))
    return int(bits * _LOG10_2) + 1


def _reduce_lanes(lanes: List[Triple], pool: Executor, kind: str) -> Triple:
    if kind == "thread":
        return reduce_ordered(lanes, merge, pool.submit)

    def combine(left: Triple, right: Triple) -> Triple:
        return pool.submit(merge, left, right).result()

    # Worker processes cannot fork back into the parent, so the tree itself
    # is walked on parent threads and only the merges cross the pool.
    with ThreadPoolExecutor(max_workers=len(lanes)) as forks:
        return reduce_ordered(lanes, combine, forks.submit)


def compute_pi(digits: int, workers: int = 1, executor: str = "process", factor: bool = False) -> PiResult:
    executor = (executor or "process").lower().strip()
    if executor not in EXECUTOR_KINDS:
        raise ValueError("unsupported executor")
    plan = plan_precision(digits, workers)
    logger.debug(
        "terms=%d, depth=%d, workers=%d, prec=%d bits",
        plan.iters_needed,
        plan.depth,
        plan.threads,
        plan.target_bit_precision,
    )
    timings = {}
    begin = time.perf_counter()
    if plan.threads == 1:
        lanes = split_lanes(plan, factor=factor)
        timings["split"] = time.perf_counter() - begin
        mark = time.perf_counter()
        triple = reduce_ordered(lanes, merge)
    else:
        with make_executor(executor, plan.threads) as pool:
            lanes = split_lanes(plan, pool, factor)
            timings["split"] = time.perf_counter() - begin
            logger.debug("combining %d lanes", len(lanes))
            mark = time.perf_counter()
            triple = _reduce_lanes(lanes, pool, executor)
    timings["reduce"] = time.perf_counter() - mark
    p_digits = decimal_size(triple.p)
    q_digits = decimal_size(triple.q)

    logger.debug("calculating final result")
    mark = time.perf_counter()
    value = assemble(triple, plan)
    timings["assemble"] = time.perf_counter() - mark
    mark = time.perf_counter()
    text = truncate_digits(value, plan.digits, plan.target_bit_precision)
    timings["render"] = time.perf_counter() - mark
    timings["total"] = time.perf_counter() - begin
    return PiResult(text=text, plan=plan, p_digits=p_digits, q_digits=q_digits, timings=timings)


def chudnovsky_pi_decimal_string(
    digits_after_point: int, workers: int = 1, executor: str = "process", factor: bool = False
) -> str:
    return compute_pi(digits_after_point, workers=workers, executor=executor, factor=factor).text
