import math
from dataclasses import dataclass


DIGITS_PER_TERM = 14.1816474627254776555
BITS_PER_DIGIT = 3.32192809488736234787
GUARD_BITS = 16


@dataclass(frozen=True)
class PrecisionPlan:
    digits: int
    iters_needed: int
    depth: int
    target_bit_precision: int
    threads: int


def terms_for_digits(digits: int) -> int:
    return int(math.ceil(digits / DIGITS_PER_TERM))


def depth_for_terms(terms: int) -> int:
    depth = 0
    while (1 << depth) < terms:
        depth += 1
    return depth + 1


def plan_precision(digits: int, threads: int = 1) -> PrecisionPlan:
    """Derive term count, recursion depth and working precision for `digits`.

    The worker count is clamped to the number of terms so no lane is empty;
    a zero-term plan still gets one worker.
    """
    digits = int(digits)
    if digits < 0:
        raise ValueError("digits must be >= 0")
    threads = int(threads)
    if threads < 1:
        raise ValueError("threads must be >= 1")
    iters = terms_for_digits(digits)
    return PrecisionPlan(
        digits=digits,
        iters_needed=iters,
        depth=depth_for_terms(iters),
        target_bit_precision=int(digits * BITS_PER_DIGIT) + GUARD_BITS,
        threads=max(1, min(threads, iters)),
    )
