from typing import Optional

from mpmath import mp
from mpmath.libmp import numeral

from .plan import BITS_PER_DIGIT, PrecisionPlan
from .splitter import A, C, D, Triple


def assemble(triple: Triple, plan: PrecisionPlan):
    # pi = P * (C / D) * sqrt(C) / (Q + A * P); A * P is the k = 0 term.
    q = triple.q + A * triple.p
    p = triple.p * (C // D)
    with mp.workprec(plan.target_bit_precision):
        return (mp.mpf(p) / mp.mpf(q)) * mp.sqrt(C)


def truncate_digits(value, digits: int, prec: Optional[int] = None) -> str:
    # The extra bits make the scaling by 10**digits exact.
    digits = int(digits)
    if digits < 0:
        raise ValueError("digits must be >= 0")
    if prec is None:
        prec = mp.prec
    with mp.workprec(int(prec) + int(digits * BITS_PER_DIGIT) + 8):
        scaled = int(mp.floor(value * (10**digits)))
    head, tail = divmod(scaled, 10**digits)
    if not digits:
        return f"{head}."
    return f"{head}." + numeral(tail, 10, size=digits).rjust(digits, "0")


def render_pi(triple: Triple, plan: PrecisionPlan) -> str:
    return truncate_digits(assemble(triple, plan), plan.digits, plan.target_bit_precision)
