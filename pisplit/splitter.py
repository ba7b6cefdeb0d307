from collections import Counter
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .factor import build_sieve, factor_product, g_factors, p_factors


A = 13591409
B = 545140134
C = 640320
D = 12
C3_OVER_24 = (C**3) // 24

# Term cost grows with the index, so the left half gets slightly more terms.
SPLIT_RATIO = 0.5224
# Shallow merges are few and their gcds cost more than they save.
GCD_MIN_LEVEL = 4


@dataclass(frozen=True)
class Triple:
    p: int
    q: int
    g: int


IDENTITY = Triple(1, 0, 1)


def base_triple(b: int) -> Triple:
    g = (6 * b - 5) * (2 * b - 1) * (6 * b - 1)
    p = b * b * b * C3_OVER_24
    q = g * (A + B * b)
    if b & 1:
        q = -q
    return Triple(p, q, g)


def merge(left: Triple, right: Triple) -> Triple:
    # Not commutative: Q takes the left G and the right P.
    return Triple(
        left.p * right.p,
        left.q * right.p + right.q * left.g,
        left.g * right.g,
    )


def split_point(a: int, b: int) -> int:
    return a + int((b - a) * SPLIT_RATIO)


def stack_size(n: int) -> int:
    if n < 1:
        raise ValueError("range must hold at least one term")
    return (n - 1).bit_length() + 1


def node_slot(a: int, b: int, lo: int, hi: int) -> int:
    # Left children reuse their parent's slot, right children take the next one.
    top = 0
    while (a, b) != (lo, hi):
        if b - a < 2 or not (a <= lo < hi <= b):
            raise ValueError(f"[{lo}, {hi}) is not a node of [{a}, {b})")
        m = split_point(a, b)
        if hi <= m:
            b = m
        elif lo >= m:
            a = m
            top += 1
        else:
            raise ValueError(f"[{lo}, {hi}) is not a node of [{a}, {b})")
    return top


def iter_nodes(a: int, b: int, top: int = 0) -> Iterator[Tuple[int, int, int]]:
    yield a, b, top
    if b - a > 1:
        m = split_point(a, b)
        yield from iter_nodes(a, m, top)
        yield from iter_nodes(m, b, top + 1)


class SplitStack:
    """Index-addressed arena of triples for one lane.

    A merge consumes slot ``top + 1`` into slot ``top`` and clears it. With a
    sieve, the odd factorisations of P and G ride along in parallel slots and
    gcd(P(m, b), G(a, m)) is divided out of deep merges; that scales the whole
    triple by one common factor and leaves Q / P and G / P unchanged.
    """

    def __init__(self, size: int, sieve: Optional[List[int]] = None):
        size = int(size)
        if size < 1:
            raise ValueError("stack size must be >= 1")
        self._slots: List[Optional[Triple]] = [None] * size
        self._sieve = sieve
        if sieve is not None:
            self._fp: List[Optional[Counter]] = [None] * size
            self._fg: List[Optional[Counter]] = [None] * size

    @classmethod
    def for_range(cls, a: int, b: int, factor: bool = False) -> "SplitStack":
        sieve = build_sieve(6 * b) if factor else None
        return cls(stack_size(b - a), sieve)

    @property
    def factored(self) -> bool:
        return self._sieve is not None

    def __len__(self) -> int:
        return len(self._slots)

    def peek(self, top: int) -> Triple:
        value = self._slots[top]
        if value is None:
            raise LookupError(f"stack slot {top} is empty")
        return value

    def take(self, top: int) -> Triple:
        value = self.peek(top)
        self._slots[top] = None
        if self._sieve is not None:
            self._fp[top] = self._fg[top] = None
        return value

    def split(self, a: int, b: int, top: int = 0, level: int = 0) -> None:
        if b - a == 1:
            self._slots[top] = base_triple(b)
            if self._sieve is not None:
                self._fp[top] = p_factors(b, self._sieve)
                self._fg[top] = g_factors(b, self._sieve)
            return
        m = split_point(a, b)
        self.split(a, m, top, level + 1)
        self.split(m, b, top + 1, level + 1)
        if self._sieve is None:
            right = self.take(top + 1)
            self._slots[top] = merge(self._slots[top], right)
            return
        if level >= GCD_MIN_LEVEL:
            self._remove_common(top)
        fp = self._fp[top] + self._fp[top + 1]
        fg = self._fg[top] + self._fg[top + 1]
        right = self.take(top + 1)
        self._slots[top] = merge(self._slots[top], right)
        self._fp[top] = fp
        self._fg[top] = fg

    def _remove_common(self, top: int) -> None:
        common = self._fp[top + 1] & self._fg[top]
        if not common:
            return
        d = factor_product(common)
        left = self._slots[top]
        right = self._slots[top + 1]
        self._slots[top] = Triple(left.p, left.q, left.g // d)
        self._slots[top + 1] = Triple(right.p // d, right.q, right.g)
        self._fg[top] -= common
        self._fp[top + 1] -= common


def binary_split(a: int, b: int, factor: bool = False, level: int = 0) -> Triple:
    if b < a:
        raise ValueError("range end must be >= range start")
    if b == a:
        return IDENTITY
    stack = SplitStack.for_range(a, b, factor)
    stack.split(a, b, 0, level)
    return stack.take(0)
