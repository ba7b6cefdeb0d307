from collections import Counter
from typing import List


# C^3 / 24 without its powers of two: 3^2 * 5^3 * 23^3 * 29^3.
C3_OVER_24_ODD = Counter({3: 2, 5: 3, 23: 3, 29: 3})


def build_sieve(n: int) -> List[int]:
    """Smallest prime factor of every integer up to `n`."""
    n = max(int(n), 1)
    spf = list(range(n + 1))
    i = 2
    while i * i <= n:
        if spf[i] == i:
            for j in range(i * i, n + 1, i):
                if spf[j] == j:
                    spf[j] = i
        i += 1
    return spf


def odd_factors(n: int, sieve: List[int], power: int = 1) -> Counter:
    # G is always odd, so factors of two never cancel and are not tracked.
    n >>= (n & -n).bit_length() - 1
    out = Counter()
    while n > 1:
        p = sieve[n]
        n //= p
        out[p] += power
    return out


def p_factors(b: int, sieve: List[int]) -> Counter:
    return odd_factors(b, sieve, 3) + C3_OVER_24_ODD


def g_factors(b: int, sieve: List[int]) -> Counter:
    return odd_factors(2 * b - 1, sieve) + odd_factors(6 * b - 1, sieve) + odd_factors(6 * b - 5, sieve)


def factor_product(factors: Counter) -> int:
    values = [p**e for p, e in sorted(factors.items())]
    if not values:
        return 1
    return _product(values, 0, len(values))


def _product(values, lo, hi):
    if hi - lo <= 32:
        out = 1
        for v in values[lo:hi]:
            out *= v
        return out
    mid = (lo + hi) // 2
    return _product(values, lo, mid) * _product(values, mid, hi)
