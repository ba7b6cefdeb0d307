from collections import Counter

from pisplit.factor import build_sieve, factor_product, g_factors, odd_factors, p_factors
from pisplit.splitter import base_triple


def _odd_part(n):
    while n % 2 == 0:
        n //= 2
    return n


def test_sieve_smallest_prime_factor():
    spf = build_sieve(100)
    assert spf[97] == 97
    assert spf[91] == 7
    assert spf[81] == 3
    assert spf[2] == 2
    assert all(spf[n] == n for n in (3, 5, 7, 11, 13))


def test_odd_factors_drop_twos():
    spf = build_sieve(1000)
    assert odd_factors(360, spf) == Counter({3: 2, 5: 1})
    assert odd_factors(64, spf) == Counter()
    assert odd_factors(1, spf) == Counter()
    assert odd_factors(45, spf, 3) == Counter({3: 6, 5: 3})


def test_base_factorisations_match_the_triple():
    spf = build_sieve(6 * 50)
    for b in range(1, 50):
        t = base_triple(b)
        assert factor_product(p_factors(b, spf)) == _odd_part(t.p)
        assert factor_product(g_factors(b, spf)) == t.g


def test_factor_product():
    assert factor_product(Counter()) == 1
    assert factor_product(Counter({3: 2, 7: 1})) == 63
    primes = [p for p, s in enumerate(build_sieve(2000)) if p > 2 and s == p]
    expected = 1
    for p in primes:
        expected *= p
    assert factor_product(Counter(dict.fromkeys(primes, 1))) == expected
