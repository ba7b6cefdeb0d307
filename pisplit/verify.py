from itertools import islice
from typing import Iterator, Tuple

from mpmath import mp

from .assemble import truncate_digits


VERIFY_METHODS = ("spigot", "mpmath")


def iter_pi_digits() -> Iterator[int]:
    # Streaming spigot: one exact digit per step, 3 first.
    q, r, t, i = 1, 180, 60, 2
    while True:
        u = 3 * (3 * i + 1) * (3 * i + 2)
        y = (q * (27 * i - 12) + 5 * r) // (5 * t)
        yield y
        q, r, t, i = 10 * q * i * (2 * i - 1), 10 * u * (q * (5 * i - 2) + r - y * t), t * u, i + 1


def extract_fractional_digits(display: str) -> str:
    return display.partition(".")[2]


def spigot_prefix(count: int) -> str:
    digits = islice(iter_pi_digits(), 1, int(count) + 1)
    return "".join(map(str, digits))


def mp_prefix(count: int) -> str:
    count = int(count)
    bits = int(count * 3.33) + 128
    with mp.workprec(bits):
        value = +mp.pi
    return extract_fractional_digits(truncate_digits(value, count, bits))


def verify_fractional_digits(fractional_digits: str, samples: int, method: str = "spigot") -> Tuple[bool, str]:
    """Compare the leading fraction digits against an independent source of π.

    Returns ``(ok, method)``; only the first `samples` digits are checked.
    """
    samples = int(samples)
    method = (method or "spigot").lower().strip()
    if method not in VERIFY_METHODS:
        raise ValueError("unsupported verification method")
    if samples <= 0:
        return True, "verification skipped"
    count = min(samples, len(fractional_digits))
    if method == "spigot":
        expected = spigot_prefix(count)
    else:
        expected = mp_prefix(count)
    actual = fractional_digits[:count]
    return expected == actual, f"pi {method}"
