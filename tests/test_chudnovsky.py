import pytest

from pisplit.chudnovsky import chudnovsky_pi_decimal_string, compute_pi, decimal_size


PI_80 = "3.14159265358979323846264338327950288419716939937510582097494459230781640628620899"


def test_chudnovsky_pi_prefix():
    s = chudnovsky_pi_decimal_string(80, workers=1)
    assert s == PI_80


def test_short_outputs_are_prefixes():
    assert chudnovsky_pi_decimal_string(0) == "3."
    for d in range(1, 81):
        s = chudnovsky_pi_decimal_string(d)
        assert len(s) == d + 2
        assert s == PI_80[: d + 2]


def test_reference_100_digits():
    s = chudnovsky_pi_decimal_string(100)
    assert len(s) == 102
    assert s.startswith(PI_80)
    assert s[-10:] == "3421170679"


def test_reference_10000_digits():
    s = chudnovsky_pi_decimal_string(10000, workers=4, executor="thread")
    assert len(s) == 10002
    assert s[-10:] == "5256375678"


def test_factored_split_gives_the_same_digits():
    expected = chudnovsky_pi_decimal_string(3000)
    assert chudnovsky_pi_decimal_string(3000, factor=True) == expected
    assert chudnovsky_pi_decimal_string(3000, workers=3, executor="thread", factor=True) == expected
    assert chudnovsky_pi_decimal_string(3000, workers=2, executor="process", factor=True) == expected


@pytest.mark.slow
def test_reference_500000_digits():
    serial = chudnovsky_pi_decimal_string(500000)
    assert len(serial) == 500002
    assert serial[-10:] == "5138195242"
    assert chudnovsky_pi_decimal_string(500000, workers=3, executor="thread") == serial


@pytest.mark.slow
def test_reference_1000000_digits():
    s = chudnovsky_pi_decimal_string(1000000, workers=4, executor="process")
    assert len(s) == 1000002
    assert s[-10:] == "5779458151"


def test_thread_count_invariance():
    expected = chudnovsky_pi_decimal_string(1500, workers=1)
    for workers in (2, 3, 5, 8, 200):
        assert chudnovsky_pi_decimal_string(1500, workers=workers, executor="thread") == expected


def test_process_executor_matches_serial():
    expected = chudnovsky_pi_decimal_string(700)
    assert chudnovsky_pi_decimal_string(700, workers=3, executor="process") == expected


def test_deterministic():
    assert chudnovsky_pi_decimal_string(333, workers=4, executor="thread") == chudnovsky_pi_decimal_string(
        333, workers=4, executor="thread"
    )


def test_prefix_stability():
    short = chudnovsky_pi_decimal_string(150)
    long = chudnovsky_pi_decimal_string(400)
    assert long[:142] == short[:142]


def test_compute_pi_reports_plan_and_sizes():
    result = compute_pi(1000, workers=200, executor="thread")
    assert result.plan.iters_needed == 71
    assert result.plan.threads == 71
    assert result.text[:82] == PI_80
    assert result.p_digits > 1000
    assert result.q_digits > 1000
    assert set(result.timings) == {"split", "reduce", "assemble", "render", "total"}


def test_invalid_arguments():
    with pytest.raises(ValueError):
        chudnovsky_pi_decimal_string(-1)
    with pytest.raises(ValueError):
        chudnovsky_pi_decimal_string(10, workers=0)
    with pytest.raises(ValueError):
        chudnovsky_pi_decimal_string(10, executor="gpu")


def test_decimal_size():
    assert decimal_size(0) == 1
    assert decimal_size(9) == 1
    assert decimal_size(10) == 2
    assert decimal_size(10**50) == 51
    assert decimal_size(-(10**20)) == 21
    assert decimal_size(10**5000) in (5001, 5002)
