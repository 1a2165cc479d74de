import math

import pytest

from numlabs.trapezoid import composite_trapezoid, func, main, parallel_trapezoid


def test_func_is_exponential():
    assert func(0.0) == 1.0
    assert func(1.0) == pytest.approx(math.e)


def test_parallel_matches_single_worker():
    whole = composite_trapezoid(0.0, 1.0, 8, 1.0 / 8)
    assert parallel_trapezoid(0.0, 1.0, 8, 4) == pytest.approx(whole)
    assert parallel_trapezoid(0.0, 1.0, 8, 1) == pytest.approx(whole)


def test_converges_to_exact_integral():
    exact = math.exp(1.0) - 1.0
    result = parallel_trapezoid(0.0, 1.0, 4000, 4)
    assert abs(result - exact) / exact < 1.0e-6


def test_overestimates_convex_integrand():
    exact = math.exp(2.0) - math.exp(-1.0)
    assert parallel_trapezoid(-1.0, 2.0, 30, 3) > exact


def test_error_shrinks_with_more_panels():
    exact = math.exp(1.0) - 1.0
    coarse = abs(parallel_trapezoid(0.0, 1.0, 10, 2) - exact)
    fine = abs(parallel_trapezoid(0.0, 1.0, 20, 2) - exact)
    assert fine < coarse


@pytest.mark.parametrize("n, workers", [(7, 2), (0, 1), (-4, 2), (4, 0)])
def test_invalid_arguments(n, workers):
    with pytest.raises(ValueError):
        parallel_trapezoid(0.0, 1.0, n, workers)


def test_main_reports(capsys):
    assert main(["0", "1", "8", "2"]) == 0
    out = capsys.readouterr().out
    assert "NP =  2, N = 8" in out
    assert "Elapsed time" in out


def test_main_rejects_indivisible(capsys):
    assert main(["0", "1", "7", "2"]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_rejects_wrong_count(capsys):
    assert main(["0", "1"]) == 1
    assert "usage" in capsys.readouterr().err