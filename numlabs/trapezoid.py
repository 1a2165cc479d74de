"""Composite trapezoid rule for exp(x), split across worker threads."""

from __future__ import annotations

import math
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence


def func(x: float) -> float:
    """The integrand, e**x."""
    return math.exp(x)


def composite_trapezoid(a: float, b: float, n: int, h: float) -> float:
    """Trapezoid rule over [a, b] using n panels of width h."""
    total = 0.5 * (func(a) + func(b))
    for i in range(1, n):
        total += func(a + i * h)
    return h * total


def parallel_trapezoid(a: float, b: float, n: int, num_workers: int) -> float:
    """Trapezoid rule over [a, b] with n panels shared evenly among workers."""
    if num_workers < 1:
        raise ValueError("number of workers must be positive")
    if n <= 0:
        raise ValueError("N should be positive")
    if n % num_workers != 0:
        raise ValueError("N should be exactly divisible by the number of workers")
    h = (b - a) / n
    local_n = n // num_workers

    def work(rank: int) -> float:
        local_a = a + (rank * local_n) * h
        local_b = local_a + local_n * h
        return composite_trapezoid(local_a, local_b, local_n, h)

    with ThreadPoolExecutor(max_workers=num_workers) as pool:
        return sum(pool.map(work, range(num_workers)))


def _usage(prog: str) -> str:
    return (
        f" usage : {prog} <a> <b> <N > [workers]\n"
        " N should be positive \n"
        " N should be exactly divisible by the number of workers \n"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: <a> <b> <N> [workers]; integrates e**x and reports the error."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (3, 4):
        sys.stderr.write(_usage("trapezoid"))
        return 1
    try:
        a = float(args[0])
        b = float(args[1])
        n = int(args[2])
        workers = int(args[3]) if len(args) == 4 else 1
        start = time.perf_counter()
        total = parallel_trapezoid(a, b, n, workers)
        elapsed = time.perf_counter() - start
    except ValueError:
        sys.stderr.write(_usage("trapezoid"))
        return 1

    exact = math.exp(b) - math.exp(a)
    error = abs(exact - total) / abs(exact) if exact != 0.0 else abs(total)
    print(
        f" NP = {workers:2d}, N = {n}, T = {total:20.13e}, "
        f"|T-Tex |/| Tex| = {error:20.13e}"
    )
    print(f" Elapsed time = {elapsed:20.13e}")
    return 0