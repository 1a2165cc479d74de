"""Composite Simpson integration of exp(x), serial and threaded."""

from __future__ import annotations

import math
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence


def func(x: float) -> float:
    """The integrand, e**x."""
    return math.exp(x)


def _check_points(n: int) -> None:
    if n <= 0:
        raise ValueError("number of points must be positive")


def _check_threads(num_threads: int) -> None:
    if num_threads < 1:
        raise ValueError("number of threads must be positive")


def simpson(a: float, b: float, n: int) -> float:
    """Approximate the integral of func over [a, b] with n subintervals."""
    _check_points(n)
    h = (b - a) / n
    total = 0.0
    for i in range(0, n, 2):
        total += func(a + i * h) + 4.0 * func(a + (i + 1) * h) + func(a + (i + 2) * h)
    return total * (h / 3)


def local_simpson(a: float, b: float, n: int, rank: int, thread_count: int) -> float:
    """Simpson sum over the share of the n points assigned to one worker."""
    _check_points(n)
    _check_threads(thread_count)
    h = (b - a) / n
    local_n = n // thread_count
    local_a = a + rank * local_n * h
    total = 0.0
    for i in range(0, local_n, 2):
        total += (
            func(local_a + i * h)
            + 4.0 * func(local_a + (i + 1) * h)
            + func(local_a + (i + 2) * h)
        )
    return total * (h / 3)


def _report(title: str, start: float, end: float, n: int, total: float,
            num_threads: int) -> str:
    return (
        f"{title}"
        f"Time 1: {start:f}, Time 2: {end:f}, N: {n}, T: {total:f}, "
        f"Number Threads: {num_threads}, Total time {end - start:11.5e}"
    )


def critical_simpson(a: float, b: float, n: int, num_threads: int) -> float:
    """Threaded Simpson sum where each worker adds its share under a lock."""
    _check_points(n)
    _check_threads(num_threads)
    total = 0.0
    lock = threading.Lock()

    def worker(rank: int) -> None:
        nonlocal total
        local = local_simpson(a, b, n, rank, num_threads)
        with lock:
            total += local

    start = time.perf_counter()
    threads = [threading.Thread(target=worker, args=(r,)) for r in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    end = time.perf_counter()
    sys.stdout.write(
        _report("Critical zone timings: \n", start, end, n, total, num_threads) + " "
    )
    return total


def reduction_simpson(a: float, b: float, n: int, num_threads: int) -> float:
    """Threaded Simpson sum combined by reducing the workers' results."""
    _check_points(n)
    _check_threads(num_threads)
    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        total = sum(
            pool.map(lambda r: local_simpson(a, b, n, r, num_threads),
                     range(num_threads))
        )
    end = time.perf_counter()
    sys.stdout.write(
        _report("\nReduction timings: \n", start, end, n, total, num_threads) + "\n"
    )
    return total


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: <thread_count> <N>; integrates e**x over [0, 1] both ways."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Wrong number of arguments!")
        return 1
    try:
        thread_count = int(args[0])
        n = int(args[1])
        critical_simpson(0.0, 1.0, n, thread_count)
        reduction_simpson(0.0, 1.0, n, thread_count)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0