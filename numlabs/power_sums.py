"""Timing of threaded truncated power sums over a random vector."""

from __future__ import annotations

import math
import random
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence

from .matrix import Vector


def _open_unit(rng: random.Random) -> float:
    while True:
        value = rng.random()
        if value > 0.0:
            return value


def fill_random_vector(size: int, rng: Optional[random.Random] = None) -> Vector:
    """Return a vector of the given size with values strictly between 0 and 1."""
    if size <= 0:
        raise ValueError("vector size must be positive")
    rng = rng if rng is not None else random.Random()
    return Vector([_open_unit(rng) for _ in range(size)])


def _power_sum(value: float, degree: int) -> float:
    total = 0.0
    for j in range(degree + 1):
        total += value ** j
    return total


def power_sums(values: Iterable[float], degree: int, num_threads: int = 1) -> list:
    """Return sum(v**j for j in 0..degree) for each value, split over threads."""
    if num_threads < 1:
        raise ValueError("number of threads must be positive")
    items = list(values)
    step = max(1, math.ceil(len(items) / num_threads))
    chunks = [items[i:i + step] for i in range(0, len(items), step)]

    def work(chunk: list) -> list:
        return [_power_sum(v, degree) for v in chunk]

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        parts = list(pool.map(work, chunks))
    return [value for part in parts for value in part]


def make_output_vector(num_threads: int, vector_size: int, degree_k: int) -> float:
    """Time the power sums of a random vector and report the elapsed seconds."""
    vector = fill_random_vector(vector_size)
    start = time.perf_counter()
    power_sums(vector, degree_k, num_threads)
    elapsed = time.perf_counter() - start
    print(f"With {num_threads} threads , clock_time = {elapsed:11.5e} (sec)")
    return elapsed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: <num_threads> <vector_size> <degree_k>."""
    args = list(sys.argv[1:] if argv is None else argv)
    usage = "usage: power_sums <num_threads> <vector_size> <degree_k>"
    if len(args) != 3:
        print(usage, file=sys.stderr)
        return 1
    try:
        num_threads, vector_size, degree_k = (int(a) for a in args)
        make_output_vector(num_threads, vector_size, degree_k)
    except ValueError as exc:
        print(f"{usage}\n{exc}", file=sys.stderr)
        return 1
    return 0