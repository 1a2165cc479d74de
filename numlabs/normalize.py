"""Max-norm and two-norm normalisation of a vector with threaded workers."""

from __future__ import annotations

import math
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence


@dataclass(frozen=True)
class NormalizationResult:
    """Outcome of one normalisation run."""

    num_threads: int
    norm: float
    values: tuple
    clock_time: float

    @property
    def first(self) -> float:
        return self.values[0]

    @property
    def last(self) -> float:
        return self.values[-1]


def _validate(num_threads: int, n: int) -> None:
    if num_threads < 1:
        raise ValueError("number of threads must be positive")
    if n < 1:
        raise ValueError("vector size must be positive")


def _spans(n: int, parts: int) -> list:
    """Split range(n) into `parts` contiguous slices whose sizes differ by at most one."""
    base, extra = divmod(n, parts)
    spans = []
    start = 0
    for rank in range(parts):
        stop = start + base + (1 if rank < extra else 0)
        spans.append(slice(start, stop))
        start = stop
    return spans


def _divide(values: list, span: slice, norm: float) -> None:
    for i in range(span.start, span.stop):
        values[i] /= norm


def _run_fine(num_threads: int, values: list,
              partial: Callable[[Iterable[float]], float],
              combine: Callable[[Iterable[float]], float],
              finalize: Callable[[float], float]) -> float:
    spans = _spans(len(values), num_threads)
    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        norm = finalize(combine(pool.map(lambda s: partial(values[s]), spans)))
        list(pool.map(lambda s: _divide(values, s, norm), spans))
    return norm


def _run_coarse(num_threads: int, values: list,
                partial: Callable[[Iterable[float]], float],
                combine: Callable[[float, float], float],
                finalize: Callable[[float], float]) -> float:
    """Each worker owns len(values) // num_threads entries; any remainder is untouched."""
    per_thread = len(values) // num_threads
    lock = threading.Lock()
    barrier = threading.Barrier(num_threads)
    norm = 0.0

    def worker(rank: int) -> None:
        nonlocal norm
        span = range(rank * per_thread, (rank + 1) * per_thread)
        local = partial(values[i] for i in span)
        with lock:
            norm = combine(norm, local)
        if barrier.wait() == 0:
            norm = finalize(norm)
        barrier.wait()
        for i in span:
            values[i] /= norm

    threads = [threading.Thread(target=worker, args=(r,)) for r in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return norm


def _max_of(items: Iterable[float]) -> float:
    return max(items, default=0.0)


def _sum_squares(items: Iterable[float]) -> float:
    return sum(v * v for v in items)


def _timed(runner: Callable, num_threads: int, values: list, *ops) -> NormalizationResult:
    start = time.perf_counter()
    norm = runner(num_threads, values, *ops)
    elapsed = time.perf_counter() - start
    return NormalizationResult(num_threads, norm, tuple(values), elapsed)


def max_normalize_fine(num_threads: int, n: int) -> NormalizationResult:
    """Divide the vector 1..n by its largest entry, splitting every loop over threads."""
    _validate(num_threads, n)
    values = [float(i) for i in range(1, n + 1)]
    return _timed(_run_fine, num_threads, values,
                  _max_of, lambda parts: max(0.0, _max_of(parts)), float)


def max_normalize_coarse(num_threads: int, n: int) -> NormalizationResult:
    """Divide the vector 1..n by its largest entry, each thread owning a fixed block."""
    _validate(num_threads, n)
    values = [float(i) for i in range(1, n + 1)]
    return _timed(_run_coarse, num_threads, values, _max_of, max, float)


def two_normalize_fine(num_threads: int, n: int) -> NormalizationResult:
    """Divide a vector of n ones by its Euclidean norm, splitting every loop over threads."""
    _validate(num_threads, n)
    values = [1.0] * n
    return _timed(_run_fine, num_threads, values, _sum_squares, sum, math.sqrt)


def two_normalize_coarse(num_threads: int, n: int) -> NormalizationResult:
    """Divide a vector of n ones by its Euclidean norm, each thread owning a fixed block."""
    _validate(num_threads, n)
    values = [1.0] * n
    return _timed(_run_coarse, num_threads, values,
                  _sum_squares, lambda a, b: a + b, math.sqrt)


def _line(label: str, result: NormalizationResult) -> str:
    return (
        f"{label}[Num Threads: {result.num_threads}, Norm: {result.norm:f}, "
        f"V[0]: {result.first:f}, V[N-1]: {result.last:f}, "
        f"Clock time: {result.clock_time:11.5e}]"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point: <N> <num_threads>; runs all four normalisations."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Wrong number of arguments!", file=sys.stderr)
        return 1
    try:
        n = int(args[0])
        num_threads = int(args[1])
        runs = [
            ("Max norm fine : ", max_normalize_fine),
            ("Two Normal Fine:", two_normalize_fine),
            ("Max norm coarse: ", max_normalize_coarse),
            ("Two Normal Coarse:", two_normalize_coarse),
        ]
        for label, run in runs:
            print(_line(label, run(num_threads, n)))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0